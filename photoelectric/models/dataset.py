"""
Experiment Dataset

Append-only record of the readings taken in a session, in measurement
order. Plotting and statistics consumers read point-in-time snapshots, so a
sweep can keep appending while they work.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config.settings import PHYSICS_MODEL_CONFIG
from .sampler import MeasurementStatistics

GroupKey = Tuple[str, float]


@dataclass(frozen=True)
class DataPoint:
    """One aggregated reading, immutable once recorded."""
    voltage: float
    current: float
    error: float
    wavelength: float
    intensity: float
    material: str
    timestamp_iso: str
    raw_measurements: Tuple[float, ...] = field(default_factory=tuple)

    @classmethod
    def from_statistics(
        cls,
        voltage: float,
        stats: MeasurementStatistics,
        wavelength: float,
        intensity: float,
        material: str,
        timestamp_iso: str,
    ) -> "DataPoint":
        """Record a reading: mean as current, standard error as error."""
        return cls(
            voltage=float(voltage),
            current=stats.mean,
            error=stats.standard_error,
            wavelength=float(wavelength),
            intensity=float(intensity),
            material=material,
            timestamp_iso=timestamp_iso,
            raw_measurements=tuple(stats.raw_measurements),
        )

    @property
    def rounds(self) -> int:
        """Number of readings behind this point."""
        return len(self.raw_measurements)

    @property
    def group_key(self) -> GroupKey:
        """Series key: (material name, wavelength)."""
        return (self.material, self.wavelength)


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient of two equal-length sequences.

    Returns 0.0 instead of failing when either sequence has zero variance.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if len(x_arr) == 0 or np.ptp(x_arr) == 0 or np.ptp(y_arr) == 0:
        return 0.0

    dx = x_arr - np.mean(x_arr)
    dy = y_arr - np.mean(y_arr)
    denominator = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if denominator == 0:
        return 0.0
    return float(np.clip(np.sum(dx * dy) / denominator, -1.0, 1.0))


class ExperimentDataset:
    """
    Ordered, append-only collection of DataPoints.

    Only clear() removes points. Every query works on a snapshot taken at
    call time.
    """

    def __init__(self, points: Optional[Iterable[DataPoint]] = None):
        self._points: List[DataPoint] = list(points or [])

    def append(self, point: DataPoint) -> None:
        """Add a point at the end."""
        self._points.append(point)

    def extend(self, points: Iterable[DataPoint]) -> None:
        """Add several points in order."""
        for point in points:
            self.append(point)

    def clear(self) -> None:
        """Remove every point. Irreversible."""
        self._points = []

    def snapshot(self) -> Tuple[DataPoint, ...]:
        """Point-in-time copy of the data in insertion order."""
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[DataPoint]:
        return iter(self.snapshot())

    def __bool__(self) -> bool:
        return bool(self._points)

    def group_by(self, material: str, wavelength: float) -> List[DataPoint]:
        """Points with the given (material, wavelength), in insertion order."""
        return [
            p for p in self.snapshot()
            if p.material == material and p.wavelength == wavelength
        ]

    def groups(self) -> "OrderedDict[GroupKey, List[DataPoint]]":
        """All series keyed by (material, wavelength), in first-seen order."""
        grouped: "OrderedDict[GroupKey, List[DataPoint]]" = OrderedDict()
        for point in self.snapshot():
            grouped.setdefault(point.group_key, []).append(point)
        return grouped

    @staticmethod
    def _sorted_by_voltage(points: Sequence[DataPoint]) -> List[DataPoint]:
        # sorted() is stable, so equal voltages keep measurement order
        return sorted(points, key=lambda p: p.voltage)

    def threshold_voltage(
        self,
        current_epsilon: float = PHYSICS_MODEL_CONFIG["threshold_current_epsilon_na"],
        points: Optional[Sequence[DataPoint]] = None,
    ) -> Optional[float]:
        """
        Lowest voltage whose current exceeds current_epsilon.

        Args:
            current_epsilon: Current (nA) that counts as significant
            points: Points to use (a snapshot of the whole dataset if None)

        Returns:
            The voltage, or None with fewer than 2 points or no such point
        """
        points = self.snapshot() if points is None else tuple(points)
        if len(points) < 2:
            return None
        for point in self._sorted_by_voltage(points):
            if point.current > current_epsilon:
                return point.voltage
        return None

    def correlation(self, points: Optional[Sequence[DataPoint]] = None) -> Optional[float]:
        """
        Pearson correlation of voltage and current.

        Args:
            points: Points to use (a snapshot of the whole dataset if None)

        Returns:
            r in [-1, 1]; 0.0 for zero variance; None with 2 or fewer points
        """
        points = self.snapshot() if points is None else tuple(points)
        if len(points) <= 2:
            return None
        ordered = self._sorted_by_voltage(points)
        return pearson_correlation(
            [p.voltage for p in ordered],
            [p.current for p in ordered],
        )

    def summary(self, noise_level: Optional[float] = None) -> Dict[str, Optional[float]]:
        """
        Statistics panel values.

        Returns:
            dict with data_points, threshold_voltage, correlation, noise_level
        """
        points = self.snapshot()
        return {
            "data_points": len(points),
            "threshold_voltage": self.threshold_voltage(points=points),
            "correlation": self.correlation(points),
            "noise_level": noise_level,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the dataset to a pandas DataFrame, one row per point.

        Returns:
            pd.DataFrame with DataPoint fields as columns plus 'rounds'
        """
        columns = [
            "timestamp_iso", "material", "wavelength", "intensity",
            "voltage", "current", "error", "rounds", "raw_measurements",
        ]
        rows = [
            {
                "timestamp_iso": p.timestamp_iso,
                "material": p.material,
                "wavelength": p.wavelength,
                "intensity": p.intensity,
                "voltage": p.voltage,
                "current": p.current,
                "error": p.error,
                "rounds": p.rounds,
                "raw_measurements": list(p.raw_measurements),
            }
            for p in self.snapshot()
        ]
        return pd.DataFrame(rows, columns=columns)
