"""
Measurement Sampler

Takes repeated noisy photocurrent readings at one voltage and reduces them
to summary statistics. This is where students see uncertainty: the mean is
the reported current and the standard error is its error bar.

Design Notes:
- Each sample is a fresh physics evaluation plus one noise draw
- Samples are sequential; an injectable sleep separates them to mimic
  instrument settling time (tests inject a no-op)
- The sampler works on a parameter snapshot, so the rounds and light
  settings are fixed for the whole reading
"""

import math
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Any, List, Optional, Sequence, Tuple

import numpy as np

from ..config.settings import SWEEP_CONFIG, PHYSICS_MODEL_CONFIG
from .noise import NoiseModel
from .parameters import ExperimentParameters, validate_rounds
from .physics import photocurrent_na
from common.utils import get_logger

_logger = get_logger("photoelectric")


@dataclass(frozen=True)
class MeasurementStatistics:
    """Summary of repeated readings at a single voltage."""
    mean: float
    std_dev: float
    standard_error: float
    raw_measurements: Tuple[float, ...] = field(default_factory=tuple)
    count: int = 0
    unit: str = "nA"

    @property
    def cv_percent(self) -> float:
        """Coefficient of variation, 0 when the mean is 0."""
        if self.mean == 0:
            return 0.0
        return self.std_dev / abs(self.mean) * 100

    @property
    def quality(self) -> str:
        """Return quality assessment based on CV."""
        if self.cv_percent < 1.0:
            return "Excellent"
        elif self.cv_percent < 5.0:
            return "Good"
        elif self.cv_percent < 10.0:
            return "Fair"
        else:
            return "Noisy"

    def format_for_student(self) -> str:
        """Format statistics for student-facing display."""
        return (
            f"{self.mean:.6f} ± {self.standard_error:.6f} {self.unit} "
            f"({self.count} measurements, {self.quality})"
        )

    def format_for_console(self) -> str:
        """Format statistics for console output."""
        return (
            f"{self.mean:.4f} ± {self.std_dev:.4f} {self.unit} "
            f"(n={self.count}, SE={self.standard_error:.4f}, CV={self.cv_percent:.1f}%)"
        )


def calculate_statistics(values: Sequence[float]) -> MeasurementStatistics:
    """
    Reduce readings to mean, sample standard deviation and standard error.

    Never raises: an empty list gives all zeros and a single reading has a
    standard deviation of 0 by convention.

    Args:
        values: Readings in sampling order

    Returns:
        MeasurementStatistics with raw_measurements in the given order
    """
    raw = tuple(float(v) for v in values)
    n = len(raw)
    if n == 0:
        return MeasurementStatistics(0.0, 0.0, 0.0, raw, 0)

    values_array = np.array(raw)
    mean = float(np.mean(values_array))
    std_dev = float(np.std(values_array, ddof=1)) if n > 1 else 0.0
    standard_error = std_dev / math.sqrt(n)

    return MeasurementStatistics(
        mean=mean,
        std_dev=std_dev,
        standard_error=standard_error,
        raw_measurements=raw,
        count=n,
    )


class MeasurementSampler:
    """
    Repeated-sampling strategy for one parameter snapshot.

    The sampler never touches the live session parameters; it is built from
    a snapshot and a noise model whose random source is injected.
    """

    def __init__(
        self,
        params: ExperimentParameters,
        noise_model: Optional[NoiseModel] = None,
        sleep: Optional[Callable[[float], None]] = None,
        config: Optional[Dict[str, Any]] = None,
        physics_config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the sampler.

        Args:
            params: Parameter snapshot (material must be selected)
            noise_model: Noise source (unseeded NoiseModel at params.noise_level if None)
            sleep: Delay function between samples (time.sleep if None)
            config: Optional sweep config override (uses SWEEP_CONFIG by default)
            physics_config: Optional physics coefficients override

        Raises:
            PreconditionError: If params has no material
        """
        self.params = params
        self.material = params.require_material()
        self.config = config or SWEEP_CONFIG.copy()
        self.physics_config = physics_config or PHYSICS_MODEL_CONFIG.copy()
        self.noise_model = noise_model or NoiseModel(
            params.noise_level, config=self.physics_config
        )
        self._sleep = sleep if sleep is not None else time.sleep
        self.sample_delay_s = self.config.get("sample_delay_ms", 50) / 1000.0

    def ideal_current(self, voltage_v: float) -> float:
        """Noiseless current at voltage_v for this snapshot."""
        return photocurrent_na(
            voltage_v,
            self.material,
            self.params.wavelength_nm,
            self.params.intensity_uw_cm2,
            self.physics_config,
        )

    def sample_once(self, voltage_v: float) -> float:
        """One noisy current reading."""
        return self.noise_model.apply(self.ideal_current(voltage_v))

    def sample_repeated(self, voltage_v: float, rounds: Optional[int] = None) -> MeasurementStatistics:
        """
        Take `rounds` noisy readings at a fixed voltage.

        Args:
            voltage_v: Applied voltage (V)
            rounds: Number of readings (snapshot's measurement_rounds if None)

        Returns:
            MeasurementStatistics over the readings

        Raises:
            InvalidParameterError: If rounds < 1
        """
        rounds = validate_rounds(
            self.params.measurement_rounds if rounds is None else rounds
        )

        measurements: List[float] = []
        for _ in range(rounds):
            measurements.append(self.sample_once(voltage_v))
            if self.sample_delay_s > 0:
                self._sleep(self.sample_delay_s)

        stats = calculate_statistics(measurements)
        _logger.debug(
            f"{voltage_v:+.2f} V: {stats.format_for_console()}"
        )
        return stats
