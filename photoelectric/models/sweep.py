"""
Sweep Controller

Walks the applied voltage across a range and takes one aggregated reading
per step, producing the points of an I-V characteristic.

Design Notes:
- The sweep is a one-shot lazy iterator of (voltage, statistics) pairs in
  ascending voltage order; re-run by calling run_sweep() again
- Preconditions are checked when run_sweep() is called, before any sampling
- Stopping is cooperative: the stop flag is checked only between steps and
  readings already produced are kept
- Bounds default to SWEEP_CONFIG, not hardcoded values
"""

import threading
from decimal import Decimal
from typing import Callable, Dict, Any, Iterator, Optional, Tuple

import numpy as np

from ..config.settings import SWEEP_CONFIG, ERROR_MESSAGES
from .errors import InvalidParameterError
from .noise import NoiseModel
from .parameters import ExperimentParameters, validate_rounds
from .sampler import MeasurementSampler, MeasurementStatistics
from common.utils import get_logger

_logger = get_logger("photoelectric")

SweepStep = Tuple[float, MeasurementStatistics]


class SweepController:
    """
    Drives a MeasurementSampler across an ordered voltage range.

    The controller owns a snapshot of the experiment parameters taken when
    it is created, so edits to the live session do not affect a sweep.
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
        Initialize the sweep controller.

        Args:
            params: Experiment parameters (a snapshot is taken)
            noise_model: Noise source shared by every reading in the sweep
            sleep: Delay function between samples (time.sleep if None)
            config: Optional configuration override (uses SWEEP_CONFIG by default)
            physics_config: Optional physics coefficients override
        """
        self.params = params.snapshot()
        self.config = config or SWEEP_CONFIG.copy()
        self.physics_config = physics_config
        self.noise_model = noise_model
        self._sleep = sleep

        self._stop_requested = threading.Event()
        self.completed = False

        self._progress_callback: Optional[Callable[[float, int, int], None]] = None

    def set_progress_callback(
        self,
        callback: Optional[Callable[[float, int, int], None]]
    ) -> None:
        """
        Set callback for sweep progress.

        Args:
            callback: Function(fraction, current_point, total_points)
        """
        self._progress_callback = callback

    def stop(self) -> None:
        """Request the sweep to stop at the next step boundary."""
        self._stop_requested.set()

    def is_stop_requested(self) -> bool:
        """Check whether a stop has been requested."""
        return self._stop_requested.is_set()

    def generate_voltage_array(
        self,
        min_v: float,
        max_v: float,
        step_v: float,
    ) -> np.ndarray:
        """
        Generate ascending sweep voltages, with max_v inclusive.

        Voltages are computed as min_v + i * step_v rather than by repeated
        addition and rounded, so values match exactly across sweeps.

        Args:
            min_v: First voltage (V)
            max_v: Last voltage (V), included within floating-point tolerance
            step_v: Step size (V), positive

        Returns:
            np.ndarray: Voltage points

        Raises:
            InvalidParameterError: If a bound is not finite, the step is not
                positive or max_v < min_v
        """
        if not (np.isfinite(min_v) and np.isfinite(max_v)):
            raise InvalidParameterError(ERROR_MESSAGES["invalid_bounds"], parameter="sweep")
        if not step_v > 0:
            raise InvalidParameterError(ERROR_MESSAGES["invalid_step"], parameter="sweep")
        if max_v < min_v:
            raise InvalidParameterError(ERROR_MESSAGES["invalid_range"], parameter="sweep")

        # Never round coarser than the step itself
        step_decimals = max(0, -Decimal(str(step_v)).normalize().as_tuple().exponent)
        decimals = max(self.config.get("voltage_decimals", 1), step_decimals)

        n_steps = int(np.floor((max_v - min_v) / step_v + 1e-9))
        voltages = min_v + step_v * np.arange(n_steps + 1)
        return np.round(voltages, decimals=decimals)

    def run_sweep(
        self,
        min_v: Optional[float] = None,
        max_v: Optional[float] = None,
        step_v: Optional[float] = None,
        rounds: Optional[int] = None,
    ) -> Iterator[SweepStep]:
        """
        Start a sweep and return its readings lazily.

        Args:
            min_v: Start voltage (config min_voltage if None)
            max_v: Stop voltage (config max_voltage if None)
            step_v: Step size (config step_voltage if None)
            rounds: Readings per step (snapshot measurement_rounds if None)

        Returns:
            One-shot iterator of (voltage, MeasurementStatistics)

        Raises:
            PreconditionError: If no material is selected
            InvalidParameterError: If bounds, step or rounds are invalid
        """
        self.params.require_material()

        min_v = self.config["min_voltage"] if min_v is None else float(min_v)
        max_v = self.config["max_voltage"] if max_v is None else float(max_v)
        step_v = self.config["step_voltage"] if step_v is None else float(step_v)
        rounds = validate_rounds(self.params.measurement_rounds if rounds is None else rounds)

        voltages = self.generate_voltage_array(min_v, max_v, step_v)
        sampler = MeasurementSampler(
            self.params,
            noise_model=self.noise_model,
            sleep=self._sleep,
            config=self.config,
            physics_config=self.physics_config,
        )

        self._stop_requested.clear()
        self.completed = False

        _logger.info(
            f"Sweep {min_v:+.2f} V to {max_v:+.2f} V, step {step_v} V: "
            f"{len(voltages)} points x {rounds} rounds"
        )
        return self._iterate(voltages, rounds, sampler)

    def _iterate(
        self,
        voltages: np.ndarray,
        rounds: int,
        sampler: MeasurementSampler,
    ) -> Iterator[SweepStep]:
        """Generator behind run_sweep()."""
        total_points = len(voltages)
        update_interval = self.config.get("plot_update_interval", 10)

        for i, voltage in enumerate(voltages):
            if self._stop_requested.is_set():
                _logger.info(f"Sweep stopped after {i}/{total_points} points")
                return

            voltage = float(voltage)
            stats = sampler.sample_repeated(voltage, rounds)

            if self._progress_callback:
                self._progress_callback((i + 1) / total_points, i + 1, total_points)
            if i % update_interval == 0 or i == total_points - 1:
                _logger.student(
                    f"Measuring {voltage:.1f} V... ({i + 1}/{total_points})"
                )

            yield voltage, stats

        self.completed = True
