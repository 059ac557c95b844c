"""
Photoelectric Experiment Model

This model coordinates the complete photoelectric experiment session. It owns
the live parameters and the dataset and provides a stable interface for a
presentation layer (the CLI, or a GUI built on top of it).

The experiment model:
- Maintains the session parameters edited by the controls
- Computes the readouts (photon energy, max KE, stopping potential)
- Runs single measurements and voltage sweeps on parameter snapshots
- Appends every reading to the dataset and reports it through callbacks
- Rejects a new measurement while another one is running
"""

import datetime
import threading
from typing import Optional, Dict, Any, Callable, List

import numpy as np

from common.config import get_config
from common.utils import get_logger, get_error
from ..config.settings import ERROR_MESSAGES
from .dataset import DataPoint, ExperimentDataset
from .errors import (
    InvalidParameterError,
    MeasurementInProgressError,
    PhotoelectricError,
    PreconditionError,
)
from .noise import NoiseModel
from .parameters import ExperimentParameters
from .physics import PhysicsReadouts, compute_readouts, get_material
from .sampler import MeasurementSampler, MeasurementStatistics
from .sweep import SweepController

# Module-level logger for the experiment
_logger = get_logger("photoelectric")

# Student error template for each kind of rejected parameter
_PARAMETER_ERROR_KEYS = {
    "wavelength": "invalid_wavelength",
    "intensity": "invalid_intensity",
    "noise": "invalid_noise",
    "voltage": "invalid_voltage",
    "rounds": "invalid_rounds",
    "sweep": "invalid_sweep",
}

_SESSION_PARAMETERS = (
    "wavelength_nm",
    "intensity_uw_cm2",
    "voltage_v",
    "measurement_rounds",
    "noise_level",
)


class PhotoelectricExperimentModel:
    """
    High-level model for a photoelectric experiment session.

    Measurements always run on a snapshot of the parameters taken when they
    start, so editing the controls mid-sweep never changes readings that are
    already being taken.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize the experiment model.

        Args:
            config: Full configuration dict keyed by section (get_config() if None)
            seed: Seed for the noise generator, ignored when rng is given
            rng: Random source shared by every measurement in the session
            sleep: Delay function between samples (time.sleep if None)
        """
        self.config = config or get_config()
        self.seed = seed
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._sleep = sleep

        self.params = ExperimentParameters.from_defaults(self.config["experiment"])
        self.dataset = ExperimentDataset()

        # Measurement state
        self._is_measuring = False
        self._state_lock = threading.Lock()
        self._sweep_controller: Optional[SweepController] = None
        self._sweep_thread: Optional[threading.Thread] = None
        # Unexpected failure of the last background sweep, if any
        self.sweep_error: Optional[Exception] = None

        # Callbacks
        self._progress_callback: Optional[Callable[[float, int, int], None]] = None
        self._point_callback: Optional[Callable[[DataPoint], None]] = None
        self._completion_callback: Optional[Callable[[bool, List[DataPoint]], None]] = None

        _logger.debug(f"Experiment model created (seed={seed})")

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

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

    def set_point_callback(self, callback: Optional[Callable[[DataPoint], None]]) -> None:
        """
        Set callback for each recorded point (for real-time plotting).

        Args:
            callback: Function(point)
        """
        self._point_callback = callback

    def set_completion_callback(
        self,
        callback: Optional[Callable[[bool, List[DataPoint]], None]]
    ) -> None:
        """
        Set callback for background sweep completion.

        Args:
            callback: Function(success, points)
        """
        self._completion_callback = callback

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def is_measuring(self) -> bool:
        """Check if a measurement or sweep is in progress."""
        return self._is_measuring

    def select_material(self, index: int) -> None:
        """
        Select the cathode material by catalog index.

        Raises:
            InvalidParameterError: If the index is outside the catalog
        """
        self.params.material = get_material(index)
        _logger.info(f"Material selected: {self.params.material.label}")

    def set_parameter(self, key: str, value: Any) -> None:
        """
        Set a session parameter.

        Values are range-checked when a measurement starts, not here, so the
        controls can pass through intermediate values while being edited.

        Args:
            key: Parameter name (material_index, wavelength_nm, ...)
            value: Parameter value

        Raises:
            InvalidParameterError: If the key is unknown
        """
        if key == "material_index":
            self.select_material(value)
        elif key in _SESSION_PARAMETERS:
            setattr(self.params, key, value)
        else:
            raise InvalidParameterError(f"Unknown parameter: {key}")

    def set_parameters(self, **params) -> None:
        """
        Set multiple session parameters.

        Args:
            **params: Parameter key-value pairs
        """
        for key, value in params.items():
            self.set_parameter(key, value)

    def get_parameters(self) -> Dict[str, Any]:
        """Get current session parameters."""
        material = self.params.material
        return {
            "material": material.name if material else None,
            "work_function_ev": material.work_function_ev if material else None,
            "wavelength_nm": self.params.wavelength_nm,
            "intensity_uw_cm2": self.params.intensity_uw_cm2,
            "voltage_v": self.params.voltage_v,
            "measurement_rounds": self.params.measurement_rounds,
            "noise_level": self.params.noise_level,
        }

    def validate_parameters(self) -> bool:
        """
        Validate current session parameters.

        Returns:
            bool: True if all parameters are valid

        Raises:
            PreconditionError: If no material is selected
            InvalidParameterError: If a parameter is out of range
        """
        self.params.require_material()
        return self.params.validate(self.config["validation"])

    def get_readouts(self) -> Dict[str, Optional[float]]:
        """
        Physics readouts for the current settings.

        Returns:
            dict with photon_energy_ev, max_kinetic_energy_ev,
            stopping_potential_v (all None when no material is selected)
        """
        if self.params.material is None:
            return {
                "photon_energy_ev": None,
                "max_kinetic_energy_ev": None,
                "stopping_potential_v": None,
            }
        readouts: PhysicsReadouts = compute_readouts(
            self.params.material, self.params.wavelength_nm
        )
        return {
            "photon_energy_ev": readouts.photon_energy_ev,
            "max_kinetic_energy_ev": readouts.max_kinetic_energy_ev,
            "stopping_potential_v": readouts.stopping_potential_v,
        }

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------

    def perform_single_measurement(self) -> DataPoint:
        """
        Take one aggregated reading at the current voltage.

        Returns:
            DataPoint appended to the dataset

        Raises:
            MeasurementInProgressError: If a measurement is already running
            PreconditionError: If no material is selected
            InvalidParameterError: If a parameter is out of range
        """
        self._acquire()
        try:
            snapshot = self._checked_snapshot()
            sampler = MeasurementSampler(
                snapshot,
                noise_model=self._noise_model(snapshot),
                sleep=self._sleep,
                config=self.config["sweep"],
                physics_config=self.config["physics"],
            )
            stats = sampler.sample_repeated(snapshot.voltage_v)
            _logger.student_stats(stats)
            return self._record(snapshot, snapshot.voltage_v, stats)
        finally:
            self._release()

    def run_sweep(
        self,
        min_v: Optional[float] = None,
        max_v: Optional[float] = None,
        step_v: Optional[float] = None,
    ) -> List[DataPoint]:
        """
        Sweep the voltage in the calling thread.

        Each point is appended to the dataset as soon as its step completes,
        so a stopped sweep leaves its partial data in place.

        Args:
            min_v: Start voltage (config min_voltage if None)
            max_v: Stop voltage (config max_voltage if None)
            step_v: Step size (config step_voltage if None)

        Returns:
            List of DataPoints recorded by this sweep

        Raises:
            MeasurementInProgressError: If a measurement is already running
            PreconditionError: If no material is selected
            InvalidParameterError: If a parameter or the sweep range is invalid
        """
        self._acquire()
        try:
            snapshot, steps = self._prepare_sweep(min_v, max_v, step_v)
            return self._consume_sweep(snapshot, steps)
        finally:
            self._release()

    def start_sweep(
        self,
        min_v: Optional[float] = None,
        max_v: Optional[float] = None,
        step_v: Optional[float] = None,
    ) -> bool:
        """
        Start a voltage sweep in a background thread.

        Parameters are validated before the thread starts, so a rejected
        sweep raises here rather than through the completion callback.

        Returns:
            bool: True if the sweep started

        Raises:
            MeasurementInProgressError: If a measurement is already running
            PreconditionError: If no material is selected
            InvalidParameterError: If a parameter or the sweep range is invalid
        """
        self._acquire()
        try:
            snapshot, steps = self._prepare_sweep(min_v, max_v, step_v)
        except PhotoelectricError:
            self._release()
            raise

        self.sweep_error = None
        self._sweep_thread = threading.Thread(
            target=self._sweep_worker,
            args=(snapshot, steps),
            daemon=True,
        )
        self._sweep_thread.start()
        return True

    def stop_sweep(self) -> None:
        """Request the running sweep to stop at the next step boundary."""
        if self._sweep_controller:
            self._sweep_controller.stop()
            _logger.student("Stopping sweep...")

    def wait_for_completion(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for a background sweep to complete.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            bool: True if the sweep finished, False on timeout
        """
        if self._sweep_thread:
            self._sweep_thread.join(timeout=timeout)
            return not self._sweep_thread.is_alive()
        return True

    def _sweep_worker(self, snapshot: ExperimentParameters, steps) -> None:
        """Worker thread for a background sweep."""
        success = False
        points: List[DataPoint] = []
        try:
            points = self._consume_sweep(snapshot, steps, points)
            success = self._sweep_controller.completed
        except Exception as e:
            _logger.error(f"Unexpected error during sweep: {e}")
            self.sweep_error = e
        finally:
            self._release()

            if self._completion_callback:
                self._completion_callback(success, points)

    def _prepare_sweep(self, min_v, max_v, step_v):
        """Validate and snapshot, returning the sweep's step iterator."""
        snapshot = self._checked_snapshot()
        sweep_config = self.config["sweep"]
        controller = SweepController(
            snapshot,
            noise_model=self._noise_model(snapshot),
            sleep=self._sleep,
            config=sweep_config,
            physics_config=self.config["physics"],
        )
        controller.set_progress_callback(self._on_progress)
        try:
            steps = controller.run_sweep(min_v, max_v, step_v)
        except InvalidParameterError as e:
            self._report(e)
            raise
        self._sweep_controller = controller
        return snapshot, steps

    def _consume_sweep(
        self,
        snapshot: ExperimentParameters,
        steps,
        points: Optional[List[DataPoint]] = None,
    ) -> List[DataPoint]:
        """Record every step of a sweep iterator."""
        points = [] if points is None else points
        for voltage, stats in steps:
            points.append(self._record(snapshot, voltage, stats))

        if self._sweep_controller.completed:
            _logger.student(f"Sweep complete: {len(points)} points")
        else:
            _logger.student(f"Sweep stopped: {len(points)} points kept")
        return points

    # ------------------------------------------------------------------
    # Statistics and data
    # ------------------------------------------------------------------

    def get_statistics(self) -> Dict[str, Optional[float]]:
        """
        Statistics panel values for the current dataset.

        Returns:
            dict with data_points, threshold_voltage, correlation, noise_level
        """
        return self.dataset.summary(
            noise_level=self.params.noise_level,
        )

    def clear_data(self) -> None:
        """
        Remove all recorded points.

        Raises:
            MeasurementInProgressError: If a measurement is running
        """
        if self._is_measuring:
            self._report_key("measurement_in_progress")
            raise MeasurementInProgressError("Cannot clear data during a measurement.")
        self.dataset.clear()
        _logger.info("Data cleared")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _acquire(self) -> None:
        """Mark a measurement as running, rejecting concurrent requests."""
        with self._state_lock:
            if self._is_measuring:
                self._report_key("measurement_in_progress")
                raise MeasurementInProgressError(ERROR_MESSAGES["measurement_in_progress"])
            self._is_measuring = True

    def _release(self) -> None:
        with self._state_lock:
            self._is_measuring = False

    def _checked_snapshot(self) -> ExperimentParameters:
        """Validate the live parameters and return a snapshot of them."""
        try:
            self.validate_parameters()
        except (PreconditionError, InvalidParameterError) as e:
            self._report(e)
            raise
        return self.params.snapshot()

    def _noise_model(self, snapshot: ExperimentParameters) -> NoiseModel:
        """Noise model at the snapshot's level, drawing from the session RNG."""
        return NoiseModel(
            snapshot.noise_level,
            rng=self._rng,
            config=self.config["physics"],
        )

    def _record(
        self,
        snapshot: ExperimentParameters,
        voltage: float,
        stats: MeasurementStatistics,
    ) -> DataPoint:
        """Append a reading to the dataset and notify listeners."""
        point = DataPoint.from_statistics(
            voltage,
            stats,
            wavelength=snapshot.wavelength_nm,
            intensity=snapshot.intensity_uw_cm2,
            material=snapshot.material.name,
            timestamp_iso=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        )
        self.dataset.append(point)

        if self._point_callback:
            self._point_callback(point)
        return point

    def _on_progress(self, fraction: float, current: int, total: int) -> None:
        """Forward sweep progress to the registered listener."""
        if self._progress_callback:
            self._progress_callback(fraction, current, total)

    def _report(self, error: PhotoelectricError) -> None:
        """Log a rejected request through the student error tier."""
        if isinstance(error, PreconditionError):
            self._report_key("no_material_selected")
            return
        key = _PARAMETER_ERROR_KEYS.get(getattr(error, "parameter", None))
        template = get_error(key) if key else None
        if template:
            _logger.student_error(template.title, str(error), template.causes, template.actions)
        else:
            _logger.warning(f"Rejected parameters: {error}")

    @staticmethod
    def _report_key(error_key: str) -> None:
        template = get_error(error_key)
        if template:
            _logger.student_error(template.title, template.message, template.causes, template.actions)
