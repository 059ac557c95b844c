"""
Unit tests for SweepController.run_sweep()

Tests eager validation, lazy iteration, progress reporting and
cooperative stopping.
"""

import pytest
from numpy.testing import assert_almost_equal

from photoelectric.models.errors import InvalidParameterError, PreconditionError
from photoelectric.models.noise import NoiseModel
from photoelectric.models.parameters import ExperimentParameters
from photoelectric.models.sweep import SweepController


@pytest.fixture
def controller(cesium_params, sweep_config, seeded_rng):
    noise = NoiseModel(cesium_params.noise_level, rng=seeded_rng)
    return SweepController(cesium_params, noise_model=noise, config=sweep_config)


class TestRunSweepValidation:
    """Preconditions are checked when run_sweep() is called."""

    def test_no_material_raises_before_iteration(self, sweep_config):
        controller = SweepController(ExperimentParameters(), config=sweep_config)
        with pytest.raises(PreconditionError):
            controller.run_sweep()

    def test_invalid_step_raises_before_iteration(self, controller):
        with pytest.raises(InvalidParameterError):
            controller.run_sweep(-1.0, 1.0, 0.0)

    def test_invalid_rounds(self, controller):
        with pytest.raises(InvalidParameterError):
            controller.run_sweep(rounds=0)

    def test_nothing_sampled_until_iterated(self, cesium_params, sweep_config):
        calls = []
        controller = SweepController(cesium_params, config=sweep_config)
        controller.set_progress_callback(lambda *args: calls.append(args))

        controller.run_sweep(0.0, 1.0, 0.5)
        assert calls == []


class TestRunSweep:
    """Tests for sweep iteration."""

    def test_default_bounds_from_config(self, controller):
        steps = list(controller.run_sweep(rounds=2))

        assert len(steps) == 51
        assert steps[0][0] == pytest.approx(-3.0)
        assert steps[-1][0] == pytest.approx(2.0)
        assert controller.completed

    def test_ascending_voltages(self, controller):
        voltages = [v for v, _ in controller.run_sweep(-1.0, 1.0, 0.5)]
        assert voltages == [-1.0, -0.5, 0.0, 0.5, 1.0]

    def test_rounds_per_step(self, controller):
        for _, stats in controller.run_sweep(0.0, 0.2, 0.1, rounds=3):
            assert stats.count == 3

    def test_voltages_are_floats(self, controller):
        voltage, _ = next(iter(controller.run_sweep(0.0, 0.0, 0.1)))
        assert type(voltage) is float

    def test_progress_callback(self, controller):
        progress = []
        controller.set_progress_callback(lambda f, i, n: progress.append((f, i, n)))

        list(controller.run_sweep(0.0, 0.3, 0.1, rounds=1))

        assert [(i, n) for _, i, n in progress] == [(1, 4), (2, 4), (3, 4), (4, 4)]
        assert_almost_equal(progress[-1][0], 1.0)

    def test_stop_keeps_points_already_taken(self, controller):
        taken = []
        for voltage, stats in controller.run_sweep(-3.0, 2.0, 0.1, rounds=1):
            taken.append(voltage)
            if len(taken) == 5:
                controller.stop()

        assert len(taken) == 5
        assert controller.is_stop_requested()
        assert not controller.completed

    def test_rerun_after_stop(self, controller):
        steps = controller.run_sweep(0.0, 1.0, 0.5, rounds=1)
        next(steps)
        controller.stop()
        assert list(steps) == []

        assert len(list(controller.run_sweep(0.0, 1.0, 0.5, rounds=1))) == 3
        assert controller.completed

    def test_params_snapshot_at_construction(self, cesium_params, sweep_config):
        cesium_params.measurement_rounds = 3
        controller = SweepController(cesium_params, config=sweep_config)
        cesium_params.measurement_rounds = 7
        cesium_params.wavelength_nm = 250.0

        for _, stats in controller.run_sweep(0.0, 0.2, 0.1):
            assert stats.count == 3
        assert controller.params.wavelength_nm == 400.0

    def test_same_seed_same_sweep(self, cesium_params, sweep_config):
        def run(seed):
            noise = NoiseModel.from_seed(cesium_params.noise_level, seed)
            controller = SweepController(cesium_params, noise_model=noise, config=sweep_config)
            return [stats.mean for _, stats in controller.run_sweep(-1.0, 1.0, 0.5)]

        assert run(11) == run(11)
