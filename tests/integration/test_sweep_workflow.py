"""
Integration tests for the photoelectric measurement workflow.

Tests the complete workflow from parameter setup through a background sweep
to CSV export, reload and plotting.
"""

import threading

import pytest
from numpy.testing import assert_almost_equal

from photoelectric.models import (
    MeasurementInProgressError,
    PhotoelectricExperimentModel,
    PreconditionError,
)
from photoelectric.utils import PhotoelectricDataExporter, plot_iv_curves


class TestBackgroundSweep:
    """Integration tests for start_sweep() with the worker thread."""

    def test_sweep_completes(self, experiment_model):
        completion_calls = []
        experiment_model.set_completion_callback(
            lambda success, points: completion_calls.append((success, points))
        )
        experiment_model.set_parameter("measurement_rounds", 2)

        assert experiment_model.start_sweep() is True
        assert experiment_model.wait_for_completion(timeout=30)

        assert len(completion_calls) == 1
        success, points = completion_calls[0]
        assert success is True
        assert len(points) == 51
        assert len(experiment_model.dataset) == 51
        assert not experiment_model.is_measuring()

    def test_progress_reaches_total(self, experiment_model):
        progress = []
        experiment_model.set_progress_callback(lambda f, i, n: progress.append((f, i, n)))
        experiment_model.set_parameter("measurement_rounds", 1)

        experiment_model.start_sweep(-1.0, 1.0, 0.5)
        experiment_model.wait_for_completion(timeout=30)

        assert [i for _, i, _ in progress] == [1, 2, 3, 4, 5]
        assert_almost_equal(progress[-1][0], 1.0)

    def test_stop_mid_sweep(self, experiment_model):
        completion_calls = []
        experiment_model.set_completion_callback(
            lambda success, points: completion_calls.append((success, points))
        )
        experiment_model.set_parameter("measurement_rounds", 1)

        def on_progress(fraction, current, total):
            if current == 10:
                experiment_model.stop_sweep()

        experiment_model.set_progress_callback(on_progress)
        experiment_model.start_sweep()
        experiment_model.wait_for_completion(timeout=30)

        success, points = completion_calls[0]
        assert success is False
        assert len(points) == 10
        assert len(experiment_model.dataset) == 10

    def test_numeric_text_parameters(self, experiment_model):
        completion_calls = []
        experiment_model.set_completion_callback(
            lambda success, points: completion_calls.append((success, len(points)))
        )
        experiment_model.set_parameters(intensity_uw_cm2="5", measurement_rounds=1)

        experiment_model.start_sweep()
        assert experiment_model.wait_for_completion(timeout=30)

        assert completion_calls == [(True, 51)]
        assert experiment_model.sweep_error is None

    def test_unexpected_failure_recorded(self, experiment_model):
        completion_calls = []
        experiment_model.set_completion_callback(
            lambda success, points: completion_calls.append((success, len(points)))
        )
        experiment_model.set_parameter("measurement_rounds", 1)

        def on_point(point):
            if len(experiment_model.dataset) == 3:
                raise RuntimeError("display went away")

        experiment_model.set_point_callback(on_point)
        experiment_model.start_sweep()
        assert experiment_model.wait_for_completion(timeout=30)

        assert completion_calls == [(False, 2)]
        assert isinstance(experiment_model.sweep_error, RuntimeError)
        assert len(experiment_model.dataset) == 3
        assert not experiment_model.is_measuring()

    def test_start_rejected_while_running(self, test_config):
        test_config["sweep"]["sample_delay_ms"] = 1
        release = threading.Event()
        model = PhotoelectricExperimentModel(
            test_config, seed=5, sleep=lambda seconds: release.wait(5)
        )
        model.set_parameter("measurement_rounds", 1)

        model.start_sweep(0.0, 1.0, 0.1)
        try:
            assert model.is_measuring()
            with pytest.raises(MeasurementInProgressError):
                model.start_sweep()
            with pytest.raises(MeasurementInProgressError):
                model.perform_single_measurement()
        finally:
            model.stop_sweep()
            release.set()
            assert model.wait_for_completion(timeout=30)

        assert not model.is_measuring()
        assert len(model.dataset) == 1

    def test_precondition_raised_synchronously(self, test_config, no_sleep):
        test_config["experiment"]["material_index"] = None
        model = PhotoelectricExperimentModel(test_config, sleep=no_sleep)

        with pytest.raises(PreconditionError):
            model.start_sweep()
        assert not model.is_measuring()
        assert model.wait_for_completion(timeout=1)


class TestCompleteWorkflow:
    """Full workflow: sweep, statistics, export, reload, plot."""

    def test_sweep_export_reload_plot(self, experiment_model, test_config, tmp_path):
        experiment_model.set_parameter("measurement_rounds", 3)
        experiment_model.run_sweep()

        # Second series at a shorter wavelength
        experiment_model.set_parameter("wavelength_nm", 300.0)
        experiment_model.run_sweep(-1.0, 2.0, 0.5)

        exporter = PhotoelectricDataExporter(test_config["export"])
        csv_path = exporter.export(
            tmp_path / exporter.generate_filename(),
            experiment_model.dataset,
            experiment_model.params.noise_level,
        )
        loaded = exporter.load(csv_path)

        assert len(loaded) == 51 + 7
        assert list(loaded.groups()) == [("Cesium (Cs)", 400.0), ("Cesium (Cs)", 300.0)]
        assert loaded.threshold_voltage() == experiment_model.dataset.threshold_voltage()

        png_path = tmp_path / "iv.png"
        figure = plot_iv_curves(loaded, str(png_path), test_config["plot"])
        assert png_path.exists()
        assert len(figure.axes[0].containers) == 2

    def test_seeded_sessions_match(self, test_config, no_sleep):
        def session():
            model = PhotoelectricExperimentModel(test_config, seed=2024, sleep=no_sleep)
            model.set_parameter("measurement_rounds", 2)
            return [p.current for p in model.run_sweep(-1.0, 1.0, 0.1)]

        assert session() == session()
