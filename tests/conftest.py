"""
Pytest configuration and shared fixtures for the photoelectric test suite.

This file provides:
- Configuration with the settling delay disabled
- Parameter snapshots for a known material
- Seeded and no-op helpers for deterministic measurements
"""

import pytest
import numpy as np

from common.config.loader import get_default_config
from photoelectric.models import (
    MATERIALS,
    ExperimentParameters,
    PhotoelectricExperimentModel,
)
from tests.mocks import make_point


@pytest.fixture
def test_config():
    """Full configuration with no delay between samples."""
    config = get_default_config()
    config["sweep"]["sample_delay_ms"] = 0
    return config


@pytest.fixture
def sweep_config(test_config):
    """Sweep section of the test configuration."""
    return test_config["sweep"]


@pytest.fixture
def cesium_params():
    """Cesium at 400 nm, 5 uW/cm^2 (stopping potential 1.00 V)."""
    return ExperimentParameters(
        material=MATERIALS[0],
        wavelength_nm=400.0,
        intensity_uw_cm2=5.0,
        voltage_v=0.0,
        measurement_rounds=5,
        noise_level=0.05,
    )


@pytest.fixture
def noiseless_params(cesium_params):
    """Cesium parameters with noise switched off."""
    cesium_params.noise_level = 0.0
    return cesium_params


@pytest.fixture
def seeded_rng():
    """Reproducible numpy Generator."""
    return np.random.default_rng(42)


@pytest.fixture
def no_sleep():
    """Delay function that returns immediately."""
    return lambda seconds: None


@pytest.fixture
def experiment_model(test_config, no_sleep):
    """Experiment model with Cesium selected, seeded noise and no delay."""
    return PhotoelectricExperimentModel(test_config, seed=42, sleep=no_sleep)


@pytest.fixture
def point_factory():
    """Factory for DataPoints."""
    return make_point
