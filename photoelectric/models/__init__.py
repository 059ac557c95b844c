"""
Photoelectric Models Package

Models define the experiment logic: the physics of the effect, how noisy
readings are taken and aggregated, how sweeps walk the voltage range and
how readings are recorded. They never touch a display surface.
"""

from .errors import (
    PhotoelectricError,
    PreconditionError,
    InvalidParameterError,
    MeasurementInProgressError,
)
from .physics import (
    CONSTANTS,
    MATERIALS,
    Material,
    PhysicsConstants,
    PhysicsReadouts,
    compute_readouts,
    find_material,
    get_material,
    ideal_current_na,
    max_kinetic_energy_ev,
    photocurrent_na,
    photon_energy_ev,
    stopping_potential_v,
)
from .noise import NoiseModel, apply_noise
from .parameters import ExperimentParameters, validate_rounds
from .sampler import MeasurementSampler, MeasurementStatistics, calculate_statistics
from .sweep import SweepController
from .dataset import DataPoint, ExperimentDataset, pearson_correlation
from .experiment import PhotoelectricExperimentModel

__all__ = [
    "PhotoelectricError",
    "PreconditionError",
    "InvalidParameterError",
    "MeasurementInProgressError",
    "CONSTANTS",
    "MATERIALS",
    "Material",
    "PhysicsConstants",
    "PhysicsReadouts",
    "compute_readouts",
    "find_material",
    "get_material",
    "ideal_current_na",
    "max_kinetic_energy_ev",
    "photocurrent_na",
    "photon_energy_ev",
    "stopping_potential_v",
    "NoiseModel",
    "apply_noise",
    "ExperimentParameters",
    "validate_rounds",
    "MeasurementSampler",
    "MeasurementStatistics",
    "calculate_statistics",
    "SweepController",
    "DataPoint",
    "ExperimentDataset",
    "pearson_correlation",
    "PhotoelectricExperimentModel",
]
