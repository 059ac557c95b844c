"""
Photoelectric Configuration Package

Configuration constants and settings for the photoelectric simulator.
"""

from .settings import (
    DEFAULT_EXPERIMENT_PARAMS,
    SWEEP_CONFIG,
    PHYSICS_MODEL_CONFIG,
    DATA_EXPORT_CONFIG,
    PLOT_CONFIG,
    VALIDATION_PATTERNS,
    ERROR_MESSAGES,
    LOGGING_CONFIG,
)

__all__ = [
    "DEFAULT_EXPERIMENT_PARAMS",
    "SWEEP_CONFIG",
    "PHYSICS_MODEL_CONFIG",
    "DATA_EXPORT_CONFIG",
    "PLOT_CONFIG",
    "VALIDATION_PATTERNS",
    "ERROR_MESSAGES",
    "LOGGING_CONFIG",
]
