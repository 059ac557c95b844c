"""
Photoelectric Utilities Package

Utility functions for data export and plotting.
"""

from .data_export import PhotoelectricDataExporter
from .plotting import plot_iv_curves

__all__ = ["PhotoelectricDataExporter", "plot_iv_curves"]
