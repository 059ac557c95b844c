"""
Photoelectric Effect Simulator Package

This package simulates photoelectric measurements for teaching: a cathode
material is illuminated at a chosen wavelength and intensity, a retarding or
accelerating voltage is applied, and noisy photocurrent readings are
aggregated into an I-V characteristic.

Architecture:
- models/: Physics, noise, sampling, sweep and data set logic
- config/: Settings and parameters
- utils/: Data export and headless plotting
"""

__version__ = "1.0.0"
