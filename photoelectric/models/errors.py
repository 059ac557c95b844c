"""
Exceptions raised by the photoelectric models.
"""

from typing import Optional


class PhotoelectricError(Exception):
    """Base exception for simulator errors."""
    pass


class PreconditionError(PhotoelectricError):
    """Raised when a measurement is requested before a material is selected."""
    pass


class InvalidParameterError(PhotoelectricError, ValueError):
    """
    Raised for out-of-range wavelength, intensity, rounds, noise or sweep bounds.

    Attributes:
        parameter: Name of the offending setting ("wavelength", "sweep", ...)
    """

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class MeasurementInProgressError(PhotoelectricError):
    """Raised when a measurement is requested while another is running."""
    pass
