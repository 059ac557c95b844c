"""
Shared utilities for the photoelectric simulator.
"""

from .data_export import DataExporter, DataExportError
from .tiered_logger import TieredLogger, get_logger
from .error_messages import (
    ErrorTemplate,
    PHOTOELECTRIC_ERRORS,
    get_error,
    format_error_message,
)

__all__ = [
    'DataExporter',
    'DataExportError',
    'TieredLogger',
    'get_logger',
    'ErrorTemplate',
    'PHOTOELECTRIC_ERRORS',
    'get_error',
    'format_error_message',
]
