"""
Generic data export utilities for measurement applications.
"""

import datetime
from pathlib import Path
from abc import ABC, abstractmethod
from typing import Any


class DataExportError(Exception):
    """Exception raised for data export errors."""
    pass


class DataExporter(ABC):
    """Abstract base class for data exporters."""

    date_format = "%Y-%m-%d"

    @abstractmethod
    def export(self, file_path: str, data: Any) -> Path:
        """Export data to file and return the written path."""
        pass

    @abstractmethod
    def load(self, file_path: str) -> Any:
        """Load previously exported data."""
        pass

    @staticmethod
    def generate_iso_timestamp() -> str:
        """Generate an ISO 8601 UTC timestamp for data records."""
        return datetime.datetime.now(datetime.timezone.utc).isoformat()

    @staticmethod
    def ensure_directory(file_path: str) -> Path:
        """Ensure the directory for a file path exists."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
