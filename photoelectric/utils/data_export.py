"""
Photoelectric Data Export Utility

Handles saving recorded readings to CSV files with fixed precision and a
trailing metadata block, and loading them back.
"""

import datetime
from pathlib import Path
from typing import Optional, List

import pandas as pd

from common.utils import DataExporter, DataExportError, get_logger
from ..config.settings import DATA_EXPORT_CONFIG, ERROR_MESSAGES
from ..models.dataset import DataPoint, ExperimentDataset
from ..models.physics import CONSTANTS, PhysicsConstants, find_material, photon_energy_ev

_logger = get_logger("photoelectric")


class PhotoelectricDataExporter(DataExporter):
    """
    Exporter for photoelectric datasets.

    One CSV row per DataPoint in measurement order, followed by a blank line
    and '#' comment lines recording the export date, the physical constants
    and the noise level.
    """

    def __init__(
        self,
        config: Optional[dict] = None,
        constants: PhysicsConstants = CONSTANTS,
    ):
        """
        Initialize the data exporter.

        Args:
            config: Optional configuration override
            constants: Physical constants written to the metadata block
        """
        self.config = config or DATA_EXPORT_CONFIG.copy()
        self.constants = constants

    def generate_filename(self) -> str:
        """
        Generate the default file name for today.

        Returns:
            str: e.g. photoelectric_data_2024-05-01.csv
        """
        template = self.config.get("file_template", "photoelectric_data_{date}.csv")
        date_str = datetime.datetime.now().strftime(
            self.config.get("date_format", self.date_format)
        )
        return template.format(date=date_str)

    def dataset_to_dataframe(self, dataset: ExperimentDataset) -> pd.DataFrame:
        """
        Format a dataset as the export table.

        Numbers are written as fixed-precision strings so the file content
        does not depend on pandas float formatting.

        Args:
            dataset: Recorded readings

        Returns:
            pd.DataFrame: One row per point, columns named by the config headers

        Raises:
            DataExportError: If a point names a material outside the catalog
        """
        headers = self.config["headers"]
        precision = self.config["precision"]
        raw_delimiter = self.config.get("raw_delimiter", ";")

        def fmt(value: float, key: str) -> str:
            return f"{value:.{precision[key]}f}"

        rows = []
        for point in dataset.snapshot():
            material = find_material(point.material)
            if material is None:
                raise DataExportError(f"Unknown material in dataset: {point.material}")

            rows.append({
                headers["timestamp"]: point.timestamp_iso,
                headers["material"]: point.material,
                headers["work_function"]: fmt(material.work_function_ev, "work_function"),
                headers["wavelength"]: fmt(point.wavelength, "wavelength"),
                headers["photon_energy"]: fmt(
                    photon_energy_ev(point.wavelength, self.constants), "photon_energy"
                ),
                headers["intensity"]: fmt(point.intensity, "intensity"),
                headers["voltage"]: fmt(point.voltage, "voltage"),
                headers["current"]: fmt(point.current, "current"),
                headers["error"]: fmt(point.error, "error"),
                headers["rounds"]: point.rounds,
                headers["raw"]: raw_delimiter.join(
                    fmt(m, "raw") for m in point.raw_measurements
                ),
            })

        columns = [
            headers[key] for key in (
                "timestamp", "material", "work_function", "wavelength",
                "photon_energy", "intensity", "voltage", "current",
                "error", "rounds", "raw",
            )
        ]
        return pd.DataFrame(rows, columns=columns)

    def metadata_lines(self, noise_level: Optional[float]) -> List[str]:
        """Comment lines appended after the data rows."""
        return [
            "# Metadata",
            f"# Export Date: {self.generate_iso_timestamp()}",
            "# Physics Constants Used:",
            f"# Planck constant: {self.constants.planck_ev_s} eV·s",
            f"# Speed of light: {self.constants.speed_of_light_mps} m/s",
            f"# Elementary charge: {self.constants.elementary_charge_c} C",
            f"# hc product: {self.constants.hc_ev_m} eV·m",
            f"# Noise level: {noise_level}",
        ]

    def export(
        self,
        file_path: str,
        dataset: ExperimentDataset,
        noise_level: Optional[float] = None,
    ) -> Path:
        """
        Save a dataset to a CSV file.

        Args:
            file_path: Destination path (parent directories are created)
            dataset: Recorded readings
            noise_level: Session noise level recorded in the metadata

        Returns:
            Path: The written file

        Raises:
            DataExportError: If the dataset is empty or the file cannot be written
        """
        if len(dataset) == 0:
            raise DataExportError(ERROR_MESSAGES["no_data"])

        df = self.dataset_to_dataframe(dataset)
        path = Path(file_path)
        try:
            self.ensure_directory(path)
            df.to_csv(path, index=False, sep=self.config.get("csv_delimiter", ","))
            with open(path, "a", encoding="utf-8") as f:
                f.write("\n")
                f.write("\n".join(self.metadata_lines(noise_level)))
                f.write("\n")
        except OSError as e:
            raise DataExportError(f"Failed to write {path}: {e}")

        _logger.info(f"Exported {len(df)} points to {path}")
        return path

    def load(self, file_path: str) -> ExperimentDataset:
        """
        Load a previously exported CSV file.

        Args:
            file_path: Path of a file written by export()

        Returns:
            ExperimentDataset with the points in file order

        Raises:
            DataExportError: If the file cannot be read or lacks a column
        """
        headers = self.config["headers"]
        raw_delimiter = self.config.get("raw_delimiter", ";")

        try:
            df = pd.read_csv(
                file_path,
                sep=self.config.get("csv_delimiter", ","),
                comment="#",
                dtype={headers["timestamp"]: str, headers["raw"]: str},
                keep_default_na=False,
            )
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise DataExportError(f"Failed to read {file_path}: {e}")

        missing = [name for name in headers.values() if name not in df.columns]
        if missing:
            raise DataExportError(f"Missing columns in {file_path}: {', '.join(missing)}")

        points = []
        for _, row in df.iterrows():
            raw_text = str(row[headers["raw"]]).strip()
            raw = tuple(float(m) for m in raw_text.split(raw_delimiter)) if raw_text else ()
            points.append(DataPoint(
                voltage=float(row[headers["voltage"]]),
                current=float(row[headers["current"]]),
                error=float(row[headers["error"]]),
                wavelength=float(row[headers["wavelength"]]),
                intensity=float(row[headers["intensity"]]),
                material=str(row[headers["material"]]),
                timestamp_iso=str(row[headers["timestamp"]]),
                raw_measurements=raw,
            ))

        _logger.debug(f"Loaded {len(points)} points from {file_path}")
        return ExperimentDataset(points)
