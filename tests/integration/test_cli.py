"""
Integration tests for the command-line front end.

Runs photoelectric.main.run() end to end with the settling delay disabled.
"""

import pytest
import pandas as pd

from common.config import loader
from photoelectric.main import resolve_material_index, run
from photoelectric.models import PhotoelectricExperimentModel


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate the cached config and the override env var."""
    monkeypatch.delenv(loader.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(loader, "_config_cache", None)


class TestResolveMaterialIndex:
    """Tests for resolve_material_index()"""

    @pytest.mark.parametrize("key,expected", [
        ("0", 0),
        ("6", 6),
        ("Cs", 0),
        ("na", 1),
        ("gold", 6),
        ("Aluminum (Al)", 3),
    ])
    def test_known(self, key, expected):
        assert resolve_material_index(key) == expected

    def test_unknown(self):
        with pytest.raises(ValueError):
            resolve_material_index("unobtainium")


class TestRun:
    """Tests for run()"""

    def test_single_measurement(self, capsys):
        assert run(["--material", "Cs", "--voltage", "0.5", "--seed", "1", "--no-delay"]) == 0

        out = capsys.readouterr().out
        assert "Cesium (Cs)" in out
        assert "Stopping potential: 1.00 V" in out
        assert "Data points:        1" in out

    def test_sweep_with_export_and_plot(self, tmp_path, capsys):
        csv_path = tmp_path / "sweep.csv"
        png_path = tmp_path / "sweep.png"

        code = run([
            "--sweep", "--min", "-1", "--max", "1", "--step", "0.5",
            "--rounds", "2", "--seed", "1", "--no-delay",
            "--output", str(csv_path), "--plot", str(png_path),
        ])

        assert code == 0
        assert csv_path.exists()
        assert png_path.exists()
        df = pd.read_csv(csv_path, comment="#")
        assert len(df) == 5
        assert "Data points:        5" in capsys.readouterr().out

    def test_failed_sweep_exits_nonzero(self, monkeypatch, capsys):
        def failing_record(self, *args, **kwargs):
            raise RuntimeError("recorder unavailable")

        monkeypatch.setattr(PhotoelectricExperimentModel, "_record", failing_record)

        assert run(["--sweep", "--rounds", "1", "--no-delay"]) == 1
        assert "sweep failed" in capsys.readouterr().out

    def test_unknown_material(self, capsys):
        assert run(["--material", "xx", "--no-delay"]) == 1
        assert "Unknown material" in capsys.readouterr().out

    def test_invalid_wavelength(self):
        assert run(["--wavelength", "-10", "--no-delay"]) == 1

    def test_invalid_sweep_range(self):
        assert run(["--sweep", "--min", "1", "--max", "-1", "--no-delay"]) == 1

    def test_export_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        assert run(["--no-delay", "--output", str(blocker / "data.csv")]) == 1

    def test_bad_config_file(self, tmp_path, capsys):
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json")

        assert run(["--config", str(config_path)]) == 2
        assert "Configuration error" in capsys.readouterr().out

    def test_config_override(self, tmp_path, capsys):
        config_path = tmp_path / "override.json"
        config_path.write_text('{"experiment": {"wavelength_nm": 300.0}}')

        assert run(["--config", str(config_path), "--no-delay", "--seed", "3"]) == 0
        assert "Wavelength:         300.0 nm" in capsys.readouterr().out
