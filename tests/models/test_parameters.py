"""
Unit tests for ExperimentParameters validation and snapshots.
"""

import pytest

from photoelectric.models.errors import InvalidParameterError, PreconditionError
from photoelectric.models.parameters import ExperimentParameters, validate_rounds
from photoelectric.models.physics import MATERIALS


class TestFromDefaults:
    """Tests for ExperimentParameters.from_defaults()"""

    def test_default_session(self):
        params = ExperimentParameters.from_defaults()

        assert params.material is MATERIALS[0]
        assert params.wavelength_nm == 400.0
        assert params.intensity_uw_cm2 == 5.0
        assert params.measurement_rounds == 10
        assert params.noise_level == 0.05

    def test_no_material(self):
        params = ExperimentParameters.from_defaults({"material_index": None})
        assert params.material is None

    def test_overrides(self):
        params = ExperimentParameters.from_defaults({"material_index": 3, "wavelength_nm": 250})
        assert params.material.symbol == "Al"
        assert params.wavelength_nm == 250.0


class TestSnapshot:
    """Tests for snapshot()"""

    def test_snapshot_unaffected_by_later_edits(self, cesium_params):
        snapshot = cesium_params.snapshot()
        cesium_params.measurement_rounds = 99
        cesium_params.wavelength_nm = 250.0

        assert snapshot.measurement_rounds == 5
        assert snapshot.wavelength_nm == 400.0

    def test_require_material(self, cesium_params):
        assert cesium_params.require_material() is MATERIALS[0]

    def test_require_material_missing(self):
        with pytest.raises(PreconditionError):
            ExperimentParameters().require_material()


class TestValidate:
    """Tests for validate()"""

    def test_valid(self, cesium_params):
        assert cesium_params.validate() is True

    @pytest.mark.parametrize("field,value,parameter", [
        ("wavelength_nm", 0.0, "wavelength"),
        ("wavelength_nm", -400.0, "wavelength"),
        ("wavelength_nm", 1500.0, "wavelength"),
        ("intensity_uw_cm2", 0.0, "intensity"),
        ("intensity_uw_cm2", 500.0, "intensity"),
        ("measurement_rounds", 0, "rounds"),
        ("noise_level", 1.0, "noise"),
        ("noise_level", -0.1, "noise"),
        ("voltage_v", 10.0, "voltage"),
    ])
    def test_out_of_range(self, cesium_params, field, value, parameter):
        setattr(cesium_params, field, value)
        with pytest.raises(InvalidParameterError) as exc_info:
            cesium_params.validate()
        assert exc_info.value.parameter == parameter

    def test_non_numeric(self, cesium_params):
        cesium_params.wavelength_nm = "violet"
        with pytest.raises(InvalidParameterError):
            cesium_params.validate()

    def test_custom_rules(self, cesium_params):
        rules = {
            "wavelength_range": (500.0, 600.0),
            "intensity_range": (0.1, 100.0),
            "rounds_range": (1, 1000),
            "noise_range": (0.0, 1.0),
        }
        with pytest.raises(InvalidParameterError):
            cesium_params.validate(rules)


class TestValidateRounds:
    """Tests for validate_rounds()"""

    def test_valid(self):
        assert validate_rounds(1) == 1
        assert validate_rounds(1000) == 1000

    @pytest.mark.parametrize("rounds", [0, -3, 1001, 2.5, "10", True, None])
    def test_invalid(self, rounds):
        with pytest.raises(InvalidParameterError):
            validate_rounds(rounds)
