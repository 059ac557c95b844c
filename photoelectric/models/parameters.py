"""
Experiment Parameters

Mutable session state edited by the controls: material, light settings,
applied voltage, rounds per reading and noise level. Measurements always
work on a snapshot so later edits never reach readings already taken.
"""

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Optional, Dict, Any

from ..config.settings import DEFAULT_EXPERIMENT_PARAMS, VALIDATION_PATTERNS, ERROR_MESSAGES
from .errors import InvalidParameterError, PreconditionError
from .physics import Material, get_material


@dataclass
class ExperimentParameters:
    """Current experiment settings."""
    material: Optional[Material] = None
    wavelength_nm: float = 400.0
    intensity_uw_cm2: float = 5.0
    voltage_v: float = 0.0
    measurement_rounds: int = 10
    noise_level: float = 0.05

    @classmethod
    def from_defaults(cls, defaults: Optional[Dict[str, Any]] = None) -> "ExperimentParameters":
        """
        Build parameters from a defaults dict (DEFAULT_EXPERIMENT_PARAMS layout).

        A material_index of None leaves the material unselected.
        """
        values = {**DEFAULT_EXPERIMENT_PARAMS, **(defaults or {})}
        index = values.get("material_index")
        return cls(
            material=get_material(index) if index is not None else None,
            wavelength_nm=float(values["wavelength_nm"]),
            intensity_uw_cm2=float(values["intensity_uw_cm2"]),
            voltage_v=float(values["voltage_v"]),
            measurement_rounds=int(values["measurement_rounds"]),
            noise_level=float(values["noise_level"]),
        )

    def snapshot(self) -> "ExperimentParameters":
        """Independent copy of the current settings."""
        return dataclasses.replace(self)

    def require_material(self) -> Material:
        """
        Return the selected material.

        Raises:
            PreconditionError: If no material is selected
        """
        if self.material is None:
            raise PreconditionError(ERROR_MESSAGES["no_material"])
        return self.material

    def validate(self, validation: Optional[Dict[str, Any]] = None) -> bool:
        """
        Validate the light, rounds, noise and voltage settings.

        Numeric fields are stored back as floats (rounds as int) once they
        pass.
        The material is checked separately by require_material() so that
        the missing-material case surfaces as a PreconditionError.

        Args:
            validation: Optional override of VALIDATION_PATTERNS

        Returns:
            bool: True if all parameters are valid

        Raises:
            InvalidParameterError: If any parameter is out of range
        """
        rules = validation or VALIDATION_PATTERNS

        try:
            wavelength = float(self.wavelength_nm)
            intensity = float(self.intensity_uw_cm2)
            voltage = float(self.voltage_v)
            noise = float(self.noise_level)
        except (TypeError, ValueError):
            raise InvalidParameterError("Please enter valid numerical values.")

        if wavelength <= 0:
            raise InvalidParameterError(
                ERROR_MESSAGES["non_positive_wavelength"].format(value=wavelength),
                parameter="wavelength",
            )
        wl_min, wl_max = rules["wavelength_range"]
        if not (wl_min <= wavelength <= wl_max):
            raise InvalidParameterError(
                ERROR_MESSAGES["invalid_wavelength"].format(min=wl_min, max=wl_max),
                parameter="wavelength",
            )

        int_min, int_max = rules["intensity_range"]
        if intensity <= 0 or not (int_min <= intensity <= int_max):
            raise InvalidParameterError(
                ERROR_MESSAGES["invalid_intensity"].format(min=int_min, max=int_max),
                parameter="intensity",
            )

        rounds = validate_rounds(self.measurement_rounds, rules)

        noise_min, noise_max = rules["noise_range"]
        if not (noise_min <= noise < noise_max):
            raise InvalidParameterError(
                ERROR_MESSAGES["invalid_noise"].format(min=noise_min, max=noise_max),
                parameter="noise",
            )

        bounds = rules.get("voltage_bounds", {})
        v_min = bounds.get("min", -float("inf"))
        v_max = bounds.get("max", float("inf"))
        if not (v_min <= voltage <= v_max):
            raise InvalidParameterError(
                ERROR_MESSAGES["invalid_voltage"].format(min=v_min, max=v_max),
                parameter="voltage",
            )

        self.wavelength_nm = wavelength
        self.intensity_uw_cm2 = intensity
        self.voltage_v = voltage
        self.noise_level = noise
        self.measurement_rounds = rounds
        return True


def validate_rounds(rounds: Any, validation: Optional[Dict[str, Any]] = None) -> int:
    """
    Check a measurement rounds value.

    Returns:
        The rounds as an int

    Raises:
        InvalidParameterError: If rounds is not an integer within range
    """
    rules = validation or VALIDATION_PATTERNS
    r_min, r_max = rules["rounds_range"]
    if (isinstance(rounds, bool) or not isinstance(rounds, numbers.Integral)
            or not (r_min <= rounds <= r_max)):
        raise InvalidParameterError(
            ERROR_MESSAGES["invalid_rounds"].format(min=r_min, max=r_max),
            parameter="rounds",
        )
    return int(rounds)
