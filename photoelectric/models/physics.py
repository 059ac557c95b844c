"""
Photoelectric Physics Model

Closed-form macroscopic model of the photoelectric effect. Every function in
this module is pure: results depend only on the arguments and the fixed
physical constants, so the module can be used without any session state.

Energies are in eV, voltages in V, wavelengths in nm, intensities in
uW/cm^2 and currents in nA. Because kinetic energy in eV is numerically the
stopping potential in volts, the stopping potential is the maximum kinetic
energy itself, not a conversion of it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Dict

from ..config.settings import PHYSICS_MODEL_CONFIG, ERROR_MESSAGES
from .errors import InvalidParameterError


@dataclass(frozen=True)
class PhysicsConstants:
    """Physical constants used by the model."""
    planck_ev_s: float = 4.136e-15
    speed_of_light_mps: float = 2.998e8
    elementary_charge_c: float = 1.602e-19
    hc_ev_m: float = 1.240e-6


CONSTANTS = PhysicsConstants()


@dataclass(frozen=True)
class Material:
    """Cathode material from the fixed catalog."""
    name: str
    work_function_ev: float
    symbol: str

    def __post_init__(self):
        if self.work_function_ev <= 0:
            raise InvalidParameterError(
                f"Work function must be positive (got {self.work_function_ev} eV)",
                parameter="material",
            )

    @property
    def label(self) -> str:
        """Display label, e.g. 'Cesium (Cs) (phi = 2.10 eV)'."""
        return f"{self.name} (phi = {self.work_function_ev:.2f} eV)"


MATERIALS: Tuple[Material, ...] = (
    Material("Cesium (Cs)", 2.10, "Cs"),
    Material("Sodium (Na)", 2.28, "Na"),
    Material("Potassium (K)", 2.30, "K"),
    Material("Aluminum (Al)", 4.08, "Al"),
    Material("Copper (Cu)", 4.70, "Cu"),
    Material("Silver (Ag)", 4.73, "Ag"),
    Material("Gold (Au)", 5.10, "Au"),
)


def get_material(index: int) -> Material:
    """
    Select a material from the catalog by index.

    Raises:
        InvalidParameterError: If the index is outside the catalog
    """
    if not 0 <= index < len(MATERIALS):
        raise InvalidParameterError(
            ERROR_MESSAGES["invalid_material_index"].format(max=len(MATERIALS) - 1),
            parameter="material",
        )
    return MATERIALS[index]


def find_material(key: str) -> Optional[Material]:
    """Look up a material by full name, bare name or symbol (case-insensitive)."""
    wanted = key.strip().lower()
    for material in MATERIALS:
        bare_name = material.name.split(" (")[0].lower()
        if wanted in (material.name.lower(), bare_name, material.symbol.lower()):
            return material
    return None


def photon_energy_ev(wavelength_nm: float, constants: PhysicsConstants = CONSTANTS) -> float:
    """
    Photon energy E = hc / lambda.

    Args:
        wavelength_nm: Wavelength in nm, must be positive

    Returns:
        Photon energy in eV

    Raises:
        InvalidParameterError: If wavelength_nm <= 0
    """
    if not wavelength_nm > 0:
        raise InvalidParameterError(
            f"Wavelength must be positive (got {wavelength_nm} nm).",
            parameter="wavelength",
        )
    return constants.hc_ev_m * 1e9 / wavelength_nm


def max_kinetic_energy_ev(photon_energy: float, work_function_ev: float) -> float:
    """Maximum photoelectron kinetic energy, zero below threshold."""
    return max(0.0, photon_energy - work_function_ev)


def stopping_potential_v(max_kinetic_energy: float) -> float:
    """Stopping potential in volts; numerically the max KE in eV."""
    return max_kinetic_energy


def emits_photoelectrons(photon_energy: float, work_function_ev: float) -> bool:
    """True when the photon energy exceeds the work function."""
    return photon_energy > work_function_ev


def threshold_wavelength_nm(work_function_ev: float, constants: PhysicsConstants = CONSTANTS) -> float:
    """Longest wavelength that still ejects electrons from the material."""
    return constants.hc_ev_m * 1e9 / work_function_ev


def ideal_current_na(
    voltage_v: float,
    stopping_potential: float,
    intensity_uw_cm2: float,
    config: Optional[Dict] = None,
) -> float:
    """
    Noiseless photocurrent at an applied voltage.

    The current is zero at and below the retarding cutoff -V_stop, rises
    linearly over a span of (V_stop + 2) volts and then saturates at a value
    proportional to the light intensity. A non-positive stopping potential
    means no emission at all, so the current is zero at every voltage.

    Args:
        voltage_v: Applied anode voltage (V)
        stopping_potential: Stopping potential (V)
        intensity_uw_cm2: Light intensity (uW/cm^2)
        config: Optional model coefficients (defaults to PHYSICS_MODEL_CONFIG)

    Returns:
        Ideal current in nA
    """
    if stopping_potential <= 0:
        return 0.0
    if voltage_v <= -stopping_potential:
        return 0.0

    cfg = config or PHYSICS_MODEL_CONFIG
    saturation_current = intensity_uw_cm2 * cfg["quantum_efficiency_na_per_uw_cm2"]
    span = stopping_potential + cfg["transition_span_offset_v"]
    normalized = min(1.0, max(0.0, (voltage_v + stopping_potential) / span))
    return saturation_current * normalized


def photocurrent_na(
    voltage_v: float,
    material: Material,
    wavelength_nm: float,
    intensity_uw_cm2: float,
    config: Optional[Dict] = None,
) -> float:
    """Ideal current for a material illuminated at wavelength_nm."""
    energy = photon_energy_ev(wavelength_nm)
    stopping = stopping_potential_v(max_kinetic_energy_ev(energy, material.work_function_ev))
    return ideal_current_na(voltage_v, stopping, intensity_uw_cm2, config)


@dataclass(frozen=True)
class PhysicsReadouts:
    """Derived quantities shown next to the controls."""
    photon_energy_ev: float
    max_kinetic_energy_ev: float
    stopping_potential_v: float
    emits: bool


def compute_readouts(material: Material, wavelength_nm: float) -> PhysicsReadouts:
    """Photon energy, max KE and stopping potential for the current settings."""
    energy = photon_energy_ev(wavelength_nm)
    max_ke = max_kinetic_energy_ev(energy, material.work_function_ev)
    return PhysicsReadouts(
        photon_energy_ev=energy,
        max_kinetic_energy_ev=max_ke,
        stopping_potential_v=stopping_potential_v(max_ke),
        emits=emits_photoelectrons(energy, material.work_function_ev),
    )
