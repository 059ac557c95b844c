"""
Configuration constants and settings for the photoelectric simulator.

All measurement parameters are centralized here for easy tuning.
Models take a config override and fall back to these dictionaries.
"""

from typing import Dict, Any


# Default experiment parameters (session state at start-up)
DEFAULT_EXPERIMENT_PARAMS: Dict[str, Any] = {
    "material_index": 0,        # Cesium
    "wavelength_nm": 400.0,     # nm - violet, above Cs threshold
    "intensity_uw_cm2": 5.0,    # uW/cm^2
    "voltage_v": 0.0,           # V - applied anode voltage
    "measurement_rounds": 10,   # noisy samples per reading
    "noise_level": 0.05,        # relative noise amplitude, [0, 1)
}


# Voltage sweep configuration
SWEEP_CONFIG: Dict[str, Any] = {
    "min_voltage": -3.0,        # V - deep retarding bias
    "max_voltage": 2.0,         # V - accelerating, near saturation
    "step_voltage": 0.1,        # V

    # Sweep voltages are rounded so bucket keys do not drift
    "voltage_decimals": 1,

    # Simulated instrument settling time between samples
    "sample_delay_ms": 50,

    # Emit a student status line every N points
    "plot_update_interval": 10,
}


# Closed-form photocurrent model coefficients
PHYSICS_MODEL_CONFIG: Dict[str, Any] = {
    # Saturation current per unit intensity (nA per uW/cm^2)
    "quantum_efficiency_na_per_uw_cm2": 0.1,

    # Rise from cutoff to saturation spans (V_stop + offset) volts
    "transition_span_offset_v": 2.0,

    # Noise scales with max(floor, ideal current) in nA
    "noise_floor_na": 0.01,

    # Current above this counts as "significant" for the threshold voltage
    "threshold_current_epsilon_na": 0.01,
}


# Data export configuration
DATA_EXPORT_CONFIG: Dict[str, Any] = {
    "csv_delimiter": ",",
    "raw_delimiter": ";",

    # File naming template
    "date_format": "%Y-%m-%d",
    "file_template": "photoelectric_data_{date}.csv",

    # Decimal precision for exported values
    "precision": {
        "work_function": 6,
        "wavelength": 1,
        "photon_energy": 8,
        "intensity": 3,
        "voltage": 6,
        "current": 8,
        "error": 8,
        "raw": 8,
    },

    # CSV column headers
    "headers": {
        "timestamp": "Timestamp",
        "material": "Material",
        "work_function": "Work_Function_eV",
        "wavelength": "Wavelength_nm",
        "photon_energy": "Photon_Energy_eV",
        "intensity": "Intensity_uW_per_cm2",
        "voltage": "Applied_Voltage_V",
        "current": "Photocurrent_nA",
        "error": "Standard_Error_nA",
        "rounds": "Measurement_Rounds",
        "raw": "Raw_Measurements",
    },
}


# Headless I-V plot configuration
PLOT_CONFIG: Dict[str, Any] = {
    "title": "I-V Characteristic Curve",
    "xlabel": "Applied Voltage (V)",
    "ylabel": "Photocurrent (nA)",
    "figsize": (8, 6),
    "dpi": 100,

    "font_sizes": {
        "title": 14,
        "axis": 11,
        "tick": 9,
        "legend": 9,
    },

    # One colour per (material, wavelength) series, cycled
    "series_colors": [
        "#1FB8CD", "#FFC185", "#B4413C", "#ECEBD5",
        "#5D878F", "#DB4545", "#D2BA4C",
    ],
    "marker_size": 5,
    "line_width": 1.5,
    "error_capsize": 3,
}


# Validation patterns
VALIDATION_PATTERNS: Dict[str, Any] = {
    # Light source range
    "wavelength_range": (100.0, 1000.0),   # nm

    # Intensity slider range (must also be > 0)
    "intensity_range": (0.1, 100.0),       # uW/cm^2

    "rounds_range": (1, 1000),

    # Noise level is a fraction, upper bound exclusive
    "noise_range": (0.0, 1.0),

    # Applied voltage bounds
    "voltage_bounds": {
        "min": -5.0,
        "max": 5.0,
    },
}


# Error messages
ERROR_MESSAGES: Dict[str, str] = {
    "no_material": "Please select a material first.",
    "invalid_material_index": "Material index must be between 0 and {max}.",
    "invalid_wavelength": "Wavelength must be between {min} and {max} nm.",
    "non_positive_wavelength": "Wavelength must be positive (got {value} nm).",
    "invalid_intensity": "Intensity must be between {min} and {max} uW/cm^2.",
    "invalid_rounds": "Measurement rounds must be between {min} and {max}.",
    "invalid_noise": "Noise level must be in [{min}, {max}).",
    "invalid_voltage": "Voltage must be between {min} and {max} V.",
    "invalid_bounds": "Sweep voltages must be finite numbers.",
    "invalid_step": "Step voltage must be positive.",
    "invalid_range": "Maximum voltage must not be below minimum voltage.",
    "measurement_in_progress": "Measurement already in progress.",
    "no_data": "No data to export.",
}


# Logging configuration
LOGGING_CONFIG: Dict[str, Any] = {
    "log_dir": None,            # Directory for the debug log file, None to disable
}
