"""
Student-friendly error message templates for the photoelectric simulator.

Maps technical errors to actionable guidance that answers:
1. What happened?
2. Why might it have happened?
3. What should I do?
"""

from dataclasses import dataclass
from typing import List, Optional, Dict


@dataclass
class ErrorTemplate:
    """Template for a student-friendly error message."""
    title: str
    message: str
    causes: List[str]
    actions: List[str]


PHOTOELECTRIC_ERRORS: Dict[str, ErrorTemplate] = {
    "no_material_selected": ErrorTemplate(
        title="No Material Selected",
        message="Please select a material first.",
        causes=[
            "The cathode material has not been chosen yet",
        ],
        actions=[
            "Pick one of the seven cathode materials",
            "Then repeat the measurement",
        ]
    ),

    "invalid_wavelength": ErrorTemplate(
        title="Wavelength Out of Range",
        message="The requested wavelength cannot be produced by the light source.",
        causes=[
            "Wavelength is zero or negative",
            "Wavelength is outside the 100-1000 nm range of the source",
        ],
        actions=[
            "Choose a wavelength between 100 and 1000 nm",
        ]
    ),

    "invalid_intensity": ErrorTemplate(
        title="Invalid Light Intensity",
        message="The light intensity must be greater than zero.",
        causes=[
            "Intensity was set to zero or a negative value",
        ],
        actions=[
            "Set a positive intensity (for example 5 uW/cm^2)",
        ]
    ),

    "invalid_rounds": ErrorTemplate(
        title="Invalid Number of Measurements",
        message="At least one measurement round is needed at each voltage.",
        causes=[
            "Measurement rounds was set below 1",
        ],
        actions=[
            "Use 10 or more rounds for a meaningful standard error",
        ]
    ),

    "invalid_noise": ErrorTemplate(
        title="Invalid Noise Level",
        message="The noise level must be at least 0 and below 1.",
        causes=[
            "Noise level was set negative or to 100% or more",
        ],
        actions=[
            "Use a noise level such as 0.05 (5%)",
            "Set the noise level to 0 for ideal readings",
        ]
    ),

    "invalid_voltage": ErrorTemplate(
        title="Applied Voltage Out of Range",
        message="The applied voltage is outside the supply range.",
        causes=[
            "Voltage was set beyond the -5 V to +5 V supply limits",
        ],
        actions=[
            "Choose a voltage between -5 V and +5 V",
        ]
    ),

    "invalid_sweep": ErrorTemplate(
        title="Invalid Voltage Sweep",
        message="The sweep range or step size is not usable.",
        causes=[
            "Start or stop voltage is not a finite number",
            "Step voltage is zero or negative",
            "Stop voltage is below start voltage",
        ],
        actions=[
            "Use a positive step (e.g. 0.1 V)",
            "Make sure the maximum voltage is above the minimum",
        ]
    ),

    "measurement_in_progress": ErrorTemplate(
        title="Measurement Already Running",
        message="Wait for the current measurement to finish or stop it first.",
        causes=[
            "A single measurement or voltage sweep is still in progress",
        ],
        actions=[
            "Wait for the progress indicator to finish",
            "Stop the sweep before starting a new one",
        ]
    ),

    "no_data_to_export": ErrorTemplate(
        title="No Data to Export",
        message="There are no recorded data points yet.",
        causes=[
            "No measurement has been taken in this session",
            "The data set was cleared",
        ],
        actions=[
            "Take a single measurement or run a voltage sweep first",
        ]
    ),

    "data_save_failed": ErrorTemplate(
        title="Could Not Save Data",
        message="Failed to save the measurement data to file.",
        causes=[
            "Disk is full",
            "File is open in another program",
            "Invalid characters in filename",
        ],
        actions=[
            "Check available disk space",
            "Close any programs that might have the file open",
            "Try saving with a different filename",
        ]
    ),
}


def get_error(error_key: str) -> Optional[ErrorTemplate]:
    """
    Get an error template by key.

    Args:
        error_key: The error identifier (e.g., "no_material_selected")

    Returns:
        ErrorTemplate if found, None otherwise
    """
    return PHOTOELECTRIC_ERRORS.get(error_key)


def format_error_message(template: ErrorTemplate) -> str:
    """
    Format an error template as a plain text message.

    Args:
        template: The error template to format

    Returns:
        Formatted error message string
    """
    lines = [
        template.title,
        "",
        template.message,
        "",
    ]

    if template.causes:
        lines.append("Possible causes:")
        for cause in template.causes:
            lines.append(f"  - {cause}")
        lines.append("")

    if template.actions:
        lines.append("What to do:")
        for action in template.actions:
            lines.append(f"  - {action}")

    return "\n".join(lines)
