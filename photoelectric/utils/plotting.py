"""
Photoelectric I-V Plot

Renders the recorded dataset as I-V characteristic curves using a headless
matplotlib Figure. Each (material, wavelength) series gets its own colour
and error bars showing the standard error of every point.
"""

from pathlib import Path
from typing import Optional, Dict, Any

from matplotlib.figure import Figure

from common.utils import get_logger
from ..config.settings import PLOT_CONFIG
from ..models.dataset import ExperimentDataset

_logger = get_logger("photoelectric")


def plot_iv_curves(
    dataset: ExperimentDataset,
    file_path: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Figure:
    """
    Plot photocurrent against applied voltage for every series.

    Points within a series are drawn in ascending voltage order. Colours
    cycle through the configured palette in first-seen series order.

    Args:
        dataset: Recorded readings
        file_path: If given, the figure is also saved there
        config: Optional configuration override (uses PLOT_CONFIG by default)

    Returns:
        Figure: The rendered figure
    """
    config = config or PLOT_CONFIG.copy()
    font_sizes = config["font_sizes"]
    colors = config["series_colors"]

    figure = Figure(figsize=tuple(config.get("figsize", (8, 6))), dpi=config.get("dpi", 100))
    axes = figure.add_subplot(111)

    for i, ((material, wavelength), points) in enumerate(dataset.groups().items()):
        ordered = sorted(points, key=lambda p: p.voltage)
        axes.errorbar(
            [p.voltage for p in ordered],
            [p.current for p in ordered],
            yerr=[p.error for p in ordered],
            fmt="o-",
            color=colors[i % len(colors)],
            markersize=config.get("marker_size", 5),
            linewidth=config.get("line_width", 1.5),
            capsize=config.get("error_capsize", 3),
            label=f"{material} - {wavelength:g}nm",
        )

    axes.set_xlabel(config["xlabel"], fontsize=font_sizes["axis"])
    axes.set_ylabel(config["ylabel"], fontsize=font_sizes["axis"])
    axes.set_title(config["title"], fontsize=font_sizes["title"])
    axes.tick_params(axis="both", which="major", labelsize=font_sizes["tick"])
    axes.grid(True, alpha=0.3)
    if len(dataset) > 0:
        axes.legend(fontsize=font_sizes["legend"])
    figure.tight_layout()

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(path)
        _logger.info(f"Saved I-V plot to {path}")

    return figure
