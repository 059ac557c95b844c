"""
Unit tests for the headless I-V plot.
"""

from matplotlib.figure import Figure

from photoelectric.models.dataset import ExperimentDataset
from photoelectric.utils.plotting import plot_iv_curves
from tests.mocks import make_point


def two_series():
    return ExperimentDataset([
        make_point(1.0, 0.5, error=0.01),
        make_point(-1.0, 0.0, error=0.001),
        make_point(0.0, 0.2, error=0.005, wavelength=300.0),
        make_point(0.0, 0.17, error=0.004),
    ])


class TestPlotIVCurves:
    """Tests for plot_iv_curves()"""

    def test_returns_figure(self):
        assert isinstance(plot_iv_curves(two_series()), Figure)

    def test_one_errorbar_series_per_group(self):
        axes = plot_iv_curves(two_series()).axes[0]
        assert len(axes.containers) == 2

        labels = [text.get_text() for text in axes.get_legend().get_texts()]
        assert labels == ["Cesium (Cs) - 400nm", "Cesium (Cs) - 300nm"]

    def test_series_sorted_by_voltage(self):
        axes = plot_iv_curves(two_series()).axes[0]
        line = axes.containers[0].lines[0]
        assert list(line.get_xdata()) == [-1.0, 0.0, 1.0]

    def test_axis_labels(self):
        axes = plot_iv_curves(two_series()).axes[0]
        assert axes.get_xlabel() == "Applied Voltage (V)"
        assert axes.get_ylabel() == "Photocurrent (nA)"

    def test_saves_file(self, tmp_path):
        path = tmp_path / "plots" / "iv.png"
        plot_iv_curves(two_series(), str(path))
        assert path.exists()
        assert path.stat().st_size > 0

    def test_empty_dataset(self, tmp_path):
        figure = plot_iv_curves(ExperimentDataset(), str(tmp_path / "empty.png"))
        assert figure.axes[0].get_legend() is None
