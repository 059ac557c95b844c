"""
Unit tests for calculate_statistics() and MeasurementStatistics.

Tests the mean, sample standard deviation and standard error reported for
repeated readings at one voltage.
"""

import math

import pytest
import numpy as np
from numpy.testing import assert_almost_equal

from photoelectric.models.sampler import MeasurementStatistics, calculate_statistics


class TestCalculateStatistics:
    """Tests for calculate_statistics()"""

    def test_basic_statistics(self):
        """Calculate statistics for simple dataset."""
        stats = calculate_statistics([1.0, 2.0, 3.0, 4.0, 5.0])

        assert stats.count == 5
        assert_almost_equal(stats.mean, 3.0)
        assert_almost_equal(stats.std_dev, math.sqrt(2.5))
        assert_almost_equal(stats.standard_error, math.sqrt(2.5) / math.sqrt(5))

    def test_sample_standard_deviation(self):
        """Uses the n-1 denominator."""
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        stats = calculate_statistics(values)
        assert_almost_equal(stats.std_dev, np.std(values, ddof=1))

    def test_single_value(self):
        """Single value has zero spread by convention."""
        stats = calculate_statistics([0.42])

        assert stats.count == 1
        assert stats.mean == 0.42
        assert stats.std_dev == 0.0
        assert stats.standard_error == 0.0

    def test_empty_list_returns_zeros(self):
        stats = calculate_statistics([])

        assert stats.count == 0
        assert stats.mean == 0.0
        assert stats.std_dev == 0.0
        assert stats.standard_error == 0.0
        assert stats.raw_measurements == ()

    def test_constant_values(self):
        stats = calculate_statistics([0.1, 0.1, 0.1])
        assert_almost_equal(stats.std_dev, 0.0)
        assert_almost_equal(stats.standard_error, 0.0)

    def test_raw_measurements_keep_order(self):
        values = [0.3, 0.1, 0.2]
        stats = calculate_statistics(values)
        assert stats.raw_measurements == (0.3, 0.1, 0.2)

    def test_accepts_numpy_array(self):
        stats = calculate_statistics(np.array([1.0, 3.0]))
        assert stats.count == 2
        assert_almost_equal(stats.mean, 2.0)


class TestMeasurementStatistics:
    """Tests for MeasurementStatistics display helpers."""

    def test_cv_percent(self):
        stats = MeasurementStatistics(mean=2.0, std_dev=0.1, standard_error=0.05, count=4)
        assert_almost_equal(stats.cv_percent, 5.0)

    def test_cv_zero_mean(self):
        stats = MeasurementStatistics(mean=0.0, std_dev=0.1, standard_error=0.05)
        assert stats.cv_percent == 0.0

    @pytest.mark.parametrize("std,quality", [
        (0.001, "Excellent"),
        (0.03, "Good"),
        (0.08, "Fair"),
        (0.5, "Noisy"),
    ])
    def test_quality(self, std, quality):
        stats = MeasurementStatistics(mean=1.0, std_dev=std, standard_error=std / 2)
        assert stats.quality == quality

    def test_format_for_student(self):
        stats = calculate_statistics([1.0, 1.0])
        text = stats.format_for_student()
        assert "±" in text
        assert "nA" in text
        assert "2 measurements" in text

    def test_format_for_console(self):
        text = calculate_statistics([1.0, 2.0]).format_for_console()
        assert "n=2" in text
        assert "SE=" in text
