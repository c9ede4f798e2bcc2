"""
Unit tests for the comparison engine.
"""

import numpy as np
import pytest

from pdupe.comparison import (
    DistanceMetric,
    channel_statistics,
    compare,
    distance,
    is_match,
    per_channel_distance,
    simple_distance,
    stddev_distance,
)
from pdupe.exceptions import ComparisonError, ConfigError

ALL_METRICS = list(DistanceMetric)


class TestDistanceMetric:
    """Test metric selection by name."""

    def test_from_name(self):
        assert DistanceMetric.from_name('simple') is DistanceMetric.SIMPLE
        assert DistanceMetric.from_name('prism') is DistanceMetric.PER_CHANNEL
        assert DistanceMetric.from_name('STDDEV') is DistanceMetric.STDDEV

    def test_unknown_name(self):
        with pytest.raises(ConfigError):
            DistanceMetric.from_name('euclid')


class TestScenarios:
    """Known-answer comparisons."""

    def test_identical_fingerprints_match_at_zero(self, make_fingerprint):
        a = make_fingerprint(7, name="/a.jpg")
        b = make_fingerprint(7, name="/b.jpg")
        result = compare(a, b, DistanceMetric.SIMPLE, threshold=0)
        assert result.distance == 0.0
        assert result.matched is True

    def test_white_against_black(self, make_fingerprint):
        assert simple_distance(make_fingerprint(255), make_fingerprint(0)) == 255.0

    def test_brightness_shift(self, make_fingerprint, random_cells):
        cells = random_cells(11, high=240)
        shifted = bytes(min(c + 10, 255) for c in cells)
        a = make_fingerprint(cells)
        b = make_fingerprint(shifted)
        assert stddev_distance(a, b) == pytest.approx(0.0, abs=1e-9)
        assert simple_distance(a, b) == pytest.approx(10.0)

    def test_brightness_shift_with_clamping(self, make_fingerprint, random_cells):
        cells = random_cells(12)
        shifted = bytes(min(c + 10, 255) for c in cells)
        a = make_fingerprint(cells)
        b = make_fingerprint(shifted)
        assert stddev_distance(a, b) < 2.0
        assert 9.0 < simple_distance(a, b) <= 10.0

    def test_dispersion_is_not_magnitude(self, make_fingerprint):
        # alternating +/-20 differences: large stddev, same simple distance
        a = make_fingerprint(bytes([100]) * 3072)
        b = make_fingerprint(bytes([120, 120, 120, 80, 80, 80]) * 512)
        assert simple_distance(a, b) == 20.0
        assert stddev_distance(a, b) > 19.0


class TestProperties:
    """Properties that hold for every metric."""

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_identity(self, metric, make_fingerprint, random_cells):
        fp = make_fingerprint(random_cells(21))
        assert distance(fp, fp, metric) == 0.0

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_symmetry(self, metric, make_fingerprint, random_cells):
        a = make_fingerprint(random_cells(31))
        b = make_fingerprint(random_cells(32))
        assert distance(a, b, metric) == pytest.approx(distance(b, a, metric), abs=1e-12)

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_per_channel_equals_simple(self, seed, make_fingerprint, random_cells):
        a = make_fingerprint(random_cells(seed))
        b = make_fingerprint(random_cells(seed + 100))
        assert per_channel_distance(a, b) == pytest.approx(simple_distance(a, b), rel=1e-12)

    def test_per_channel_equals_simple_on_small_grid(self, make_fingerprint):
        a = make_fingerprint(bytes([0, 50, 255, 3, 3, 3]))
        b = make_fingerprint(bytes([10, 0, 0, 3, 4, 5]))
        assert per_channel_distance(a, b) == pytest.approx(simple_distance(a, b))

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_distance_is_non_negative(self, metric, make_fingerprint, random_cells):
        a = make_fingerprint(random_cells(41))
        b = make_fingerprint(random_cells(42))
        assert distance(a, b, metric) >= 0.0


class TestStdDev:
    """Test the stddev metric against a direct computation."""

    def test_matches_bessel_corrected_formula(self, make_fingerprint, random_cells):
        a = make_fingerprint(random_cells(51))
        b = make_fingerprint(random_cells(52))
        diffs = (np.frombuffer(a.cells, np.uint8).astype(float)
                 - np.frombuffer(b.cells, np.uint8).astype(float)).reshape(-1, 3)
        expected = 0.0
        for channel in range(3):
            column = diffs[:, channel]
            mean = column.sum() / len(column)
            expected += np.sqrt(((column - mean) ** 2).sum() / (len(column) - 1))
        assert stddev_distance(a, b) == pytest.approx(expected / 3.0)

    def test_needs_two_cells(self, make_fingerprint):
        a = make_fingerprint(bytes([1, 2, 3]))
        b = make_fingerprint(bytes([4, 5, 6]))
        with pytest.raises(ComparisonError):
            stddev_distance(a, b)


class TestPreconditions:
    """Test invalid comparisons are reported, not padded."""

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_length_mismatch(self, metric, make_fingerprint):
        a = make_fingerprint(bytes([1]) * 3072)
        b = make_fingerprint(bytes([1]) * 48)
        with pytest.raises(ComparisonError):
            distance(a, b, metric)

    def test_empty(self, make_fingerprint):
        with pytest.raises(ComparisonError):
            simple_distance(make_fingerprint(b""), make_fingerprint(b""))


class TestThreshold:
    """Test match decisions."""

    def test_inclusive_boundary(self):
        assert is_match(10.0, 10.0) is True
        assert is_match(10.000001, 10.0) is False
        assert is_match(0.0, 0.0) is True

    def test_negative_threshold(self):
        with pytest.raises(ConfigError):
            is_match(1.0, -0.5)

    def test_compare_exact_threshold(self, make_fingerprint):
        a = make_fingerprint(100)
        b = make_fingerprint(110)
        result = compare(a, b, DistanceMetric.SIMPLE, threshold=10)
        assert result.distance == 10.0
        assert result.matched is True
        assert result.metric == 'simple'

    def test_compare_above_threshold(self, make_fingerprint):
        result = compare(make_fingerprint(100), make_fingerprint(111), DistanceMetric.PER_CHANNEL, 10)
        assert result.matched is False
        assert result.metric == 'prism'


class TestChannelStatistics:
    """Test per-channel breakdown."""

    def test_breakdown(self, make_fingerprint):
        a = make_fingerprint(bytes([10, 20, 30, 10, 20, 30]))
        b = make_fingerprint(bytes([0, 20, 40, 4, 20, 40]))
        red, green, blue = channel_statistics(a, b)
        assert red.channel == 'red'
        assert red.mean_abs == pytest.approx(8.0)
        assert red.mean == pytest.approx(8.0)
        assert green.mean_abs == 0.0
        assert blue.mean == pytest.approx(-10.0)
        assert blue.stddev == pytest.approx(0.0)

    def test_channel_means_average_to_simple(self, make_fingerprint, random_cells):
        a = make_fingerprint(random_cells(61))
        b = make_fingerprint(random_cells(62))
        stats = channel_statistics(a, b)
        assert sum(s.mean_abs for s in stats) / 3 == pytest.approx(simple_distance(a, b))
