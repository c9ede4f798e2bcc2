"""
Distance metrics between fingerprints.

Three metrics are available, all on the 0-255 byte scale:

- simple: mean absolute byte-wise difference.
- prism: mean absolute difference computed per color channel, then
  averaged over R, G and B. For equal-length fingerprints this is always
  numerically equal to simple; it is kept so existing reports and
  thresholds stay comparable, and as the place to add channel weights.
- stddev: for each channel, the sample standard deviation of the signed
  differences; the distance is the mean over channels. A uniform
  brightness shift gives a large simple distance but a stddev near zero.

A pair matches when its distance is <= the threshold.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from .exceptions import ComparisonError, ConfigError
from .models import ChannelStats, Fingerprint, MatchResult

CHANNEL_NAMES = ('red', 'green', 'blue')


class DistanceMetric(Enum):
    """Selectable distance metric."""
    SIMPLE = 'simple'
    PER_CHANNEL = 'prism'
    STDDEV = 'stddev'

    @classmethod
    def from_name(cls, name: str) -> 'DistanceMetric':
        """
        Look up a metric by its command-line name.

        Raises:
            ConfigError: If the name is unknown
        """
        try:
            return cls(str(name).lower())
        except ValueError:
            valid = ', '.join(m.value for m in cls)
            raise ConfigError(f"Unknown metric '{name}' (choose from: {valid})") from None


def _differences(a: Fingerprint, b: Fingerprint) -> np.ndarray:
    """Signed byte differences a - b as an int array."""
    if len(a.cells) != len(b.cells):
        raise ComparisonError(
            f"Cannot compare fingerprints of different lengths "
            f"({len(a.cells)} vs {len(b.cells)} bytes)"
        )
    if not a.cells:
        raise ComparisonError("Cannot compare empty fingerprints")
    return a.as_array().astype(np.int32) - b.as_array().astype(np.int32)


def _channel_differences(a: Fingerprint, b: Fingerprint) -> np.ndarray:
    """Signed differences reshaped to (cells, 3), one column per channel."""
    diffs = _differences(a, b)
    if diffs.size % 3:
        raise ComparisonError(f"Fingerprint length {diffs.size} is not a multiple of 3")
    return diffs.reshape(-1, 3)


def simple_distance(a: Fingerprint, b: Fingerprint) -> float:
    """Mean absolute difference over all bytes."""
    diffs = _differences(a, b)
    return float(np.abs(diffs).sum()) / diffs.size


def per_channel_distance(a: Fingerprint, b: Fingerprint) -> float:
    """Mean of the per-channel mean absolute differences."""
    diffs = _channel_differences(a, b)
    samples = diffs.shape[0]
    red, green, blue = (float(total) / samples for total in np.abs(diffs).sum(axis=0))
    return (red + green + blue) / 3.0


def _channel_stddevs(diffs: np.ndarray) -> np.ndarray:
    if diffs.shape[0] < 2:
        raise ComparisonError("Standard deviation needs at least two cells per channel")
    # Bessel's correction: divide by n - 1
    return diffs.astype(np.float64).std(axis=0, ddof=1)


def stddev_distance(a: Fingerprint, b: Fingerprint) -> float:
    """Mean over channels of the standard deviation of signed differences."""
    stds = _channel_stddevs(_channel_differences(a, b))
    return float(np.abs(stds).sum()) / 3.0


_METRIC_FUNCTIONS = {
    DistanceMetric.SIMPLE: simple_distance,
    DistanceMetric.PER_CHANNEL: per_channel_distance,
    DistanceMetric.STDDEV: stddev_distance,
}


def distance(a: Fingerprint, b: Fingerprint, metric: DistanceMetric = DistanceMetric.SIMPLE) -> float:
    """
    Distance between two fingerprints under the given metric.

    Raises:
        ComparisonError: If the fingerprints have different lengths
    """
    return _METRIC_FUNCTIONS[metric](a, b)


def is_match(dist: float, threshold: float) -> bool:
    """Inclusive threshold test."""
    if threshold < 0:
        raise ConfigError(f"Threshold must be non-negative, got {threshold}")
    return dist <= threshold


def compare(
    a: Fingerprint,
    b: Fingerprint,
    metric: DistanceMetric = DistanceMetric.SIMPLE,
    threshold: float = 0.0,
) -> MatchResult:
    """Compare two fingerprints and decide whether they match."""
    dist = distance(a, b, metric)
    return MatchResult(a=a, b=b, distance=dist, matched=is_match(dist, threshold), metric=metric.value)


def channel_statistics(a: Fingerprint, b: Fingerprint) -> list[ChannelStats]:
    """
    Per-channel breakdown of the differences between two fingerprints.

    Returns:
        One ChannelStats per channel (red, green, blue) with the mean
        absolute difference, mean signed difference and standard deviation
    """
    diffs = _channel_differences(a, b)
    samples = diffs.shape[0]
    abs_means = np.abs(diffs).sum(axis=0) / samples
    means = diffs.sum(axis=0) / samples
    stds = _channel_stddevs(diffs)
    return [
        ChannelStats(
            channel=CHANNEL_NAMES[i],
            mean_abs=float(abs_means[i]),
            mean=float(means[i]),
            stddev=float(stds[i]),
        )
        for i in range(3)
    ]


__all__ = [
    'DistanceMetric',
    'CHANNEL_NAMES',
    'simple_distance',
    'per_channel_distance',
    'stddev_distance',
    'distance',
    'is_match',
    'compare',
    'channel_statistics',
]
