"""
Exception hierarchy for the perceptual duplicate finder.

Per-image failures (DecodeError, ValidationError, CacheIOError) and per-pair
failures (ComparisonError) are recoverable: callers record them and move on.
ConfigError is fatal and aborts a run before any work is scheduled.
"""


class PdupeError(Exception):
    """Base class for all errors raised by this package."""


class DecodeError(PdupeError):
    """Image bytes are unreadable, corrupt or in an unsupported format."""


class ValidationError(PdupeError):
    """An extracted fingerprint violates its structural invariant."""


class CacheIOError(PdupeError, OSError):
    """A sidecar cache file could not be read, written or stat'ed."""


class ComparisonError(PdupeError, ValueError):
    """Two fingerprints cannot be compared (e.g. different lengths)."""


class ConfigError(PdupeError, ValueError):
    """Invalid command-line or configuration input."""


__all__ = [
    'PdupeError',
    'DecodeError',
    'ValidationError',
    'CacheIOError',
    'ComparisonError',
    'ConfigError',
]
