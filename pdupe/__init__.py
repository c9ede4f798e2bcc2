"""
pdupe - Perceptual Duplicate Photo Finder
=========================================
Finds visually similar or duplicate photographs by reducing each image to a
small grid of averaged colors and comparing those fingerprints.

Features:
- 32x32 color-grid fingerprints (configurable grid)
- Three distance metrics: simple, prism (per channel), stddev
- Inclusive, configurable match threshold
- Gzip-compressed sidecar cache next to each image (.cd.gz)
- Parallel fingerprinting with per-image fault isolation
- All-pairs or reference-set matching
"""

__version__ = "1.0.0"

from .models import RasterImage, Fingerprint, MatchResult, FingerprintOutcome, ScanStats
from .exceptions import (
    PdupeError,
    DecodeError,
    ValidationError,
    CacheIOError,
    ComparisonError,
    ConfigError,
)
from .config import DEFAULT_ROWS, DEFAULT_COLS, DEFAULT_THRESHOLD, CACHE_SUFFIX
from .comparison import DistanceMetric, distance, compare, is_match
from .cache import encode_fingerprint, decode_fingerprint, read_cache, write_cache
from .scanner import (
    load_raster,
    extract_fingerprint,
    fingerprint_file,
    fingerprint_image,
    fingerprint_images_parallel,
    find_all_pairs_matches,
    find_reference_matches,
)

__all__ = [
    "RasterImage",
    "Fingerprint",
    "MatchResult",
    "FingerprintOutcome",
    "ScanStats",
    "PdupeError",
    "DecodeError",
    "ValidationError",
    "CacheIOError",
    "ComparisonError",
    "ConfigError",
    "DEFAULT_ROWS",
    "DEFAULT_COLS",
    "DEFAULT_THRESHOLD",
    "CACHE_SUFFIX",
    "DistanceMetric",
    "distance",
    "compare",
    "is_match",
    "encode_fingerprint",
    "decode_fingerprint",
    "read_cache",
    "write_cache",
    "load_raster",
    "extract_fingerprint",
    "fingerprint_file",
    "fingerprint_image",
    "fingerprint_images_parallel",
    "find_all_pairs_matches",
    "find_reference_matches",
]
