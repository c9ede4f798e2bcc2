"""
Scanner package for the perceptual duplicate finder.

Provides image decoding, fingerprint extraction, parallel fingerprinting
with sidecar caching, and duplicate matching.

Public API:
- find_image_files: Discover image files in directories
- classify_inputs: Sort command-line paths into images and sidecars
- load_raster: Decode an image into a RasterImage
- extract_fingerprint: Reduce a RasterImage to a Fingerprint
- fingerprint_file: Decode + extract in one step
- fingerprint_image: Fingerprint one image and write its sidecar
- fingerprint_images_parallel: Fingerprint many images on a thread pool
- find_all_pairs_matches: Compare every pair of fingerprints
- find_reference_matches: Compare fingerprints against a reference set
"""

from __future__ import annotations

# Import public functions from submodules
from .file_discovery import find_image_files, is_image_file, classify_inputs, ClassifiedInputs
from .decoding import load_raster
from .extraction import (
    grid_bounds,
    cell_region,
    validate_cells,
    extract_fingerprint,
    fingerprint_file,
)
from .analysis import fingerprint_image
from .parallel import fingerprint_images_parallel, successful_cache_files
from .deduplication import (
    iter_all_pairs,
    iter_reference_pairs,
    find_all_pairs_matches,
    find_reference_matches,
    select_reportable,
)

# Public API exports
__all__ = [
    # File discovery
    'find_image_files',
    'is_image_file',
    'classify_inputs',
    'ClassifiedInputs',
    # Decoding and extraction
    'load_raster',
    'grid_bounds',
    'cell_region',
    'validate_cells',
    'extract_fingerprint',
    'fingerprint_file',
    # Scheduling
    'fingerprint_image',
    'fingerprint_images_parallel',
    'successful_cache_files',
    # Duplicate detection
    'iter_all_pairs',
    'iter_reference_pairs',
    'find_all_pairs_matches',
    'find_reference_matches',
    'select_reportable',
]
