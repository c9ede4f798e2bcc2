"""
Configuration constants for the perceptual duplicate finder.

This module contains all configurable settings including:
- Supported image extensions
- Fingerprint grid resolution and sidecar cache naming
- Default comparison metric, threshold and worker count
"""

import os

# Image extensions fingerprinted when scanning directories
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    # Other formats Pillow can decode
    '.heic', '.heif', '.avif',
    '.pbm', '.pgm', '.ppm', '.pnm',
    '.tga', '.ico', '.pcx', '.sgi',
    '.jp2', '.j2k', '.jpf', '.jpx',
}

# Formats only available through pillow-heif
HEIF_EXTENSIONS = {'.heic', '.heif'}

# Fingerprint grid resolution (rows x cols cells, 3 bytes per cell)
DEFAULT_ROWS = 32
DEFAULT_COLS = 32

# Sidecar cache files are named by appending this suffix to the image path
# e.g. holiday.jpg -> holiday.jpg.cd.gz
CACHE_SUFFIX = '.cd.gz'

# Distance metrics selectable on the command line
METRIC_NAMES = ('simple', 'prism', 'stddev')
DEFAULT_METRIC = 'simple'

# Default match threshold (inclusive)
# Distances are on the 0-255 byte scale; lower = stricter matching
# Recommended: 5-15 for simple/prism, 3-10 for stddev
DEFAULT_THRESHOLD = 10.0

# Default number of parallel workers for fingerprinting
DEFAULT_WORKERS = 4

# Pillow's decompression bomb limit, raised for large photos and scans
MAX_IMAGE_PIXELS = 500_000_000  # 500 megapixels

# User configuration directory (config.json lives here)
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.pdupe')
