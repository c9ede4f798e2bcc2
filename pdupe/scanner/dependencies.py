"""
Dependency initialization for the scanner package.

Handles PIL, numpy, HEIC/HEIF support, and tqdm imports with proper
error handling and configuration. Importing this module is the one place
where process-wide decoder settings are applied.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

from ..config import MAX_IMAGE_PIXELS
from ..exceptions import ConfigError
from ..user_config import get_user_config

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image
    import numpy as np
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install Pillow numpy"
    )

# Register HEIC/HEIF support via pillow-heif
# This must be done before opening any HEIC files
HAS_HEIF_SUPPORT = False
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HAS_HEIF_SUPPORT = True
    _logger.debug("HEIC/HEIF support enabled via pillow-heif")
except ImportError:
    _logger.warning(
        "pillow-heif not installed - HEIC/HEIF files will not be processed. "
        "Install with: pip install pillow-heif"
    )

# Raise PIL's decompression bomb limit for large photos (configurable)
try:
    Image.MAX_IMAGE_PIXELS = get_user_config().max_image_pixels
except ConfigError as e:
    _logger.warning(f"{e}; using the default pixel limit")
    Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

# We downsample to a small grid anyway, so bomb warnings are just noise
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

# Optional: tqdm for progress bars
# Store as Optional[Any] to satisfy type checkers when tqdm is not installed
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass


__all__ = [
    'Image',
    'np',
    'HAS_HEIF_SUPPORT',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
]
