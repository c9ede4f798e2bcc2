"""
Image decoding module for the scanner package.

Turns an image file into a RasterImage using Pillow. Every failure to
read or interpret the file surfaces as DecodeError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..exceptions import DecodeError
from ..models import RasterImage
from .dependencies import Image, np, _logger

# Modes whose samples carry 16 bits of precision
HIGH_DEPTH_MODES = {'I;16', 'I;16L', 'I;16B', 'I;16N', 'I'}


def _to_raster(img, prescale: Optional[int]) -> RasterImage:
    """Convert an opened PIL image to a 3-channel RasterImage."""
    if img.mode in HIGH_DEPTH_MODES:
        # Grayscale with 16-bit samples: keep the precision, replicate to RGB
        if img.mode != 'I':
            img = img.convert('I')
        if prescale:
            img = img.resize((prescale, prescale), Image.Resampling.BOX)
        gray = np.clip(np.asarray(img), 0, 0xFFFF).astype(np.uint16)
        pixels = np.repeat(gray[:, :, np.newaxis], 3, axis=2)
        return RasterImage.from_array(pixels, depth=16)

    if img.mode != 'RGB':
        img = img.convert('RGB')
    if prescale:
        img = img.resize((prescale, prescale), Image.Resampling.BOX)
    return RasterImage.from_array(np.asarray(img, dtype=np.uint8), depth=8)


def load_raster(filepath: str | Path, prescale: Optional[int] = None) -> RasterImage:
    """
    Decode an image file into a RasterImage.

    Args:
        filepath: Path to the image
        prescale: If given, resample to prescale x prescale pixels before
                  returning (box filter)

    Returns:
        RasterImage with 8-bit or 16-bit samples

    Raises:
        DecodeError: If the file cannot be opened or decoded
    """
    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated/corrupt images early
            img.load()
            raster = _to_raster(img, prescale)
    except Image.UnidentifiedImageError as e:
        raise DecodeError(f"Not a valid image file: {filepath}") from e
    except Exception as e:
        _logger.debug(f"Decoding failed for {filepath}: {e}")
        raise DecodeError(f"Failed to decode {filepath}: {e}") from e

    _logger.debug(f"Decoded {filepath}: {raster.width}x{raster.height}, {raster.depth}-bit")
    return raster


__all__ = ['load_raster', 'HIGH_DEPTH_MODES']
