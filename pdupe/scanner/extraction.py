"""
Fingerprint extraction module for the scanner package.

Reduces a RasterImage to a fixed grid of averaged colors. The raster is
split into rows x cols cells; every cell spans height // rows pixel rows and
width // cols pixel columns, except the last row and last column of cells,
which also take any remainder pixels. Each cell contributes the mean of its
R, G and B samples, truncated to 8 bits.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_COLS, DEFAULT_ROWS
from ..exceptions import CacheIOError, ValidationError
from ..models import Fingerprint, RasterImage
from .decoding import load_raster
from .dependencies import np, _logger


def grid_bounds(length: int, parts: int) -> list[tuple[int, int]]:
    """
    Split a pixel span into parts, the last part absorbing the remainder.

    Args:
        length: Number of pixels along one axis
        parts: Number of cells along that axis

    Returns:
        List of (start, stop) half-open intervals covering [0, length)

    Raises:
        ValidationError: If the span has fewer pixels than cells

    Examples:
        >>> grid_bounds(10, 3)
        [(0, 3), (3, 6), (6, 10)]
    """
    if parts < 1:
        raise ValidationError(f"Grid needs at least one cell per axis, got {parts}")
    if length < parts:
        raise ValidationError(f"Cannot split {length} pixels into {parts} cells")

    step = length // parts
    bounds = [(i * step, (i + 1) * step) for i in range(parts)]
    bounds[-1] = (bounds[-1][0], length)
    return bounds


def cell_region(
    width: int,
    height: int,
    row: int,
    col: int,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
) -> tuple[int, int, int, int]:
    """
    Return the (left, top, right, bottom) pixel box of one grid cell.

    Uses the same remainder policy as extraction.
    """
    top, bottom = grid_bounds(height, rows)[row]
    left, right = grid_bounds(width, cols)[col]
    return left, top, right, bottom


def _cell_color(block: np.ndarray, shift: int) -> tuple[int, int, int]:
    """Mean color of one cell, quantized to 8 bits by dropping low bits."""
    count = block.shape[0] * block.shape[1]
    sums = block.reshape(-1, 3).sum(axis=0, dtype=np.uint64)
    # floor(sum / count / 2**shift) without floating point
    divisor = count << shift
    return tuple(min(int(s) // divisor, 255) for s in sums)


def validate_cells(cells: bytes, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> None:
    """
    Check the structural invariant of fingerprint cells.

    Raises:
        ValidationError: If the length is not rows*cols*3 or all bytes are zero
    """
    expected = rows * cols * 3
    if len(cells) != expected:
        raise ValidationError(f"Expected {expected} bytes of cell data, got {len(cells)}")
    if not any(cells):
        raise ValidationError("No data in fingerprint (all cells are zero)")


def extract_fingerprint(
    raster: RasterImage,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    name: str = "",
    size: int = 0,
) -> Fingerprint:
    """
    Build a Fingerprint from decoded pixels.

    Args:
        raster: Decoded image
        rows: Grid rows
        cols: Grid columns
        name: Source name recorded in the fingerprint
        size: Source file size recorded in the fingerprint

    Returns:
        Validated Fingerprint with rows*cols*3 cell bytes

    Raises:
        ValidationError: If the raster is smaller than the grid or the
                         result fails validation
    """
    row_bounds = grid_bounds(raster.height, rows)
    col_bounds = grid_bounds(raster.width, cols)
    shift = max(raster.depth - 8, 0)
    pixels = raster.pixels

    cells = bytes(
        channel
        for top, bottom in row_bounds
        for left, right in col_bounds
        for channel in _cell_color(pixels[top:bottom, left:right], shift)
    )
    validate_cells(cells, rows, cols)

    return Fingerprint(name=name, size=size, cells=cells, path=name)


def fingerprint_file(
    filepath: str | Path,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    prescale: Optional[int] = None,
) -> Fingerprint:
    """
    Decode an image file and extract its fingerprint.

    Args:
        filepath: Path to the image
        rows: Grid rows
        cols: Grid columns
        prescale: Optional square size to resample to before sampling

    Returns:
        Fingerprint named after filepath

    Raises:
        CacheIOError: If the file cannot be stat'ed
        DecodeError: If the image cannot be decoded
        ValidationError: If extraction produces an invalid fingerprint
    """
    filepath = str(filepath)
    try:
        size = os.path.getsize(filepath)
    except OSError as e:
        raise CacheIOError(f"Cannot stat {filepath}: {e}") from e

    raster = load_raster(filepath, prescale=prescale)
    _logger.debug(f"Reading color data for {filepath}")
    return extract_fingerprint(raster, rows, cols, name=filepath, size=size)


__all__ = [
    'grid_bounds',
    'cell_region',
    'validate_cells',
    'extract_fingerprint',
    'fingerprint_file',
]
