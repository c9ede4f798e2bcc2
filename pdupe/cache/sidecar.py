"""
Sidecar cache files.

Each image's fingerprint lives next to it in a file named by appending
CACHE_SUFFIX to the image path. Only the unit fingerprinting an image ever
writes its sidecar, so no locking is needed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..config import CACHE_SUFFIX
from ..exceptions import CacheIOError
from ..models import Fingerprint
from .codec import decode_fingerprint, encode_fingerprint

logger = logging.getLogger(__name__)


def cache_path_for(image_path: str | Path) -> str:
    """Return the sidecar path for an image."""
    return str(image_path) + CACHE_SUFFIX


def is_cache_file(path: str | Path) -> bool:
    """Check whether a path names a sidecar cache file."""
    return str(path).endswith(CACHE_SUFFIX)


def source_path_for(cache_path: str | Path) -> str:
    """Return the image path a sidecar was named from."""
    cache_path = str(cache_path)
    if not is_cache_file(cache_path):
        raise ValueError(f"Not a sidecar cache file: {cache_path}")
    return cache_path[:-len(CACHE_SUFFIX)]


def write_cache(fp: Fingerprint, cache_path: Optional[str | Path] = None) -> str:
    """
    Write a fingerprint's sidecar file.

    Args:
        fp: Fingerprint to persist
        cache_path: Destination, defaults to the sidecar path of fp.name

    Returns:
        Path of the written sidecar

    Raises:
        CacheIOError: If the file cannot be written
    """
    cache_path = str(cache_path) if cache_path else cache_path_for(fp.name)
    data = encode_fingerprint(fp)
    try:
        with open(cache_path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise CacheIOError(f"Error writing to {cache_path}: {e}") from e

    logger.debug(f"Wrote {len(data)} bytes to {cache_path}")
    return cache_path


def read_cache(cache_path: str | Path, expected_length: Optional[int] = None) -> Fingerprint:
    """
    Load a fingerprint from its sidecar file.

    The live source path is re-derived by stripping the sidecar suffix;
    if no file exists there the fingerprint's path is left empty and its
    display_path falls back to the quoted stored name.

    Args:
        cache_path: Sidecar file to read
        expected_length: If given, the required number of cell bytes

    Returns:
        Fingerprint with path resolved

    Raises:
        CacheIOError: If the file cannot be read or holds an invalid record
    """
    cache_path = str(cache_path)
    try:
        with open(cache_path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise CacheIOError(f"Cannot read {cache_path}: {e}") from e

    try:
        fp = decode_fingerprint(data)
    except CacheIOError as e:
        raise CacheIOError(f"{cache_path}: {e}") from e

    if expected_length is not None and len(fp.cells) != expected_length:
        raise CacheIOError(
            f"{cache_path}: expected {expected_length} bytes of cell data, got {len(fp.cells)}"
        )
    if not fp.cells or not any(fp.cells):
        raise CacheIOError(f"{cache_path}: no data in fingerprint")

    live_path = ""
    if is_cache_file(cache_path):
        candidate = source_path_for(cache_path)
        if os.path.isfile(candidate):
            live_path = candidate

    return Fingerprint(name=fp.name, size=fp.size, cells=fp.cells, path=live_path)


__all__ = [
    'cache_path_for',
    'is_cache_file',
    'source_path_for',
    'write_cache',
    'read_cache',
]
