"""
Single-image fingerprinting for the scanner package.

One unit of work: reuse a valid sidecar if there is one, otherwise decode
the image, extract its fingerprint and write the sidecar.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional

from ..cache import cache_path_for, read_cache, write_cache
from ..config import DEFAULT_COLS, DEFAULT_ROWS
from ..exceptions import CacheIOError, DecodeError, ValidationError
from ..models import Fingerprint, FingerprintOutcome
from .dependencies import _logger
from .extraction import fingerprint_file

# extract(filepath, rows, cols, prescale) -> Fingerprint
Extractor = Callable[[str, int, int, Optional[int]], Fingerprint]


def fingerprint_image(
    filepath: str | Path,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    overwrite: bool = False,
    prescale: Optional[int] = None,
    extract: Extractor = fingerprint_file,
) -> FingerprintOutcome:
    """
    Fingerprint one image and persist its sidecar.

    Args:
        filepath: Path to the image file
        rows: Grid rows
        cols: Grid columns
        overwrite: Regenerate even if a valid sidecar already exists
        prescale: Optional square size to resample to before sampling
        extract: Function producing the Fingerprint (decode + extract)

    Returns:
        FingerprintOutcome with cache_path set on success, or error set
    """
    filepath = str(filepath)
    outcome = FingerprintOutcome(path=filepath)
    cache_path = cache_path_for(filepath)

    if not overwrite and os.path.exists(cache_path):
        try:
            read_cache(cache_path, expected_length=rows * cols * 3)
        except CacheIOError as e:
            _logger.debug(f"Regenerating unusable sidecar for {filepath}: {e}")
        else:
            outcome.cache_path = cache_path
            outcome.skipped = True
            return outcome

    try:
        fp = extract(filepath, rows, cols, prescale)
        outcome.cache_path = write_cache(fp, cache_path)
    except DecodeError as e:
        outcome.error = f"Decode error: {e}"
    except ValidationError as e:
        outcome.error = f"Error validating generated data: {e}"
    except CacheIOError as e:
        outcome.error = f"I/O error: {e}"

    return outcome


__all__ = ['fingerprint_image', 'Extractor']
