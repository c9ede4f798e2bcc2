"""
Parallel processing module for the scanner package.

Fingerprints many images on a bounded thread pool. Each image is an
independent unit: a failure is recorded on its outcome and never affects
the others.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Callable, Any

from ..config import DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_WORKERS
from ..models import FingerprintOutcome, ScanStats
from .analysis import Extractor, fingerprint_image
from .dependencies import HAS_TQDM, _tqdm_class
from .extraction import fingerprint_file


def fingerprint_images_parallel(
    filepaths: list[str],
    max_workers: int = DEFAULT_WORKERS,
    overwrite: bool = False,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
    prescale: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
    extract: Extractor = fingerprint_file,
) -> tuple[list[FingerprintOutcome], ScanStats]:
    """
    Fingerprint multiple images in parallel, writing their sidecars.

    Up to max_workers images are processed at once; as soon as one finishes
    the next queued image starts. The call returns once every image has
    finished. Outcomes are in completion order, not submission order.

    Args:
        filepaths: List of image paths to fingerprint
        max_workers: Number of parallel workers (>= 1)
        overwrite: Regenerate sidecars that already exist
        rows: Grid rows
        cols: Grid columns
        prescale: Optional square size to resample to before sampling
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages
        extract: Function producing a Fingerprint for one path

    Returns:
        Tuple of (one FingerprintOutcome per path, ScanStats)
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    if not filepaths:
        return [], ScanStats()

    outcomes: list[FingerprintOutcome] = []
    stats = ScanStats(total_files=len(filepaths))

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(
            total=len(filepaths),
            desc="Fingerprinting images",
            unit="img",
            ncols=80,
        )

    # Batch progress callbacks to reduce overhead (every 100 files or 1 second)
    last_callback_time = time.time()
    callback_batch_size = 100
    callback_interval = 1.0  # seconds

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                fingerprint_image, path, rows, cols, overwrite, prescale, extract
            ): path
            for path in filepaths
        }

        # Outcomes are only appended here, in the calling thread
        for i, future in enumerate(as_completed(futures)):
            try:
                outcome = future.result()
            except Exception as e:
                filepath = futures[future]
                outcome = FingerprintOutcome(path=filepath, error=f"{type(e).__name__}: {e}")
            outcomes.append(outcome)

            if outcome.error:
                stats.failed += 1
                if logger:
                    logger.warning(f"{outcome.path}: {outcome.error}")
            elif outcome.skipped:
                stats.skipped += 1
            else:
                stats.fingerprinted += 1

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                should_callback = (
                    (i + 1) % callback_batch_size == 0 or
                    current_time - last_callback_time >= callback_interval or
                    i == len(filepaths) - 1  # Always callback on last item
                )
                if should_callback:
                    progress_callback(i + 1, len(filepaths))
                    last_callback_time = current_time

    if pbar is not None:
        pbar.close()

    if logger:
        logger.info(
            f"Fingerprints: {stats.fingerprinted:,} new, {stats.skipped:,} reused, "
            f"{stats.failed:,} failed ({stats.success_rate:.1f}% usable)"
        )

    return outcomes, stats


def successful_cache_files(outcomes: list[FingerprintOutcome]) -> set[str]:
    """Return the sidecar paths of all successful outcomes."""
    return {outcome.cache_path for outcome in outcomes if outcome.ok}


__all__ = ['fingerprint_images_parallel', 'successful_cache_files']
