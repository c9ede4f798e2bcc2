"""
Deduplication module for the scanner package.

Enumerates fingerprint pairs (all pairs, or reference set against
candidates) and runs each through the comparison engine.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Callable, Any

from ..comparison import DistanceMetric, compare
from ..exceptions import ComparisonError
from ..models import Fingerprint, MatchResult
from .dependencies import HAS_TQDM, _tqdm_class, _logger


def iter_all_pairs(fingerprints: list[Fingerprint]) -> Iterator[tuple[Fingerprint, Fingerprint]]:
    """Yield each unordered pair once, in (i, j) order with i < j."""
    for i in range(len(fingerprints)):
        for j in range(i + 1, len(fingerprints)):
            yield fingerprints[i], fingerprints[j]


def iter_reference_pairs(
    references: list[Fingerprint],
    candidates: list[Fingerprint],
) -> Iterator[tuple[Fingerprint, Fingerprint]]:
    """Yield every (reference, candidate) pair except an image paired with itself."""
    for ref in references:
        for candidate in candidates:
            if ref.source_key == candidate.source_key:
                continue
            yield ref, candidate


def _compare_pairs(
    pairs: Iterator[tuple[Fingerprint, Fingerprint]],
    total: int,
    metric: DistanceMetric,
    threshold: float,
    progress_callback: Optional[Callable[[int, int], None]],
    show_progress: bool,
    logger: Optional[logging.Logger],
) -> list[MatchResult]:
    results: list[MatchResult] = []

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and total > 1000 and _tqdm_class is not None:
        pbar = _tqdm_class(total=total, desc="Comparing fingerprints", unit="cmp", ncols=80)

    comparison_count = 0
    for a, b in pairs:
        try:
            results.append(compare(a, b, metric, threshold))
        except ComparisonError as e:
            message = f"Cannot compare {a.display_path} with {b.display_path}: {e}"
            if logger:
                logger.warning(message)
            else:
                _logger.warning(message)

        comparison_count += 1
        if pbar is not None and comparison_count % 1000 == 0:
            pbar.update(1000)
        if progress_callback and comparison_count % 10000 == 0:
            progress_callback(comparison_count, total)

    if pbar is not None:
        remaining = comparison_count % 1000
        if remaining > 0:
            pbar.update(remaining)
        pbar.close()

    if logger:
        matched = sum(1 for r in results if r.matched)
        logger.info(f"Compared {len(results):,} pairs, {matched:,} matched")

    return results


def find_all_pairs_matches(
    fingerprints: list[Fingerprint],
    metric: DistanceMetric = DistanceMetric.SIMPLE,
    threshold: float = 0.0,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> list[MatchResult]:
    """
    Compare every unordered pair of fingerprints once.

    Args:
        fingerprints: Fingerprints to compare
        metric: Distance metric
        threshold: Inclusive match threshold
        progress_callback: Optional callback(current, total) for progress
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages

    Returns:
        One MatchResult per comparable pair (n*(n-1)/2 when all lengths agree)
    """
    n = len(fingerprints)
    total = (n * (n - 1)) // 2
    return _compare_pairs(
        iter_all_pairs(fingerprints), total, metric, threshold,
        progress_callback, show_progress, logger,
    )


def find_reference_matches(
    references: list[Fingerprint],
    candidates: list[Fingerprint],
    metric: DistanceMetric = DistanceMetric.SIMPLE,
    threshold: float = 0.0,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> list[MatchResult]:
    """
    Compare each reference fingerprint against each candidate.

    Pairs where both fingerprints refer to the same source file are skipped.

    Returns:
        One MatchResult per compared pair, reference first
    """
    total = len(references) * len(candidates)
    return _compare_pairs(
        iter_reference_pairs(references, candidates), total, metric, threshold,
        progress_callback, show_progress, logger,
    )


def select_reportable(results: list[MatchResult], verbose: bool = False) -> list[MatchResult]:
    """
    Choose which results to surface.

    Verbose mode keeps every compared pair. Otherwise only matches are kept.
    """
    if verbose:
        return list(results)
    return [r for r in results if r.matched]


__all__ = [
    'iter_all_pairs',
    'iter_reference_pairs',
    'find_all_pairs_matches',
    'find_reference_matches',
    'select_reportable',
]
