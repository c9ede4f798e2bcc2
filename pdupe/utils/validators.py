"""
Input validation for the perceptual duplicate finder.

Validators return (is_valid, error_message) tuples so callers can decide
whether a problem is fatal.
"""

from __future__ import annotations

from typing import Optional

from ..config import METRIC_NAMES


def validate_threshold(threshold) -> tuple[bool, str]:
    """
    Validate that a threshold is a non-negative number.

    Examples:
        >>> validate_threshold(10)
        (True, '')
        >>> validate_threshold(-1)
        (False, 'Threshold must be non-negative')
    """
    try:
        threshold = float(threshold)
    except (ValueError, TypeError):
        return False, "Threshold must be a number"
    if threshold != threshold:  # NaN
        return False, "Threshold must be a number"
    if threshold < 0:
        return False, "Threshold must be non-negative"
    return True, ""


def validate_workers(workers) -> tuple[bool, str]:
    """
    Validate the parallelism degree.

    Examples:
        >>> validate_workers(0)
        (False, 'Parallelism must be at least 1')
    """
    try:
        workers = int(workers)
    except (ValueError, TypeError):
        return False, "Parallelism must be an integer"
    if workers < 1:
        return False, "Parallelism must be at least 1"
    return True, ""


def validate_grid(rows, cols) -> tuple[bool, str]:
    """
    Validate grid dimensions.

    StdDev needs at least two cells, so a 1x1 grid is rejected.

    Examples:
        >>> validate_grid(32, 32)
        (True, '')
    """
    try:
        rows, cols = int(rows), int(cols)
    except (ValueError, TypeError):
        return False, "Grid dimensions must be integers"
    if rows < 1 or cols < 1:
        return False, "Grid dimensions must be positive"
    if rows * cols < 2:
        return False, "Grid must have at least two cells"
    return True, ""


def validate_metric(metric: str) -> tuple[bool, str]:
    """Validate a metric name."""
    if str(metric).lower() not in METRIC_NAMES:
        return False, f"Unknown metric '{metric}' (choose from: {', '.join(METRIC_NAMES)})"
    return True, ""


def validate_run_params(
    threshold=None,
    workers=None,
    rows=None,
    cols=None,
    metric: Optional[str] = None,
) -> tuple[bool, str]:
    """
    Validate all run parameters, stopping at the first problem.

    Examples:
        >>> validate_run_params(threshold=10, workers=4, rows=32, cols=32, metric='simple')
        (True, '')
    """
    checks = []
    if threshold is not None:
        checks.append(validate_threshold(threshold))
    if workers is not None:
        checks.append(validate_workers(workers))
    if rows is not None or cols is not None:
        checks.append(validate_grid(rows, cols))
    if metric is not None:
        checks.append(validate_metric(metric))

    for is_valid, error in checks:
        if not is_valid:
            return False, error
    return True, ""


__all__ = [
    'validate_threshold',
    'validate_workers',
    'validate_grid',
    'validate_metric',
    'validate_run_params',
]
