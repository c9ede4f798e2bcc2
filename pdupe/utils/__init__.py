"""
Utilities package for the perceptual duplicate finder.

Provides:
- formatters: Report formatting for distances
- validators: Run parameter validation
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators

# Export commonly used functions
from .formatters import format_distance
from .validators import (
    validate_threshold,
    validate_workers,
    validate_grid,
    validate_metric,
    validate_run_params,
)

__all__ = [
    # Submodules
    'formatters',
    'validators',
    # Formatters
    'format_distance',
    # Validators
    'validate_threshold',
    'validate_workers',
    'validate_grid',
    'validate_metric',
    'validate_run_params',
]
