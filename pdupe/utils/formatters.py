"""
Formatting utilities for the perceptual duplicate finder.
"""

from __future__ import annotations


def format_distance(distance: float) -> str:
    """
    Format a distance with fixed precision so report columns line up.

    Examples:
        >>> format_distance(3.5)
        '3.500000'
    """
    return f"{distance:.6f}"


__all__ = ['format_distance']
