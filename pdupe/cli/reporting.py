"""
Report formatting and display for the CLI interface.

One line per reported pair:

    <distance> <metric> <first path> <second path>

The pair is ordered with the larger source file first. Verbose mode adds a
match flag and per-channel statistics.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from ..comparison import channel_statistics
from ..exceptions import ComparisonError
from ..models import ChannelStats, MatchResult
from ..utils.formatters import format_distance


def format_match_line(result: MatchResult, verbose: bool = False) -> str:
    """
    Format one comparison result.

    Args:
        result: The comparison result
        verbose: Append the match flag

    Returns:
        Formatted line (no trailing newline)
    """
    first, second = result.ordered()
    line = (
        f"{format_distance(result.distance)} {result.metric:<6} "
        f"{first.display_path} {second.display_path}"
    )
    if verbose:
        line += " match" if result.matched else " no-match"
    return line


def format_channel_stats(stats: list[ChannelStats]) -> list[str]:
    """Format per-channel statistics, one line per channel."""
    return [
        f"    {s.channel:<5} avg |diff| {s.mean_abs:.4f}  avg diff {s.mean:+.4f}  stddev {s.stddev:.4f}"
        for s in stats
    ]


def print_match_report(
    results: list[MatchResult],
    verbose: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Print comparison results.

    Args:
        results: Results to print (already filtered for verbosity)
        verbose: Include match flags and per-channel statistics
        stream: Output stream (default: stdout)
    """
    stream = stream or sys.stdout
    for result in results:
        print(format_match_line(result, verbose), file=stream)
        if verbose:
            try:
                stats = channel_statistics(result.a, result.b)
            except ComparisonError:
                continue
            for line in format_channel_stats(stats):
                print(line, file=stream)


__all__ = ['format_match_line', 'format_channel_stats', 'print_match_report']
