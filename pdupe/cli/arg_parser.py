"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
perceptual duplicate finder command-line interface.
"""

from __future__ import annotations

import argparse
import re

from ..config import METRIC_NAMES
from ..user_config import get_user_config

_GRID_RE = re.compile(r'^\s*(\d+)\s*[xX]\s*(\d+)\s*$')


def parse_grid(value: str) -> tuple[int, int]:
    """
    Parse a ROWSxCOLS grid size.

    Examples:
        >>> parse_grid('32x32')
        (32, 32)
    """
    match = _GRID_RE.match(value)
    if not match:
        raise argparse.ArgumentTypeError(f"Grid must look like ROWSxCOLS, got '{value}'")
    return int(match.group(1)), int(match.group(2))


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance

    Notes:
        - Defaults for threshold, parallelism, metric and grid come from the
          user configuration (config file and PDUPE_* environment variables)
    """
    user_config = get_user_config()
    default_grid = (user_config.grid_rows, user_config.grid_cols)

    parser = argparse.ArgumentParser(
        prog='pdupe',
        description='Find visually similar photos by comparing color-grid fingerprints',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ~/Pictures
      Fingerprint every image (writing .cd.gz sidecars) and list matching pairs

  %(prog)s ~/Pictures --fingerprint-only -j 8
      Only compute sidecars, using 8 workers

  %(prog)s ~/Pictures/*.cd.gz --metric stddev --threshold 5
      Compare existing sidecars, ignoring uniform brightness changes

  %(prog)s ~/Pictures --reference original.jpg -v
      Compare everything against one image and show every distance
        """
    )

    parser.add_argument(
        'paths',
        nargs='*',
        help='Image files, directories, or .cd.gz sidecar files'
    )

    parser.add_argument(
        '-r', '--reference',
        help='Compare everything against this image, sidecar, or directory'
    )

    parser.add_argument(
        '-m', '--metric',
        choices=METRIC_NAMES,
        default=user_config.default_metric,
        help=f'Distance metric. Default: {user_config.default_metric}'
    )

    parser.add_argument(
        '-t', '--threshold',
        type=float,
        default=user_config.default_threshold,
        help=f'Match when distance <= threshold (0-255 scale). Default: {user_config.default_threshold:g}'
    )

    parser.add_argument(
        '--overwrite',
        action='store_true',
        help='Regenerate fingerprints even if a valid sidecar exists'
    )

    parser.add_argument(
        '--fingerprint-only',
        action='store_true',
        help='Write sidecars and skip comparison'
    )

    parser.add_argument(
        '-j', '--parallelism',
        type=int,
        default=user_config.default_workers,
        help=f'Number of parallel workers. Default: {user_config.default_workers}'
    )

    parser.add_argument(
        '--grid',
        type=parse_grid,
        default=default_grid,
        metavar='ROWSxCOLS',
        help=f'Fingerprint grid resolution. Default: {default_grid[0]}x{default_grid[1]}'
    )

    parser.add_argument(
        '--prescale',
        type=int,
        default=None,
        metavar='N',
        help=('Resample images to NxN pixels before sampling. Without it, images with '
              'fewer pixels than grid cells on either axis (thumbnails, icons) '
              'fail to fingerprint')
    )

    parser.add_argument(
        '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show every compared pair with per-channel statistics'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/photos', '--threshold', '5'])
        >>> args.threshold
        5.0
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
    'parse_grid',
]
