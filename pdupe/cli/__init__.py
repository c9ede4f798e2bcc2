"""
CLI package for the perceptual duplicate finder.

Provides the command-line interface for fingerprinting images and
reporting visually similar pairs.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- print_match_report: Function to display comparison results
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging, EXIT_CONFIG_ERROR
from .arg_parser import create_parser, parse_arguments
from .reporting import format_match_line, print_match_report


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Delegates to CLIOrchestrator to execute the complete workflow.

    Returns:
        Exit code (0 for success, 2 for configuration errors)

    Examples:
        >>> # Called from __main__.py
        >>> exit_code = main()
        >>> sys.exit(exit_code)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    'EXIT_CONFIG_ERROR',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'format_match_line',
    'print_match_report',
]
