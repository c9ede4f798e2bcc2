"""
CLI workflow orchestration for the perceptual duplicate finder.

Provides the CLIOrchestrator class that coordinates the entire CLI workflow
from argument parsing through fingerprinting, matching and reporting.
"""

from __future__ import annotations

import logging

from ..cache import cache_path_for, read_cache
from ..comparison import DistanceMetric
from ..exceptions import CacheIOError, ConfigError
from ..models import Fingerprint
from ..scanner import (
    classify_inputs,
    fingerprint_images_parallel,
    find_all_pairs_matches,
    find_reference_matches,
    select_reportable,
    successful_cache_files,
)
from ..utils.validators import validate_run_params
from .arg_parser import parse_arguments
from .reporting import print_match_report

# Exit status for fatal configuration errors
EXIT_CONFIG_ERROR = 2


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Manages the complete lifecycle from argument parsing through
    fingerprinting, duplicate matching and reporting.
    """

    def __init__(self, argv=None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list to parse instead of sys.argv
        """
        self.argv = argv
        self.logger = logging.getLogger(__name__)
        self.args = None
        self.metric = DistanceMetric.SIMPLE
        self.rows = 0
        self.cols = 0
        self.inputs = None
        self.reference_inputs = None
        self.outcomes = []
        self.fingerprints: list[Fingerprint] = []
        self.references: list[Fingerprint] = []
        self.results = []

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 2 for configuration errors)

        Workflow phases:
        1. Setup & argument parsing
        2. Validation
        3. Input collection
        4. Fingerprinting
        5. Sidecar loading
        6. Matching & reporting
        """
        try:
            self._setup_phase()
        except ConfigError as e:
            # Defaults come from user config, so a bad value fails before logging is set up
            self.logger = setup_logging()
            self.logger.error(str(e))
            return EXIT_CONFIG_ERROR

        try:
            self._validate_phase()
            self._collect_phase()
        except ConfigError as e:
            self.logger.error(str(e))
            return EXIT_CONFIG_ERROR

        self._fingerprint_phase()
        if self.args.fingerprint_only:
            return 0

        self._load_phase()
        self._match_phase()
        self._report_phase()
        return 0

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _validate_phase(self) -> None:
        """
        Phase 2: Validate arguments.

        Raises:
            ConfigError: If any run parameter is invalid
        """
        self.rows, self.cols = self.args.grid
        is_valid, error = validate_run_params(
            threshold=self.args.threshold,
            workers=self.args.parallelism,
            rows=self.rows,
            cols=self.cols,
            metric=self.args.metric,
        )
        if not is_valid:
            raise ConfigError(error)

        if self.args.prescale is not None and self.args.prescale < max(self.rows, self.cols):
            raise ConfigError(
                f"--prescale {self.args.prescale} is smaller than the "
                f"{self.rows}x{self.cols} grid"
            )

        self.metric = DistanceMetric.from_name(self.args.metric)

    def _report_unusable(self, inputs) -> None:
        for path in inputs.missing:
            self.logger.warning(f"No such file: {path}")
        for path in inputs.unrecognized:
            self.logger.warning(f"Cannot process unrecognized file type: {path}")

    def _collect_phase(self) -> None:
        """
        Phase 3: Sort inputs into images and sidecars.

        Raises:
            ConfigError: If there is nothing to process
        """
        recursive = not self.args.no_recursive

        self.inputs = classify_inputs(self.args.paths, recursive=recursive)
        self._report_unusable(self.inputs)

        if self.args.reference:
            self.reference_inputs = classify_inputs([self.args.reference], recursive=recursive)
            self._report_unusable(self.reference_inputs)
            if self.reference_inputs.is_empty:
                raise ConfigError(f"No usable reference: {self.args.reference}")

        if self.inputs.is_empty:
            raise ConfigError("Must select files to process")

        self.logger.info(
            f"Found {len(self.inputs.images):,} images and "
            f"{len(self.inputs.cache_files):,} sidecar files"
        )

    def _fingerprint_phase(self) -> None:
        """Phase 4: Fingerprint all images (inputs and reference) in parallel."""
        images = list(self.inputs.images)
        if self.reference_inputs:
            seen = set(images)
            images += [p for p in self.reference_inputs.images if p not in seen]

        if not images:
            return

        self.logger.info(
            f"Fingerprinting {len(images):,} images with {self.args.parallelism} workers..."
        )
        self.outcomes, stats = fingerprint_images_parallel(
            images,
            max_workers=self.args.parallelism,
            overwrite=self.args.overwrite,
            rows=self.rows,
            cols=self.cols,
            prescale=self.args.prescale,
            show_progress=not self.args.no_progress,
            logger=self.logger,
        )
        if stats.failed:
            self.logger.warning(f"Could not fingerprint {stats.failed:,} files")

    def _load(self, cache_files: list[str]) -> list[Fingerprint]:
        """Read sidecars, reporting and skipping unusable ones."""
        fingerprints = []
        expected_length = self.rows * self.cols * 3
        for cache_file in cache_files:
            try:
                fingerprints.append(read_cache(cache_file, expected_length=expected_length))
            except CacheIOError as e:
                self.logger.warning(f"Error scanning image data: {e}")
        return fingerprints

    def _sidecars_for(self, inputs) -> list[str]:
        """Sidecar paths for classified inputs, limited to those produced or given."""
        produced = successful_cache_files(self.outcomes)
        sidecars = [
            cache_path_for(image) for image in inputs.images
            if cache_path_for(image) in produced
        ]
        return sidecars + [c for c in inputs.cache_files if c not in sidecars]

    def _load_phase(self) -> None:
        """Phase 5: Load fingerprints from sidecars."""
        self.fingerprints = self._load(self._sidecars_for(self.inputs))
        if self.reference_inputs:
            self.references = self._load(self._sidecars_for(self.reference_inputs))
        self.logger.debug(f"Loaded {len(self.fingerprints):,} fingerprints")

    def _match_phase(self) -> None:
        """Phase 6: Compare fingerprints."""
        show_progress = not self.args.no_progress
        self.logger.info(
            f"Comparing fingerprints (metric={self.metric.value}, threshold={self.args.threshold:g})..."
        )
        if self.reference_inputs:
            self.results = find_reference_matches(
                self.references,
                self.fingerprints,
                metric=self.metric,
                threshold=self.args.threshold,
                show_progress=show_progress,
                logger=self.logger,
            )
        else:
            self.results = find_all_pairs_matches(
                self.fingerprints,
                metric=self.metric,
                threshold=self.args.threshold,
                show_progress=show_progress,
                logger=self.logger,
            )

    def _report_phase(self) -> None:
        """Phase 6b: Print results."""
        reportable = select_reportable(self.results, verbose=self.args.verbose)
        print_match_report(reportable, verbose=self.args.verbose)


__all__ = ['CLIOrchestrator', 'setup_logging', 'EXIT_CONFIG_ERROR']
