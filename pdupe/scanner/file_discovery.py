"""
File discovery module for the scanner package.

Finds image files in directories and sorts command-line inputs into
images, sidecar cache files and directories.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..config import HEIF_EXTENSIONS, IMAGE_EXTENSIONS
from ..cache import is_cache_file
from .dependencies import HAS_HEIF_SUPPORT, _logger


def _scannable_extensions() -> set[str]:
    if HAS_HEIF_SUPPORT:
        return IMAGE_EXTENSIONS
    return {ext for ext in IMAGE_EXTENSIONS if ext not in HEIF_EXTENSIONS}


def is_image_file(path: str | Path) -> bool:
    """Check whether a path has a supported image extension."""
    return Path(path).suffix.lower() in _scannable_extensions()


def find_image_files(root_path: str | Path, recursive: bool = True) -> list[str]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively

    Returns:
        Sorted list of absolute file paths as strings

    Notes:
        - Automatically filters out HEIC/HEIF files if pillow-heif is not installed
        - Handles symlinks by resolving to canonical paths
        - Deduplicates files that may be encountered via multiple paths
    """
    root = Path(root_path)
    extensions_to_scan = _scannable_extensions()

    images = []
    seen = set()  # Track resolved paths to avoid duplicates

    iterator = root.rglob('*') if recursive else root.glob('*')

    for filepath in iterator:
        if filepath.is_file() and filepath.suffix.lower() in extensions_to_scan:
            resolved = str(filepath.resolve())
            if resolved not in seen:
                seen.add(resolved)
                images.append(resolved)

    return sorted(images)


@dataclass
class ClassifiedInputs:
    """Command-line inputs sorted by kind."""
    images: list[str] = field(default_factory=list)
    cache_files: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    unrecognized: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.images and not self.cache_files


def classify_inputs(paths: list[str | Path], recursive: bool = True) -> ClassifiedInputs:
    """
    Sort input paths into images and sidecar cache files.

    Directories are expanded into the images they contain. Paths that do
    not exist or are neither images nor sidecars are collected separately
    so the caller can report them. Duplicates are dropped, first
    occurrence wins.

    Args:
        paths: Paths given on the command line
        recursive: Whether directories are scanned recursively

    Returns:
        ClassifiedInputs
    """
    result = ClassifiedInputs()
    seen: set[str] = set()

    def add(bucket: list[str], path: str) -> None:
        if path not in seen:
            seen.add(path)
            bucket.append(path)

    for raw in paths:
        path = str(raw)
        if not os.path.exists(path):
            result.missing.append(path)
        elif os.path.isdir(path):
            found = find_image_files(path, recursive=recursive)
            _logger.debug(f"Found {len(found):,} images in {path}")
            for image in found:
                add(result.images, image)
        elif is_cache_file(path):
            add(result.cache_files, str(Path(path).resolve()))
        elif is_image_file(path):
            add(result.images, str(Path(path).resolve()))
        else:
            result.unrecognized.append(path)

    return result


__all__ = ['find_image_files', 'is_image_file', 'classify_inputs', 'ClassifiedInputs']
