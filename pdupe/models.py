"""
Data models for the perceptual duplicate finder.

Contains dataclasses for decoded rasters, fingerprints, comparison results
and per-image scheduling outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import os

import numpy as np


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Decoded pixels of one image.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        pixels: Array of shape (height, width, 3) holding R, G, B samples
        depth: Bits per channel sample (8 for ordinary images, 16 for
               high bit depth scans)
    """
    width: int
    height: int
    pixels: np.ndarray = field(repr=False)
    depth: int = 8

    @classmethod
    def from_array(cls, pixels: np.ndarray, depth: int = 8) -> 'RasterImage':
        """Wrap an (height, width, 3) array."""
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) array, got shape {pixels.shape}")
        return cls(width=pixels.shape[1], height=pixels.shape[0], pixels=pixels, depth=depth)

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the (r, g, b) samples at column x, row y."""
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)


@dataclass(frozen=True)
class Fingerprint:
    """
    Grid of averaged, quantized colors summarizing one image.

    Attributes:
        name: Source path at the time the image was fingerprinted
        size: Source file size in bytes (only used to order reports)
        cells: Row-major (r, g, b) byte triples, 3 bytes per grid cell
        path: Live source path, re-derived when loaded from a sidecar.
              Empty when the backing image could not be found.
    """
    name: str
    size: int
    cells: bytes = field(repr=False)
    path: str = ""

    @property
    def cell_count(self) -> int:
        """Number of grid cells."""
        return len(self.cells) // 3

    @property
    def display_path(self) -> str:
        """Live path, or the stored name in quotes if the image is missing."""
        if self.path:
            return self.path
        return f'"{self.name}"'

    @property
    def source_key(self) -> str:
        """Normalized source path used to detect self-matches."""
        return os.path.normcase(os.path.abspath(self.path or self.name))

    def as_array(self) -> np.ndarray:
        """Return the cell bytes as a read-only uint8 array."""
        return np.frombuffer(self.cells, dtype=np.uint8)


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of comparing two fingerprints.

    Attributes:
        a: First fingerprint
        b: Second fingerprint
        distance: Distance under the selected metric
        matched: True when distance <= threshold
        metric: Name of the metric used ('simple', 'prism' or 'stddev')
    """
    a: Fingerprint
    b: Fingerprint
    distance: float
    matched: bool
    metric: str = "simple"

    def ordered(self) -> tuple[Fingerprint, Fingerprint]:
        """Return the pair with the larger source file first."""
        if self.b.size > self.a.size:
            return self.b, self.a
        return self.a, self.b


@dataclass(frozen=True)
class ChannelStats:
    """Per-channel difference statistics between two fingerprints."""
    channel: str
    mean_abs: float
    mean: float
    stddev: float


@dataclass
class FingerprintOutcome:
    """
    Result of fingerprinting one image.

    Attributes:
        path: Image path that was scheduled
        cache_path: Sidecar file written or reused, None on failure
        error: Error message if fingerprinting failed
        skipped: True if an existing sidecar was reused
    """
    path: str
    cache_path: Optional[str] = None
    error: Optional[str] = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.cache_path is not None and self.error is None


@dataclass
class ScanStats:
    """Counters for one fingerprinting run."""
    total_files: int = 0
    fingerprinted: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Return the share of files with a usable sidecar, as a percentage."""
        if self.total_files == 0:
            return 0.0
        return ((self.fingerprinted + self.skipped) / self.total_files) * 100
