"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import numpy as np
from PIL import Image


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (same red square)
        - red_large.png (bigger red square, visually identical)
        - unique.png (blue square)
        - gradient.png (horizontal gray ramp)
        - corrupted.jpg (image extension, not an image)
        - notes.txt (not an image at all)
    """
    images = {}

    red = Image.new('RGB', (100, 100), color='red')
    path = temp_dir / "identical1.png"
    red.save(path, 'PNG')
    images['identical1'] = str(path)

    path = temp_dir / "identical2.png"
    red.save(path, 'PNG')
    images['identical2'] = str(path)

    path = temp_dir / "red_large.png"
    Image.new('RGB', (200, 200), color='red').save(path, 'PNG')
    images['red_large'] = str(path)

    path = temp_dir / "unique.png"
    Image.new('RGB', (100, 100), color='blue').save(path, 'PNG')
    images['unique'] = str(path)

    ramp = np.tile(np.arange(128, dtype=np.uint8) * 2, (64, 1))
    path = temp_dir / "gradient.png"
    Image.fromarray(np.dstack([ramp, ramp, ramp])).save(path, 'PNG')
    images['gradient'] = str(path)

    path = temp_dir / "corrupted.jpg"
    path.write_bytes(b"definitely not a jpeg")
    images['corrupted'] = str(path)

    path = temp_dir / "notes.txt"
    path.write_text("not an image")
    images['notes'] = str(path)

    return images


@pytest.fixture
def make_fingerprint():
    """Factory for Fingerprint objects with given cell bytes."""
    from pdupe.models import Fingerprint

    def _make(cells, name="/test/image.jpg", size=1024, path=None):
        if isinstance(cells, int):
            cells = bytes([cells]) * 3072
        return Fingerprint(
            name=name,
            size=size,
            cells=bytes(cells),
            path=name if path is None else path,
        )

    return _make


@pytest.fixture
def random_cells():
    """Factory for reproducible random cell bytes."""
    def _random(seed, length=3072, low=0, high=256):
        rng = np.random.default_rng(seed)
        return rng.integers(low, high, size=length, dtype=np.uint8).tobytes()

    return _random
