# Make `import pixeluri` work from a fresh clone without installing:
# put repo/python on sys.path before test modules are collected.
import sys
from pathlib import Path

import numpy as np
import pytest


def _ensure_python_path():
    pkg_dir = Path(__file__).resolve().parents[1] / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


_ensure_python_path()


def pytest_configure(config):
    config.addinivalue_line("markers", "native: tests that need Pillow")


@pytest.fixture
def gradient_rgba():
    """Deterministic 5x3 RGBA image as an (H, W, 4) uint8 array."""
    h, w = 3, 5
    ys, xs = np.mgrid[0:h, 0:w]
    rgba = np.stack(
        [xs * 50, ys * 100, (xs + ys) * 20, np.full_like(xs, 255)],
        axis=-1,
    )
    return rgba.astype(np.uint8)
