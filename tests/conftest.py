import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]

# Make ``adjust_engine`` importable without an editable install.
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def solid():
    """Factory for a (height, width, 4) uint8 buffer filled with one RGBA pixel."""

    def _solid(r, g, b, a=255, height=2, width=3):
        return np.tile(np.array([r, g, b, a], dtype=np.uint8), (height, width, 1))

    return _solid


@pytest.fixture
def noise_rgba():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
