import sys
from pathlib import Path

import numpy as np
import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))


class FixedSpokes:
    """Stands in for numpy's Generator when a test needs a known spoke."""

    def __init__(self, spoke=0):
        self.spoke = spoke

    def integers(self, n):
        return self.spoke % n


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def spoke0():
    return FixedSpokes(0)
