"""Shared fixtures for gesturebank tests.

All landmarks are synthetic and time is faked: no camera, detector or
real sleeping needed.
"""

import numpy as np
import pytest

from helpers import FakeSleep
from gesturebank.store import SampleStore
from gesturebank.types import FRAME_COUNT, FRAME_DIM


@pytest.fixture
def make_hand():
    """Factory fixture for deterministic (21, 3) hand landmarks."""

    def _make(seed=0, offset=(0.0, 0.0, 0.0), scale=1.0):
        rng = np.random.default_rng(seed)
        pts = rng.uniform(0.3, 0.7, size=(21, 3))
        pts = (pts - pts[0]) * scale + pts[0]
        return pts + np.asarray(offset, dtype=np.float64)

    return _make


@pytest.fixture
def make_frames():
    """Factory fixture for (32, 63) frame matrices."""

    def _make(seed=None):
        if seed is None:
            return np.zeros((FRAME_COUNT, FRAME_DIM))
        rng = np.random.default_rng(seed)
        return rng.uniform(-1.0, 1.0, size=(FRAME_COUNT, FRAME_DIM))

    return _make


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def store(tmp_path):
    """Empty SQLite-backed store under tmp_path."""
    s = SampleStore.open(tmp_path / "samples.db")
    yield s
    s.close()
