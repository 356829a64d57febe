"""Frame normalization: landmark snapshot -> 63-float canonical vector.

The output is wrist-relative (translation invariant) and divided by the
largest wrist-to-point distance (scale invariant). An absent hand maps to
an all-zero frame.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import numpy as np

from gesturebank.types import FRAME_DIM, LANDMARK_DIMS, NUM_LANDMARKS, HandLandmarkIndex

# Floor on the scale divisor; a hand whose points all coincide with the
# wrist normalizes to zeros instead of dividing by zero.
MIN_SCALE = 1e-6


def flatten_landmarks(snapshot: Any) -> np.ndarray:
    """Convert a landmark snapshot to a (21, 3) float64 array.

    Accepts an array-like of shape (21, 3) or (63,), or a sequence of 21
    objects exposing ``x``, ``y`` and ``z`` attributes (MediaPipe
    ``NormalizedLandmark`` style).

    Raises:
        ValueError: If the snapshot does not hold exactly 21 points.
    """
    if isinstance(snapshot, np.ndarray):
        points = snapshot.astype(np.float64, copy=False)
    else:
        items = list(snapshot)
        if items and hasattr(items[0], "x"):
            points = np.array([[p.x, p.y, p.z] for p in items], dtype=np.float64)
        else:
            points = np.asarray(items, dtype=np.float64)

    if points.shape == (FRAME_DIM,):
        points = points.reshape(NUM_LANDMARKS, LANDMARK_DIMS)
    if points.shape != (NUM_LANDMARKS, LANDMARK_DIMS):
        raise ValueError(
            f"Expected {NUM_LANDMARKS} landmarks with {LANDMARK_DIMS} coords, "
            f"got shape {points.shape}"
        )
    return points


def normalize_frame(snapshot: Optional[Any]) -> np.ndarray:
    """Normalize one landmark snapshot.

    Args:
        snapshot: 21 landmarks (see :func:`flatten_landmarks`) or None when
            no hand is visible.

    Returns:
        Read-only float64 vector of length 63.
    """
    if snapshot is None:
        frame = np.zeros(FRAME_DIM, dtype=np.float64)
    else:
        points = flatten_landmarks(snapshot)
        centered = points - points[HandLandmarkIndex.WRIST]
        max_norm = float(np.linalg.norm(centered, axis=1).max())
        scale = max(MIN_SCALE, max_norm)
        frame = (centered / scale).reshape(FRAME_DIM)

    frame.flags.writeable = False
    return frame


def normalize_sequence(snapshots: Iterable[Optional[Any]]) -> np.ndarray:
    """Normalize a series of snapshots into a (n, 63) array."""
    frames = [normalize_frame(s) for s in snapshots]
    if not frames:
        return np.zeros((0, FRAME_DIM), dtype=np.float64)
    return np.stack(frames)


__all__ = ["MIN_SCALE", "flatten_landmarks", "normalize_frame", "normalize_sequence"]
