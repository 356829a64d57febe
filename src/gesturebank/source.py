"""Landmark source interface and the single-slot shared snapshot cell.

The hand-landmark detector is an external producer. It runs at its own
cadence and overwrites the "current snapshot" on every callback. The capture
pipeline only ever polls it.

Example:
    >>> cell = LandmarkCell()
    >>> hands.on_results(lambda r: cell.publish_hands(r))   # producer thread
    >>> sampler = SequenceSampler(cell)                      # consumer
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

import numpy as np

from gesturebank.normalize import flatten_landmarks


@dataclass
class HandLandmarks:
    """One detected hand as reported by a landmark backend.

    Attributes:
        landmarks: Array of shape (21, 3) with (x, y, z) per landmark.
        handedness: "Left" or "Right".
        confidence: Detection confidence [0, 1].
    """

    landmarks: np.ndarray  # Shape: (21, 3)
    handedness: str = "Right"
    confidence: float = 1.0


class LandmarkSource(Protocol):
    """Protocol for anything the sampler can poll for landmarks."""

    def current_snapshot(self) -> Optional[np.ndarray]:
        """Return the latest (21, 3) landmarks, or None if no hand is visible.

        Must not block waiting for the producer.
        """
        ...


class LandmarkCell:
    """Last-write-wins cell holding the most recent landmark snapshot.

    No queueing and no backpressure: a reader always sees whatever was
    published last. Stored snapshots are private read-only copies, so a
    producer may reuse its buffers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: Optional[np.ndarray] = None
        self._update_count = 0

    def publish(self, landmarks: Optional[Any]) -> None:
        """Replace the current snapshot (None means no hand detected)."""
        if landmarks is None:
            snapshot = None
        else:
            snapshot = np.array(flatten_landmarks(landmarks), dtype=np.float64)
            snapshot.flags.writeable = False

        with self._lock:
            self._snapshot = snapshot
            self._update_count += 1

    def publish_hands(self, hands: Optional[Sequence[Any]]) -> None:
        """Publish the first detected hand of a detector result, or None.

        Items may be :class:`HandLandmarks` or raw landmark lists.
        """
        if not hands:
            self.publish(None)
            return
        first = hands[0]
        self.publish(getattr(first, "landmarks", first))

    def clear(self) -> None:
        self.publish(None)

    def current_snapshot(self) -> Optional[np.ndarray]:
        with self._lock:
            return self._snapshot

    @property
    def update_count(self) -> int:
        """Number of publish calls so far."""
        with self._lock:
            return self._update_count


__all__ = ["HandLandmarks", "LandmarkSource", "LandmarkCell"]
