"""Gesturebank data types and landmark constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

NUM_LANDMARKS = 21
LANDMARK_DIMS = 3
FRAME_DIM = NUM_LANDMARKS * LANDMARK_DIMS  # 63
FRAME_COUNT = 32


class HandLandmarkIndex:
    """MediaPipe hand landmark indices (21 per hand).

    Example:
        >>> pts = flatten_landmarks(snapshot)
        >>> wrist = pts[HandLandmarkIndex.WRIST]
    """

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class SessionState(Enum):
    """Batch capture session states."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(eq=False)
class Sample:
    """A persisted, labeled gesture sequence.

    Attributes:
        label: Gesture label (already trimmed by the caller).
        created_at: Creation time in epoch milliseconds.
        frames: Read-only array of shape (frame_count, 63).
        filename: ``"<label>_<ordinal>.json"``, unique within the store.
        sample_id: Store-assigned identifier (None until persisted).
    """

    label: str
    created_at: int
    frames: np.ndarray
    filename: str
    sample_id: Optional[int] = None

    @property
    def frame_count(self) -> int:
        return int(self.frames.shape[0])


@dataclass(frozen=True)
class CaptureStatus:
    """Snapshot of the controller's reporting surface."""

    state: SessionState
    status: str
    progress: float
    total_samples: int

    @property
    def running(self) -> bool:
        return self.state == SessionState.RUNNING


@dataclass
class BatchResult:
    """Outcome of one batch capture session."""

    label: str
    requested: int
    filenames: list[str] = field(default_factory=list)
    total_samples: int = 0
    cancelled: bool = False

    @property
    def captured(self) -> int:
        return len(self.filenames)


def sample_filename(label: str, ordinal: int) -> str:
    """Build the per-label deduplicated sample filename."""
    return f"{label}_{ordinal}.json"


__all__ = [
    "NUM_LANDMARKS",
    "LANDMARK_DIMS",
    "FRAME_DIM",
    "FRAME_COUNT",
    "HandLandmarkIndex",
    "SessionState",
    "Sample",
    "CaptureStatus",
    "BatchResult",
    "sample_filename",
]
