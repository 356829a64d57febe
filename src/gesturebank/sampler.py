"""Fixed-cadence sequence sampling."""

from __future__ import annotations

import logging
import time
from typing import Callable

import numpy as np

from gesturebank.config import CaptureConfig
from gesturebank.normalize import normalize_frame
from gesturebank.source import LandmarkSource
from gesturebank.types import FRAME_COUNT, FRAME_DIM

logger = logging.getLogger(__name__)

# ~30 fps regardless of how fast the detector actually calls back.
DEFAULT_FRAME_INTERVAL_SEC = 0.033


class SequenceSampler:
    """Samples a landmark source into a fixed-length normalized sequence.

    Each capture reads the source exactly ``frame_count`` times, sleeping
    ``interval_sec`` after every read. Reads are point-in-time polls: if no
    hand is visible at that instant the frame is all-zero and sampling
    carries on, so a capture never aborts on transient tracking loss.

    Args:
        source: Landmark source to poll.
        frame_count: Frames per sequence.
        interval_sec: Wait between two reads.
        sleep: Sleep function (injectable for tests).
    """

    def __init__(
        self,
        source: LandmarkSource,
        frame_count: int = FRAME_COUNT,
        interval_sec: float = DEFAULT_FRAME_INTERVAL_SEC,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if frame_count <= 0:
            raise ValueError(f"frame_count must be positive, got {frame_count}")
        self._source = source
        self._frame_count = frame_count
        self._interval_sec = interval_sec
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        source: LandmarkSource,
        config: CaptureConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> SequenceSampler:
        """Build a sampler using the frame count and cadence of ``config``."""
        return cls(
            source,
            frame_count=config.frame_count,
            interval_sec=config.frame_interval_sec,
            sleep=sleep,
        )

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def duration_sec(self) -> float:
        """Nominal capture window (frame_count x interval)."""
        return self._frame_count * self._interval_sec

    def capture(self) -> np.ndarray:
        """Capture one sequence.

        Returns:
            Read-only array of shape (frame_count, 63). Never partial.
        """
        sequence = np.zeros((self._frame_count, FRAME_DIM), dtype=np.float64)
        hand_frames = 0

        for i in range(self._frame_count):
            snapshot = self._source.current_snapshot()
            if snapshot is not None:
                hand_frames += 1
            sequence[i] = normalize_frame(snapshot)
            self._sleep(self._interval_sec)

        sequence.flags.writeable = False
        logger.debug(
            f"Captured sequence: {hand_frames}/{self._frame_count} frames with a hand"
        )
        return sequence


__all__ = ["SequenceSampler", "DEFAULT_FRAME_INTERVAL_SEC"]
