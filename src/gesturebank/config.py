"""Configuration for gesture capture sessions.

Example:
    >>> from gesturebank.config import CaptureConfig
    >>> config = CaptureConfig(sample_pause_sec=0.3, complete_hold_sec=0.0)
    >>> config.sequence_duration_sec
    1.056
"""

from dataclasses import dataclass

from gesturebank.types import FRAME_COUNT


@dataclass(frozen=True)
class CaptureConfig:
    """Timing and limits for sequence capture and export.

    Attributes:
        frame_count: Frames per captured sequence.
        frame_interval_sec: Wait between two landmark reads (~30 fps).
        sample_pause_sec: Pause after each saved sample so the user can
            reposition their hand.
        complete_hold_sec: How long the "Batch complete" status is held
            before the controller returns to idle.
        clear_hold_sec: How long the "Database cleared" status is held
            before it returns to idle.
        max_batch_count: Upper bound on samples per batch session.
        archive_folder: Top-level folder inside the exported zip.
        archive_prefix: Exported archive name prefix.
    """

    frame_count: int = FRAME_COUNT
    frame_interval_sec: float = 0.033
    sample_pause_sec: float = 0.15
    complete_hold_sec: float = 0.6
    clear_hold_sec: float = 0.8
    max_batch_count: int = 500
    archive_folder: str = "dataset"
    archive_prefix: str = "gesture_dataset"

    def __post_init__(self) -> None:
        if self.frame_count <= 0:
            raise ValueError(f"frame_count must be positive, got {self.frame_count}")
        if self.max_batch_count <= 0:
            raise ValueError(
                f"max_batch_count must be positive, got {self.max_batch_count}"
            )
        for name in (
            "frame_interval_sec",
            "sample_pause_sec",
            "complete_hold_sec",
            "clear_hold_sec",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    @property
    def sequence_duration_sec(self) -> float:
        """Nominal wall-clock length of one captured sequence."""
        return round(self.frame_count * self.frame_interval_sec, 6)


__all__ = ["CaptureConfig"]
