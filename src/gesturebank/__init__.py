"""gesturebank - Labeled hand-gesture sequence dataset capture.

Samples a live hand-landmark stream into fixed-length normalized sequences,
stores them with per-gesture deduplicated filenames, and exports the dataset
as a zip of JSON files.

Quick Start:
    >>> from gesturebank import (
    ...     LandmarkCell, SequenceSampler, SampleStore,
    ...     ArchiveExporter, BatchCaptureController,
    ... )
    >>> cell = LandmarkCell()                 # detector thread calls cell.publish(...)
    >>> store = SampleStore.open("samples.db")
    >>> controller = BatchCaptureController(
    ...     store, SequenceSampler(cell), ArchiveExporter(store, "exports"),
    ... )
    >>> controller.start_batch("fist", 50)
    >>> controller.export_archive()
"""

from gesturebank.types import (
    FRAME_COUNT,
    FRAME_DIM,
    NUM_LANDMARKS,
    HandLandmarkIndex,
    SessionState,
    Sample,
    CaptureStatus,
    BatchResult,
)
from gesturebank.errors import (
    GestureBankError,
    ValidationError,
    StorageError,
    EmptyDatasetError,
)
from gesturebank.config import CaptureConfig
from gesturebank.normalize import normalize_frame, normalize_sequence
from gesturebank.source import HandLandmarks, LandmarkCell, LandmarkSource
from gesturebank.sampler import SequenceSampler
from gesturebank.store import SampleStore
from gesturebank.exporter import ArchiveExporter, build_archive
from gesturebank.controller import BatchCaptureController

__version__ = "0.1.0"

__all__ = [
    "FRAME_COUNT",
    "FRAME_DIM",
    "NUM_LANDMARKS",
    "HandLandmarkIndex",
    "SessionState",
    "Sample",
    "CaptureStatus",
    "BatchResult",
    "GestureBankError",
    "ValidationError",
    "StorageError",
    "EmptyDatasetError",
    "CaptureConfig",
    "normalize_frame",
    "normalize_sequence",
    "HandLandmarks",
    "LandmarkCell",
    "LandmarkSource",
    "SequenceSampler",
    "SampleStore",
    "ArchiveExporter",
    "build_archive",
    "BatchCaptureController",
]
