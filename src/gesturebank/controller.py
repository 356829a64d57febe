"""Batch capture controller.

Drives N sequential sequence captures for one gesture label, names each
sample with a per-label ordinal, persists it, and reports progress.

State machine::

    IDLE --start_batch--> RUNNING(i of N) --last sample--> COMPLETED --hold--> IDLE
                              |
                              +--error / cancel()--> IDLE

Only one session may run at a time. A ``start_batch`` call while another
session is running is a no-op.

Example:
    >>> controller = BatchCaptureController(store, sampler, exporter)
    >>> result = controller.start_batch("fist", 5)
    >>> result.filenames
    ['fist_1.json', 'fist_2.json', 'fist_3.json', 'fist_4.json', 'fist_5.json']
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from gesturebank.config import CaptureConfig
from gesturebank.errors import StorageError, ValidationError
from gesturebank.exporter import ArchiveExporter, ProgressCallback
from gesturebank.sampler import SequenceSampler
from gesturebank.store import SampleStore
from gesturebank.types import BatchResult, CaptureStatus, SessionState

logger = logging.getLogger(__name__)

STATUS_IDLE = "Idle"
STATUS_COMPLETE = "Batch complete"
STATUS_CANCELLED = "Batch cancelled"
STATUS_EXPORTING = "Exporting..."
STATUS_CLEARED = "Database cleared"


class BatchCaptureController:
    """Orchestrates batch capture sessions against a single sample store.

    Args:
        store: Sample store receiving captured sequences.
        sampler: Sequence sampler polling the landmark source.
        exporter: Archive exporter (required only for :meth:`export_archive`).
        config: Capture timing and limits. Its ``frame_count`` must match
            the store and sampler.
        sleep: Sleep function for inter-sample pauses (injectable for tests).
        on_update: Called with a fresh :class:`CaptureStatus` on every
            state, status, progress or total change.

    Raises:
        ValueError: The store or sampler frame count differs from the config.
    """

    def __init__(
        self,
        store: SampleStore,
        sampler: SequenceSampler,
        exporter: Optional[ArchiveExporter] = None,
        config: Optional[CaptureConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        on_update: Optional[Callable[[CaptureStatus], None]] = None,
    ):
        self._store = store
        self._sampler = sampler
        self._exporter = exporter
        self._config = config or CaptureConfig()
        self._sleep = sleep
        self._on_update = on_update
        self._check_frame_counts()

        self._session_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._cancel = threading.Event()

        self._state = SessionState.IDLE
        self._status = STATUS_IDLE
        self._progress = 0.0
        self._total_samples = 0

    # ========== Reporting surface ==========

    @property
    def state(self) -> SessionState:
        with self._state_lock:
            return self._state

    @property
    def status(self) -> str:
        with self._state_lock:
            return self._status

    @property
    def progress(self) -> float:
        with self._state_lock:
            return self._progress

    @property
    def total_samples(self) -> int:
        with self._state_lock:
            return self._total_samples

    @property
    def running(self) -> bool:
        return self.state == SessionState.RUNNING

    def snapshot(self) -> CaptureStatus:
        with self._state_lock:
            return CaptureStatus(
                state=self._state,
                status=self._status,
                progress=self._progress,
                total_samples=self._total_samples,
            )

    def refresh_total(self) -> int:
        """Recount the store and publish the total."""
        total = self._store.count()
        self._update(total_samples=total)
        return total

    # ========== Entry points ==========

    def start_batch(self, label: str, count: int) -> Optional[BatchResult]:
        """Capture ``count`` samples for ``label``.

        Blocks until the session ends. The label is trimmed once, and that
        trimmed value is used for counting, naming and the stored record.

        Returns:
            BatchResult, or None if another session was already running.

        Raises:
            ValidationError: Bad label or count (no state change).
            StorageError: A store write failed; remaining iterations are
                abandoned, committed samples are kept and the controller
                is back to idle. Any other error raised during the session
                also returns the controller to idle before propagating.
        """
        label = self._validate_label(label)
        count = self._validate_count(count)

        if not self._session_lock.acquire(blocking=False):
            logger.warning(f"Batch for '{label}' ignored: a session is already running")
            return None

        try:
            self._cancel.clear()
            return self._run_batch(label, count)
        finally:
            self._cancel.clear()
            self._session_lock.release()

    def cancel(self) -> bool:
        """Request the running session to stop.

        The session stops at its next checkpoint: before a capture starts,
        or right after one ends. A sequence whose capture was interrupted by
        the request is discarded. Samples already saved are kept.

        Returns:
            True if a session was running when the request was made.
        """
        if not self.running:
            return False
        self._cancel.set()
        logger.info("Batch cancellation requested")
        return True

    def export_archive(self, on_progress: Optional[ProgressCallback] = None) -> Path:
        """Export the whole store as a zip archive.

        Holds no session lock: samples appended during the export may or may
        not be included. While a batch session is active the export leaves
        the session's status and progress alone and only reports through
        ``on_progress``.

        Raises:
            EmptyDatasetError: Nothing to export.
            StorageError: Reading or writing failed.
        """
        if self._exporter is None:
            raise RuntimeError("No ArchiveExporter configured")

        owns_status = self.state == SessionState.IDLE
        previous = self.status

        def _progress(fraction: float) -> None:
            if owns_status and self.status == STATUS_EXPORTING:
                self._update(progress=fraction)
            if on_progress is not None:
                on_progress(fraction)

        if owns_status:
            self._update(status=STATUS_EXPORTING, progress=0.0)
        final_status = previous
        try:
            return self._exporter.export(on_progress=_progress)
        except StorageError as e:
            logger.error(f"Export failed: {e}")
            final_status = f"Storage error: {e}"
            raise
        finally:
            # A batch started mid-export owns the status from then on.
            if owns_status and self.status == STATUS_EXPORTING:
                self._update(status=final_status, progress=0.0)

    def clear_all(self) -> Optional[int]:
        """Delete every stored sample.

        The "Database cleared" status is held for ``clear_hold_sec`` after
        the session lock is released, so a batch may start during the hold.

        Returns:
            Number of samples removed, or None if a session is running.

        Raises:
            StorageError: The delete failed; the store is unchanged.
        """
        if not self._session_lock.acquire(blocking=False):
            logger.warning("Clear ignored: a batch session is running")
            return None
        try:
            removed = self._store.clear()
            self._update(status=STATUS_CLEARED, total_samples=0, progress=0.0)
        finally:
            self._session_lock.release()

        self._sleep(self._config.clear_hold_sec)
        if self.status == STATUS_CLEARED:
            self._update(status=STATUS_IDLE)
        return removed

    # ========== Session ==========

    def _run_batch(self, label: str, count: int) -> BatchResult:
        result = BatchResult(label=label, requested=count)
        logger.info(f"Batch started: '{label}' x {count}")

        try:
            self._update(state=SessionState.RUNNING, progress=0.0)
            self._capture_samples(label, count, result)
            result.total_samples = self._store.count()
        except StorageError as e:
            logger.error(f"Batch '{label}' aborted after {result.captured} samples: {e}")
            self._finish_with_error(f"Storage error: {e}")
            raise
        except BaseException as e:
            logger.error(
                f"Batch '{label}' failed after {result.captured} samples: "
                f"{type(e).__name__}: {e}"
            )
            self._finish_with_error(f"Batch failed: {e}")
            raise

        if result.cancelled:
            logger.info(f"Batch cancelled: '{label}' {result.captured}/{count} saved")
            self._update(
                state=SessionState.IDLE,
                status=STATUS_CANCELLED,
                progress=0.0,
                total_samples=result.total_samples,
            )
            return result

        logger.info(
            f"Batch complete: '{label}' x {count} (store total {result.total_samples})"
        )
        try:
            self._update(
                state=SessionState.COMPLETED,
                status=STATUS_COMPLETE,
                total_samples=result.total_samples,
            )
            self._sleep(self._config.complete_hold_sec)
        finally:
            self._update(state=SessionState.IDLE, status=STATUS_IDLE, progress=0.0)
        return result

    def _capture_samples(self, label: str, count: int, result: BatchResult) -> None:
        for i in range(1, count + 1):
            if self._cancel.is_set():
                result.cancelled = True
                return

            self._update(status=f"Capturing {i} / {count}")
            frames = self._sampler.capture()

            if self._cancel.is_set():
                logger.info(f"Discarding sequence {i} of '{label}' (cancelled)")
                result.cancelled = True
                return

            ordinal = self._store.count_by_label(label) + 1
            sample = self._store.append(label, frames, ordinal=ordinal)
            result.filenames.append(sample.filename)
            logger.debug(f"Saved {sample.filename} ({i}/{count})")

            self._sleep(self._config.sample_pause_sec)
            self._update(progress=i / count)

    def _finish_with_error(self, status: str) -> None:
        try:
            total = self._store.count()
        except StorageError:
            total = self.total_samples
        # State is set before on_update fires, even if the callback raises.
        self._update(
            state=SessionState.IDLE,
            status=status,
            progress=0.0,
            total_samples=total,
        )

    # ========== Helpers ==========

    def _check_frame_counts(self) -> None:
        expected = self._config.frame_count
        for name, part in (("store", self._store), ("sampler", self._sampler)):
            actual = getattr(part, "frame_count", None)
            if actual is not None and actual != expected:
                raise ValueError(
                    f"{name} frame_count {actual} does not match config frame_count {expected}"
                )

    def _validate_label(self, label: str) -> str:
        if not isinstance(label, str):
            raise ValidationError("Gesture label must be a string")
        label = label.strip()
        if not label:
            raise ValidationError("Enter gesture name")
        if any(c in label for c in ("/", "\\")) or not label.isprintable():
            raise ValidationError(
                f"Gesture label {label!r} must not contain path separators or control characters"
            )
        return label

    def _validate_count(self, count: int) -> int:
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError(f"Batch count must be an integer, got {count!r}")
        if count <= 0:
            raise ValidationError(f"Batch count must be positive, got {count}")
        if count > self._config.max_batch_count:
            raise ValidationError(
                f"Batch count {count} exceeds limit of {self._config.max_batch_count}"
            )
        return count

    def _update(self, **changes) -> None:
        with self._state_lock:
            if "state" in changes:
                self._state = changes["state"]
            if "status" in changes:
                self._status = changes["status"]
            if "progress" in changes:
                self._progress = changes["progress"]
            if "total_samples" in changes:
                self._total_samples = changes["total_samples"]
            snapshot = CaptureStatus(
                state=self._state,
                status=self._status,
                progress=self._progress,
                total_samples=self._total_samples,
            )
        if self._on_update is not None:
            self._on_update(snapshot)


__all__ = [
    "BatchCaptureController",
    "STATUS_IDLE",
    "STATUS_COMPLETE",
    "STATUS_CANCELLED",
    "STATUS_EXPORTING",
    "STATUS_CLEARED",
]
