"""Dataset export: every stored sample as one JSON file inside a zip.

Archive layout::

    gesture_dataset_<exportEpochMs>.zip
    └── dataset/
        ├── fist_1.json
        ├── fist_2.json
        └── open_palm_1.json
"""

from __future__ import annotations

import logging
import os
import tempfile
import time
import zipfile
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence

from gesturebank.config import CaptureConfig
from gesturebank.errors import EmptyDatasetError, StorageError
from gesturebank.persistence import dumps_record
from gesturebank.store import SampleStore
from gesturebank.types import Sample

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


def build_archive(
    samples: Sequence[Sample],
    fileobj: BinaryIO,
    folder: str = "dataset",
    on_progress: Optional[ProgressCallback] = None,
) -> int:
    """Write samples as a deflate-compressed zip into ``fileobj``.

    Each sample becomes ``<folder>/<filename>`` holding its JSON record.
    ``on_progress`` receives the completed fraction after every entry.

    Returns:
        Number of entries written.
    """
    total = len(samples)
    with zipfile.ZipFile(fileobj, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for i, sample in enumerate(samples, start=1):
            zf.writestr(f"{folder}/{sample.filename}", dumps_record(sample).encode("utf-8"))
            if on_progress is not None:
                on_progress(i / total)
    return total


class ArchiveExporter:
    """Packages the full sample store into a single zip artifact.

    The archive is assembled in a temporary file next to its final location
    and renamed into place only once complete, so a failed export leaves
    nothing behind.

    Args:
        store: Sample store to export.
        output_dir: Directory receiving the archive.
        folder: Top-level folder inside the archive.
        prefix: Archive filename prefix.
        clock: Returns the current epoch milliseconds (injectable for tests).
    """

    def __init__(
        self,
        store: SampleStore,
        output_dir: str | Path = ".",
        folder: str = "dataset",
        prefix: str = "gesture_dataset",
        clock: Optional[Callable[[], int]] = None,
    ):
        self._store = store
        self._output_dir = Path(output_dir).expanduser()
        self._folder = folder
        self._prefix = prefix
        self._clock = clock or (lambda: int(time.time() * 1000))

    @classmethod
    def from_config(
        cls,
        store: SampleStore,
        config: CaptureConfig,
        output_dir: str | Path = ".",
        clock: Optional[Callable[[], int]] = None,
    ) -> ArchiveExporter:
        """Build an exporter using the archive folder and prefix of ``config``."""
        return cls(
            store,
            output_dir,
            folder=config.archive_folder,
            prefix=config.archive_prefix,
            clock=clock,
        )

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def export(
        self,
        on_progress: Optional[ProgressCallback] = None,
        output_dir: Optional[str | Path] = None,
    ) -> Path:
        """Export every stored sample.

        Args:
            on_progress: Called with the completed fraction (0, 1].
            output_dir: Overrides the exporter's output directory.

        Returns:
            Path of the written archive.

        Raises:
            EmptyDatasetError: The store holds no samples.
            StorageError: Reading the store or writing the archive failed.
        """
        samples = self._store.all()
        if not samples:
            raise EmptyDatasetError("No samples stored")

        out_dir = Path(output_dir).expanduser() if output_dir is not None else self._output_dir
        target = out_dir / f"{self._prefix}_{self._clock()}.zip"

        tmp_path: Optional[Path] = None
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=out_dir, prefix=f".{target.stem}.", suffix=".part")
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                build_archive(samples, f, folder=self._folder, on_progress=on_progress)
            os.replace(tmp_path, target)
        except (OSError, zipfile.BadZipFile) as e:
            raise StorageError(f"Failed to write archive {target}: {e}") from e
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()

        logger.info(f"Exported {len(samples)} samples to {target}")
        return target


__all__ = ["ArchiveExporter", "build_archive", "ProgressCallback"]
