"""Durable, append-only sample store.

Samples live in a single SQL table (SQLite by default) managed through the
SQLAlchemy ORM. Every operation runs inside a scoped transaction that either
commits fully or rolls back, and the session is released on every exit path.

Example:
    >>> store = SampleStore.open("~/.gesturebank/samples.db")
    >>> sample = store.append("fist", frames)
    >>> sample.filename
    'fist_1.json'
    >>> store.count_by_label("fist")
    1
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import numpy as np
from sqlalchemy import BigInteger, Column, Integer, String, Text, create_engine, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from gesturebank.errors import StorageError, ValidationError
from gesturebank.persistence import frames_from_list
from gesturebank.types import FRAME_COUNT, FRAME_DIM, Sample, sample_filename

logger = logging.getLogger(__name__)

Base = declarative_base()


class SampleRecord(Base):
    __tablename__ = "samples"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(255), nullable=False, index=True)
    filename = Column(String(512), nullable=False, unique=True)
    created_at = Column(BigInteger, nullable=False)
    frame_count = Column(Integer, nullable=False)
    frames = Column(Text, nullable=False)  # JSON: [[63 floats] x frame_count]


class SampleStore:
    """Append-only keyed storage of labeled gesture sequences.

    The store only grows one sample at a time (:meth:`append`) and only
    shrinks by a full :meth:`clear`. There is no update or partial delete.

    Args:
        url: SQLAlchemy database URL, e.g. ``sqlite:////path/samples.db``.
        frame_count: Required number of frames per appended sequence.
        echo: Log every SQL statement (SQLAlchemy engine echo).

    Raises:
        StorageError: If the database cannot be opened or initialized.
    """

    def __init__(self, url: str, frame_count: int = FRAME_COUNT, echo: bool = False):
        self._url = url
        self._frame_count = frame_count
        try:
            self._engine = create_engine(url, echo=echo)
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to open sample store at {url}: {e}") from e
        self._sessions = sessionmaker(
            bind=self._engine, autoflush=False, expire_on_commit=False,
        )
        logger.debug(f"Sample store opened: {url}")

    @classmethod
    def open(cls, path: str | Path, **kwargs: Any) -> "SampleStore":
        """Open (or create) a SQLite-backed store at ``path``."""
        path = Path(path).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create store directory {path.parent}: {e}") from e
        return cls(f"sqlite:///{path}", **kwargs)

    @property
    def url(self) -> str:
        return self._url

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def engine(self):
        return self._engine

    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        """open -> transact -> commit, with rollback and release on failure."""
        session = self._sessions()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to {action}: {e}") from e
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    def append(
        self,
        label: str,
        frames: Any,
        ordinal: Optional[int] = None,
        created_at: Optional[int] = None,
    ) -> Sample:
        """Persist one labeled sequence and return the committed Sample.

        The filename is ``"<label>_<ordinal>.json"``. When ``ordinal`` is
        omitted it is computed as (samples with this label) + 1 inside the
        same transaction as the insert. A filename that already exists
        violates the store's uniqueness constraint and nothing is written.

        Raises:
            ValidationError: Empty label, bad ordinal or bad frame shape.
            StorageError: The write failed; no partial sample is visible.
        """
        if not isinstance(label, str) or not label:
            raise ValidationError("Sample label must be a non-empty string")
        if ordinal is not None and ordinal < 1:
            raise ValidationError(f"Ordinal must be >= 1, got {ordinal}")
        arr = self._check_frames(frames)
        if created_at is None:
            created_at = int(time.time() * 1000)

        payload = json.dumps(arr.tolist())
        with self._transaction(f"append sample for '{label}'") as session:
            if ordinal is None:
                ordinal = self._count_label(session, label) + 1
            record = SampleRecord(
                label=label,
                filename=sample_filename(label, ordinal),
                created_at=created_at,
                frame_count=int(arr.shape[0]),
                frames=payload,
            )
            session.add(record)
            session.flush()
            sample_id = record.id
            filename = record.filename

        logger.debug(f"Appended sample {filename} (id={sample_id})")
        return Sample(
            label=label,
            created_at=created_at,
            frames=arr,
            filename=filename,
            sample_id=sample_id,
        )

    def count_by_label(self, label: str) -> int:
        """Number of stored samples whose label matches exactly."""
        with self._transaction("count samples") as session:
            return self._count_label(session, label)

    def count(self) -> int:
        """Total number of stored samples."""
        with self._transaction("count samples") as session:
            return int(session.scalar(select(func.count()).select_from(SampleRecord)))

    def label_counts(self) -> Dict[str, int]:
        """Samples per label, sorted by label."""
        with self._transaction("count samples") as session:
            rows = session.execute(
                select(SampleRecord.label, func.count())
                .group_by(SampleRecord.label)
                .order_by(SampleRecord.label)
            ).all()
        return {label: int(n) for label, n in rows}

    def all(self) -> List[Sample]:
        """Snapshot of every stored sample (ordering not guaranteed)."""
        with self._transaction("read samples") as session:
            records = session.scalars(select(SampleRecord)).all()
            return [self._to_sample(r) for r in records]

    def clear(self) -> int:
        """Delete every sample. Irreversible.

        Returns:
            Number of samples removed.
        """
        with self._transaction("clear samples") as session:
            removed = session.execute(delete(SampleRecord)).rowcount
        logger.info(f"Sample store cleared ({removed} samples removed)")
        return int(removed or 0)

    def close(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()

    def __enter__(self) -> "SampleStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------

    @staticmethod
    def _count_label(session: Session, label: str) -> int:
        stmt = select(func.count()).select_from(SampleRecord).where(SampleRecord.label == label)
        return int(session.scalar(stmt))

    def _check_frames(self, frames: Any) -> np.ndarray:
        try:
            arr = np.array(frames, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Frames are not numeric: {e}") from e
        if arr.shape != (self._frame_count, FRAME_DIM):
            raise ValidationError(
                f"Expected frames of shape ({self._frame_count}, {FRAME_DIM}), got {arr.shape}"
            )
        arr.flags.writeable = False
        return arr

    @staticmethod
    def _to_sample(record: SampleRecord) -> Sample:
        try:
            frames = frames_from_list(json.loads(record.frames))
        except ValueError as e:
            raise StorageError(f"Corrupt frames for sample {record.filename}: {e}") from e
        return Sample(
            label=record.label,
            created_at=int(record.created_at),
            frames=frames,
            filename=record.filename,
            sample_id=record.id,
        )


__all__ = ["SampleStore", "SampleRecord", "Base"]
