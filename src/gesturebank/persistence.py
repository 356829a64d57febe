"""Sample record codec.

A sample is stored and exported as a UTF-8 JSON record::

    {"label": "fist", "createdAt": 1718000000000,
     "frames": [[63 floats] x 32], "filename": "fist_1.json"}

numpy arrays are converted to nested lists on the way out and back to
read-only float64 arrays on the way in.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import numpy as np

from gesturebank.types import FRAME_DIM, Sample


def sample_to_dict(sample: Sample) -> dict:
    """Convert a Sample to its JSON-serializable record."""
    return {
        "label": sample.label,
        "createdAt": int(sample.created_at),
        "frames": np.asarray(sample.frames, dtype=np.float64).tolist(),
        "filename": sample.filename,
    }


def dict_to_sample(data: dict, sample_id: Optional[int] = None) -> Sample:
    """Convert a record dict back to a Sample.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If frames are not a (n, 63) matrix.
    """
    return Sample(
        label=data["label"],
        created_at=int(data["createdAt"]),
        frames=frames_from_list(data["frames"]),
        filename=data["filename"],
        sample_id=sample_id,
    )


def frames_from_list(frames: Any) -> np.ndarray:
    """Rebuild a read-only (n, 63) frame matrix from nested lists."""
    arr = np.array(frames, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != FRAME_DIM:
        raise ValueError(f"Expected frames of shape (n, {FRAME_DIM}), got {arr.shape}")
    arr.flags.writeable = False
    return arr


def dumps_record(sample: Sample) -> str:
    """Serialize a Sample to its JSON record text."""
    return json.dumps(sample_to_dict(sample), ensure_ascii=False)


def loads_record(text: str | bytes, sample_id: Optional[int] = None) -> Sample:
    """Parse a JSON record produced by :func:`dumps_record`."""
    return dict_to_sample(json.loads(text), sample_id=sample_id)


__all__ = [
    "sample_to_dict",
    "dict_to_sample",
    "frames_from_list",
    "dumps_record",
    "loads_record",
]
