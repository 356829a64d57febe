"""Tests for the sample JSON record codec."""

import json

import numpy as np
import pytest

from gesturebank.persistence import dict_to_sample, dumps_record, loads_record, sample_to_dict
from gesturebank.types import Sample


def _sample(frames, label="fist", filename="fist_1.json"):
    return Sample(label=label, created_at=1_700_000_000_123, frames=frames, filename=filename)


class TestRecordFormat:
    def test_field_names(self, make_frames):
        record = sample_to_dict(_sample(make_frames()))
        assert set(record) == {"label", "createdAt", "frames", "filename"}

    def test_frames_are_plain_lists(self, make_frames):
        data = json.loads(dumps_record(_sample(make_frames(seed=1))))
        assert isinstance(data["frames"], list)
        assert len(data["frames"]) == 32
        assert all(len(row) == 63 for row in data["frames"])
        assert isinstance(data["createdAt"], int)

    def test_non_ascii_label_kept_verbatim(self, make_frames):
        text = dumps_record(_sample(make_frames(), label="안녕", filename="안녕_1.json"))
        assert "안녕" in text


class TestLoad:
    def test_load_restores_sample(self, make_frames):
        frames = make_frames(seed=2)
        loaded = loads_record(dumps_record(_sample(frames)), sample_id=9)
        assert loaded.label == "fist"
        assert loaded.created_at == 1_700_000_000_123
        assert loaded.filename == "fist_1.json"
        assert loaded.sample_id == 9
        np.testing.assert_allclose(loaded.frames, frames)
        assert not loaded.frames.flags.writeable

    def test_missing_field(self):
        with pytest.raises(KeyError):
            dict_to_sample({"label": "fist", "frames": [], "filename": "x.json"})

    def test_bad_frame_width(self):
        with pytest.raises(ValueError):
            dict_to_sample({
                "label": "fist", "createdAt": 1, "filename": "fist_1.json",
                "frames": [[0.0] * 62],
            })
