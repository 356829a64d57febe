"""Tests for SampleStore (SQLAlchemy/SQLite persistence)."""

import numpy as np
import pytest

from gesturebank.errors import StorageError, ValidationError
from gesturebank.store import SampleRecord, SampleStore


class TestAppend:
    def test_ordinals_per_label(self, store, make_frames):
        names = [store.append("fist", make_frames()).filename for _ in range(3)]
        assert names == ["fist_1.json", "fist_2.json", "fist_3.json"]

    def test_labels_counted_independently(self, store, make_frames):
        store.append("fist", make_frames())
        store.append("fist", make_frames())
        assert store.append("open_palm", make_frames()).filename == "open_palm_1.json"

    def test_returns_committed_sample(self, store, make_frames):
        frames = make_frames(seed=1)
        sample = store.append("wave", frames, created_at=1_700_000_000_000)
        assert sample.sample_id is not None
        assert sample.label == "wave"
        assert sample.created_at == 1_700_000_000_000
        np.testing.assert_array_equal(sample.frames, frames)

    def test_created_at_defaults_to_now(self, store, make_frames):
        sample = store.append("wave", make_frames())
        assert sample.created_at > 1_600_000_000_000

    def test_explicit_ordinal(self, store, make_frames):
        assert store.append("fist", make_frames(), ordinal=7).filename == "fist_7.json"

    def test_duplicate_filename_commits_nothing(self, store, make_frames):
        store.append("fist", make_frames(), ordinal=1)
        with pytest.raises(StorageError):
            store.append("fist", make_frames(), ordinal=1)
        assert store.count() == 1
        assert [s.filename for s in store.all()] == ["fist_1.json"]

    def test_empty_label_rejected(self, store, make_frames):
        with pytest.raises(ValidationError):
            store.append("", make_frames())
        assert store.count() == 0

    def test_bad_ordinal_rejected(self, store, make_frames):
        with pytest.raises(ValidationError):
            store.append("fist", make_frames(), ordinal=0)

    def test_wrong_frame_shape_rejected(self, store):
        with pytest.raises(ValidationError):
            store.append("fist", np.zeros((31, 63)))
        with pytest.raises(ValidationError):
            store.append("fist", np.zeros((32, 62)))
        assert store.count() == 0

    def test_custom_frame_count(self, tmp_path):
        with SampleStore.open(tmp_path / "short.db", frame_count=8) as s:
            assert s.append("fist", np.zeros((8, 63))).filename == "fist_1.json"


class TestQueries:
    def test_count_by_label_is_case_sensitive(self, store, make_frames):
        store.append("fist", make_frames())
        assert store.count_by_label("fist") == 1
        assert store.count_by_label("Fist") == 0
        assert store.count_by_label(" fist") == 0

    def test_all_returns_every_sample(self, store, make_frames):
        frames = make_frames(seed=3)
        store.append("fist", frames)
        store.append("wave", make_frames())

        samples = {s.filename: s for s in store.all()}
        assert set(samples) == {"fist_1.json", "wave_1.json"}
        np.testing.assert_allclose(samples["fist_1.json"].frames, frames)
        assert samples["fist_1.json"].frames.shape == (32, 63)

    def test_label_counts(self, store, make_frames):
        for label in ("wave", "fist", "fist"):
            store.append(label, make_frames())
        assert store.label_counts() == {"fist": 2, "wave": 1}
        assert store.count() == 3

    def test_empty_store(self, store):
        assert store.all() == []
        assert store.count() == 0
        assert store.label_counts() == {}


class TestClear:
    def test_clear_removes_everything(self, store, make_frames):
        store.append("fist", make_frames())
        store.append("wave", make_frames())

        assert store.clear() == 2
        assert store.all() == []
        assert store.count_by_label("fist") == 0
        assert store.count_by_label("wave") == 0

    def test_ordinals_restart_after_clear(self, store, make_frames):
        store.append("fist", make_frames())
        store.clear()
        assert store.append("fist", make_frames()).filename == "fist_1.json"


class TestDurability:
    def test_samples_survive_reopen(self, tmp_path, make_frames):
        path = tmp_path / "nested" / "samples.db"
        with SampleStore.open(path) as s:
            s.append("fist", make_frames(seed=5))
            s.append("fist", make_frames())

        with SampleStore.open(path) as s:
            assert s.count_by_label("fist") == 2
            assert s.append("fist", make_frames()).filename == "fist_3.json"


class TestStorageErrors:
    def test_append_failure_surfaces_storage_error(self, store, make_frames):
        SampleRecord.__table__.drop(store.engine)
        with pytest.raises(StorageError):
            store.append("fist", make_frames())

    def test_read_failure_surfaces_storage_error(self, store):
        SampleRecord.__table__.drop(store.engine)
        with pytest.raises(StorageError):
            store.all()
        with pytest.raises(StorageError):
            store.count_by_label("fist")

    def test_clear_failure_surfaces_storage_error(self, store):
        SampleRecord.__table__.drop(store.engine)
        with pytest.raises(StorageError):
            store.clear()

    def test_unopenable_location(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError):
            SampleStore.open(blocker / "samples.db")
