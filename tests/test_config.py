"""Tests for CaptureConfig."""

import pytest

from gesturebank.config import CaptureConfig


class TestCaptureConfig:
    def test_defaults(self):
        config = CaptureConfig()
        assert config.frame_count == 32
        assert config.frame_interval_sec == pytest.approx(0.033)
        assert config.sample_pause_sec == pytest.approx(0.15)
        assert config.clear_hold_sec == pytest.approx(0.8)
        assert config.max_batch_count == 500
        assert config.archive_folder == "dataset"
        assert config.sequence_duration_sec == pytest.approx(1.056)

    @pytest.mark.parametrize("field,value", [
        ("frame_count", 0),
        ("max_batch_count", -5),
        ("frame_interval_sec", -0.01),
        ("sample_pause_sec", -1.0),
        ("clear_hold_sec", -0.2),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            CaptureConfig(**{field: value})

    def test_frozen(self):
        config = CaptureConfig()
        with pytest.raises(AttributeError):
            config.frame_count = 10
