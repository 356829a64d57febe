"""Tests for gesturebank.paths: home, db and export directory resolution."""

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("GESTUREBANK_HOME", raising=False)


class TestGetHomeDir:
    def test_default_under_user_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        from gesturebank.paths import get_home_dir

        result = get_home_dir()
        assert result == tmp_path / ".gesturebank"
        assert result.is_dir()

    def test_env_override(self, tmp_path, monkeypatch):
        custom = tmp_path / "deep" / "custom_home"
        monkeypatch.setenv("GESTUREBANK_HOME", str(custom))
        from gesturebank.paths import get_home_dir

        assert not custom.exists()
        result = get_home_dir()
        assert result == custom
        assert result.is_dir()


class TestDerivedPaths:
    def test_db_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GESTUREBANK_HOME", str(tmp_path / "home"))
        from gesturebank.paths import get_db_path

        assert get_db_path() == tmp_path / "home" / "samples.db"

    def test_export_dir_not_created(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GESTUREBANK_HOME", str(tmp_path / "home"))
        from gesturebank.paths import get_export_dir

        result = get_export_dir()
        assert result == tmp_path / "home" / "exports"
        assert not result.exists()
