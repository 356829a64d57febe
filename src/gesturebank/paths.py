"""Home, database and export directory resolution.

Defaults to ``~/.gesturebank``; override with ``GESTUREBANK_HOME``.
"""

import os
from pathlib import Path

DB_FILENAME = "samples.db"


def get_home_dir() -> Path:
    """Return the gesturebank home directory, creating it if needed.

    Resolution order:
        1. ``GESTUREBANK_HOME`` environment variable.
        2. ``~/.gesturebank`` (default).
    """
    home = os.environ.get("GESTUREBANK_HOME")
    if home:
        home_dir = Path(home).expanduser()
    else:
        home_dir = Path.home() / ".gesturebank"
    home_dir.mkdir(parents=True, exist_ok=True)
    return home_dir


def get_db_path() -> Path:
    """Default SQLite sample store location: ``{home}/samples.db``."""
    return get_home_dir() / DB_FILENAME


def get_export_dir() -> Path:
    """Default archive output directory: ``{home}/exports``.

    The directory is **not** created here; the exporter creates it when
    an archive is actually written.
    """
    return get_home_dir() / "exports"
