"""Store resolution shared by CLI commands."""

from pathlib import Path

from gesturebank.paths import get_db_path
from gesturebank.store import SampleStore


def open_store(args) -> SampleStore:
    """Open the store named by ``--db`` or the default home store."""
    db = getattr(args, "db", None)
    path = Path(db) if db else get_db_path()
    return SampleStore.open(path)
