"""Export command for gesturebank CLI."""

import sys
from pathlib import Path

from gesturebank.cli.commands._store import open_store
from gesturebank.config import CaptureConfig
from gesturebank.exporter import ArchiveExporter
from gesturebank.paths import get_export_dir


def run_export(args):
    """Write every stored sample into gesture_dataset_<ms>.zip."""
    output_dir = Path(args.output_dir) if args.output_dir else get_export_dir()

    def _progress(fraction: float) -> None:
        sys.stdout.write(f"\r  Exporting... {fraction * 100:5.1f}%")
        sys.stdout.flush()

    with open_store(args) as store:
        exporter = ArchiveExporter.from_config(store, CaptureConfig(), output_dir)
        path = exporter.export(on_progress=_progress)

    print()
    print(f"  Archive: {path}")
