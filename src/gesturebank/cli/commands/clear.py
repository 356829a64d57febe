"""Clear command for gesturebank CLI."""

from gesturebank.cli.commands._store import open_store


def run_clear(args):
    """Delete every stored sample after confirmation."""
    if not args.yes:
        answer = input("Delete ALL samples? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("Aborted.")
            return

    with open_store(args) as store:
        removed = store.clear()
    print(f"Database cleared ({removed} samples removed)")
