"""Info command for gesturebank CLI.

Shows the store location, total sample count and per-gesture counts.
"""

from gesturebank.cli.commands._store import open_store


def run_info(args):
    """Show stored sample counts."""
    with open_store(args) as store:
        counts = store.label_counts()
        url = store.url

    total = sum(counts.values())
    print("GestureBank - Sample Store")
    print("=" * 60)
    print(f"  Store:   {url}")
    print(f"  Samples: {total}")

    if not counts:
        print("  (empty)")
        return

    print()
    print(f"  {'Gesture':<30}{'Samples':>10}")
    print("-" * 60)
    for label, n in counts.items():
        print(f"  {label:<30}{n:>10}")
