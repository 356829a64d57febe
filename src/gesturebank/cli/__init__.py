"""Command-line interface for gesturebank."""

import sys
import argparse
import logging

from gesturebank.errors import GestureBankError


def _add_db_arg(parser):
    """Add --db arg to a parser."""
    parser.add_argument(
        "--db", type=str, metavar="PATH",
        help="Sample store database (default: $GESTUREBANK_HOME/samples.db)",
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="gesturebank",
        description="GestureBank - Hand-gesture sequence dataset tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gesturebank info                    # Sample counts per gesture
  gesturebank export -o ./exports     # Write gesture_dataset_<ms>.zip
  gesturebank clear --yes             # Delete all samples
""",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show stored sample counts",
        description="Display the sample store location and per-gesture counts.",
    )
    _add_db_arg(info_parser)

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export all samples as a zip archive",
        description="Package every stored sample as dataset/<filename> inside one zip.",
    )
    _add_db_arg(export_parser)
    export_parser.add_argument(
        "--output-dir", "-o", type=str,
        help="Output directory (default: $GESTUREBANK_HOME/exports)",
    )

    # clear command
    clear_parser = subparsers.add_parser(
        "clear",
        help="Delete ALL stored samples",
        description="Irreversibly delete every sample in the store.",
    )
    _add_db_arg(clear_parser)
    clear_parser.add_argument(
        "-y", "--yes", action="store_true", help="Do not ask for confirmation",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    from gesturebank.cli import commands

    handlers = {
        "info": commands.run_info,
        "export": commands.run_export,
        "clear": commands.run_clear,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except GestureBankError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
