"""Command-line front end for a configured table store."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from rolltables.config import Settings, settings
from rolltables.csvfiles import read_csv, write_csv
from rolltables.dice import DiceError
from rolltables.errors import TableError
from rolltables.expressions import parse_expression
from rolltables.stores import Backingstore, open_store
from rolltables.tables import load

logger = logging.getLogger(__name__)


def setup_logging(level: str, verbose: bool = False) -> None:
    """Configure logging from the settings level, or DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="rolltables",
        description="Load, list and roll on stored roll tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rolltables load encounters.csv encounters -r d6
  rolltables roll 2?encounters
  rolltables roll uni:3?encounters
  rolltables roll 4#encounters
        """,
    )
    parser.add_argument(
        "--backend",
        choices=["database", "file"],
        help="Store backend (default: ROLLTABLES_STORE_BACKEND or database)",
    )
    parser.add_argument("--database-url", help="SQLAlchemy URL for the database backend")
    parser.add_argument("--table-directory", help="Directory for the file backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    commands = parser.add_subparsers(dest="command", required=True)

    load_cmd = commands.add_parser("load", help="Load a CSV file as a table, replacing it")
    load_cmd.add_argument("csv", type=Path, help="CSV file, header row first")
    load_cmd.add_argument("name", help="Table name")
    load_cmd.add_argument(
        "-r", "--roll-expression", default="", help="Dice to roll on the table, e.g. d6"
    )
    load_cmd.add_argument("--title", default="", help="Display title")
    load_cmd.add_argument("--flavor-text", default="", help="Descriptive text")
    load_cmd.add_argument("--campaign", default="", help="Campaign the table belongs to")

    commands.add_parser("list", help="List stored tables")

    show_cmd = commands.add_parser("show", help="Print a table as CSV")
    show_cmd.add_argument("name", help="Table name")

    export_cmd = commands.add_parser("export", help="Write a table to a CSV file")
    export_cmd.add_argument("name", help="Table name")
    export_cmd.add_argument("csv", type=Path, help="Destination CSV file")

    delete_cmd = commands.add_parser("delete", help="Delete a table")
    delete_cmd.add_argument("name", help="Table name")

    roll_cmd = commands.add_parser("roll", help="Evaluate a table expression")
    roll_cmd.add_argument("expression", help="e.g. ?npc, 2?npc, uni:2?npc, 3#npc")

    return parser.parse_args(argv)


def create_settings_from_args(args: argparse.Namespace) -> Settings:
    """Overlay command line options on the process settings."""
    overrides: dict[str, str] = {}
    if args.backend:
        overrides["store_backend"] = args.backend
    if args.database_url:
        overrides["database_url"] = args.database_url
    if args.table_directory:
        overrides["table_directory"] = args.table_directory
    return settings.model_copy(update=overrides)


def _print_records(records: list[list[str]]) -> None:
    csv.writer(sys.stdout, lineterminator="\n").writerows(records)


def run_command(args: argparse.Namespace, store: Backingstore) -> None:
    """Run the parsed subcommand against store."""
    if args.command == "load":
        table = load(
            read_csv(args.csv),
            args.name,
            args.roll_expression,
            title=args.title,
            flavor_text=args.flavor_text,
            campaign=args.campaign,
        )
        store.save_table(table)
        print(f"loaded {len(table.rows)} rows into table [{table.meta.name}]")
    elif args.command == "list":
        for entry in store.list_tables():
            print(entry)
    elif args.command == "show":
        _print_records(store.get_table(args.name).records())
    elif args.command == "export":
        write_csv(args.csv, store.get_table(args.name).records())
    elif args.command == "delete":
        store.delete_table(args.name)
    elif args.command == "roll":
        request = parse_expression(args.expression)
        _print_records(store.get_table(request.table).expression(args.expression))


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    config = create_settings_from_args(args)
    setup_logging(config.log_level, args.verbose)

    try:
        store = open_store(config)
        try:
            run_command(args, store)
        finally:
            store.close()
    except (TableError, DiceError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
