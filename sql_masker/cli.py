"""
Command-line interface for sql_masker.

This module provides the ``sql-masker`` command: inspect the alias graph of
a query, run a query against a SQLite database with masking rules applied,
or scan a table for sensitive data.
"""

import argparse
import json
import sqlite3
import sys
from pathlib import Path
from typing import Any, Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from sql_masker import (
    AliasGraphBuilder,
    ClosureResolver,
    DBAPIDriver,
    ScanConfig,
    SecureQueryService,
    load_rules,
)
from sql_masker.exceptions import MaskingError

USE_COLOR = True


def _paint(color: str, msg: str) -> str:
    return f"{color}{msg}{Style.RESET_ALL}" if USE_COLOR else msg


def print_success(msg: str) -> None:
    """Print success message."""
    print(_paint(Fore.GREEN, f"[OK] {msg}"))


def print_error(msg: str) -> None:
    """Print error message."""
    print(_paint(Fore.RED, f"[ERROR] {msg}"), file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(_paint(Fore.YELLOW, f"[WARN] {msg}"))


def print_info(msg: str) -> None:
    """Print info message."""
    print(_paint(Fore.CYAN, msg))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sql-masker",
        description="Alias-aware data masking and sensitive data scanning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show how result columns trace back to base columns
  %(prog)s aliases "SELECT s.fn AS fn1 FROM (SELECT col AS fn FROM t) s"

  # Run a query with masking rules applied
  %(prog)s mask --db app.sqlite --sql "SELECT phone AS p FROM users" --rules rules.json

  # Scan a table for e-mail addresses
  %(prog)s scan --db app.sqlite --table users --regex "[\\w.]+@[\\w.]+"
        """,
    )
    parser.add_argument(
        "--config", "-c", metavar="FILE", help="Configuration file (JSON format)"
    )
    parser.add_argument("--dialect", help="SQL dialect (sqlglot name)")
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    parser.add_argument(
        "--no-warnings", action="store_true", help="Suppress warnings"
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    aliases = commands.add_parser("aliases", help="Print rename graph and closure")
    aliases.add_argument("sql", help="SELECT statement to analyze")

    mask = commands.add_parser("mask", help="Run a query with masking rules")
    mask.add_argument("--db", required=True, help="SQLite database file")
    mask_source = mask.add_mutually_exclusive_group(required=True)
    mask_source.add_argument("--sql", help="Query to run")
    mask_source.add_argument("--sql-file", help="File holding the query or script")
    mask.add_argument(
        "--rules", "-r", required=True, help="Rules file (JSON: column -> rule)"
    )
    mask.add_argument(
        "--no-alias-resolution",
        action="store_true",
        help="Match rule columns by exact name only",
    )

    scan = commands.add_parser("scan", help="Scan a table for sensitive data")
    scan.add_argument("--db", required=True, help="SQLite database file")
    scan.add_argument("--table", "-t", required=True, help="Table or view to scan")
    scan.add_argument("--schema", help="Schema of the table or view")
    scan.add_argument(
        "--regex",
        "-e",
        action="append",
        required=True,
        help="Pattern to look for (repeatable, earlier patterns win)",
    )
    scan.add_argument("--sample-limit", type=int, help="Sample values kept per column")
    scan.add_argument("--row-limit", type=int, help="Rows sampled from the table")

    return parser


def read_json(path: str, kind: str) -> Any:
    """Read a JSON file, reporting a missing or malformed file as MaskingError."""
    file_path = Path(path)
    if not file_path.exists():
        raise MaskingError(f"{kind} file not found: {path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MaskingError(f"{kind} file is not valid JSON: {e}") from e


def load_config(args: argparse.Namespace) -> ScanConfig:
    """Build the ScanConfig from ``--config`` and command line overrides."""
    data: dict[str, Any] = {}
    if args.config:
        data = read_json(args.config, "Config")

    if args.dialect:
        data["dialect"] = args.dialect
    if getattr(args, "no_alias_resolution", False):
        data["alias_resolution_enabled"] = False
    if getattr(args, "sample_limit", None) is not None:
        data["sample_limit"] = args.sample_limit
    if getattr(args, "row_limit", None) is not None:
        data["scan_row_limit"] = args.row_limit

    try:
        return ScanConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise MaskingError(f"Invalid configuration: {e}") from e


def open_service(db_path: str, config: ScanConfig) -> SecureQueryService:
    path = Path(db_path)
    if not path.exists():
        raise MaskingError(f"Database file not found: {db_path}")
    connection = sqlite3.connect(str(path))
    driver = DBAPIDriver(
        connection, dialect=config.dialect, autocommit=True, owns_connection=True
    )
    return SecureQueryService(driver, config)


def print_rows(rows: list[dict[str, Any]], output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(rows, indent=2, default=str, ensure_ascii=False))
        return
    if not rows:
        print_warning("No rows returned")
        return
    print(tabulate(rows, headers="keys", tablefmt="grid"))


def handle_aliases(args: argparse.Namespace, config: ScanConfig) -> None:
    """Handle the aliases command."""
    graph = AliasGraphBuilder(config).build(args.sql)
    closure = ClosureResolver().close_over(graph)

    if args.format == "json":
        payload = {
            "edges": graph.to_dict(),
            "closure": {alias: sorted(names) for alias, names in closure.items()},
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not closure:
        print_warning("No renaming projection items found")
        return

    print_success(f"Found {len(graph)} rename edge(s)")
    table = [
        [alias, ", ".join(graph.to_dict().get(alias, [])), ", ".join(sorted(names))]
        for alias, names in closure.items()
    ]
    print(tabulate(table, headers=["Alias", "Renames", "Reaches"], tablefmt="grid"))


def handle_mask(args: argparse.Namespace, config: ScanConfig) -> SecureQueryService:
    """Handle the mask command."""
    rules = load_rules(read_json(args.rules, "Rules"))

    service = open_service(args.db, config)
    try:
        if args.sql_file:
            script = Path(args.sql_file).read_text(encoding="utf-8")
            results = service.execute_script_with_mask(script, rules)
            for i, rows in enumerate(results, 1):
                print_info(f"Statement {i}:")
                print_rows(rows, args.format)
        else:
            print_rows(service.execute_query_with_mask(args.sql, rules), args.format)
    finally:
        service.driver.close()
    return service


def handle_scan(args: argparse.Namespace, config: ScanConfig) -> SecureQueryService:
    """Handle the scan command."""
    service = open_service(args.db, config)
    try:
        columns = service.scan_table_data(args.table, args.regex, schema=args.schema)
    finally:
        service.driver.close()

    if args.format == "json":
        print(
            json.dumps(
                [column.to_dict() for column in columns],
                indent=2,
                default=str,
                ensure_ascii=False,
            )
        )
        return service

    if not columns:
        print_success(f"No sensitive data found in {args.table}")
        return service

    print_success(f"Found {len(columns)} sensitive column(s) in {args.table}")
    table = [
        [column.column, column.regex, ", ".join(str(value) for value in column.match_data)]
        for column in columns
    ]
    print(tabulate(table, headers=["Column", "Pattern", "Samples"], tablefmt="grid"))
    return service


def show_warnings(service: Optional[SecureQueryService]) -> None:
    if service is None:
        return
    for warning in service.get_warnings():
        context = f" ({warning.context})" if warning.context else ""
        print_warning(f"{warning.message}{context}")


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        sql-masker aliases "SELECT ..."
        sql-masker mask --db app.sqlite --sql "SELECT ..." --rules rules.json
        sql-masker scan --db app.sqlite --table users --regex PATTERN
    """
    global USE_COLOR

    args = build_parser().parse_args(argv)
    if args.no_color:
        USE_COLOR = False
    else:
        init(autoreset=True)

    try:
        config = load_config(args)
        service = None
        if args.command == "aliases":
            handle_aliases(args, config)
        elif args.command == "mask":
            service = handle_mask(args, config)
        elif args.command == "scan":
            service = handle_scan(args, config)

        if not args.no_warnings:
            show_warnings(service)

    except MaskingError as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
