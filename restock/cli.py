#!/usr/bin/env python3
"""
Restock CLI — entry point for the API server, schema setup, imports and exports.

USAGE:
  python -m restock.cli serve                                   # Start API server
  python -m restock.cli serve --port 8000 --reload

  python -m restock.cli init-db                                 # Create tables, add comments column

  python -m restock.cli import-csv "inventory 2025-01.csv"      # Load a flat export into inventory_data

  python -m restock.cli export --start 2025-01-01 --end 01/31/2025
  python -m restock.cli export --start 2025-01-01 --end 2025-01-31 --role EAST
  python -m restock.cli export --history --start 2025-01-01 --end 2025-01-31

  python -m restock.cli markets                                 # List markets in inventory
"""
from __future__ import annotations

import argparse
import os
import sys

from restock import config
from restock.data.dates import to_inclusive_window
from restock.data.ledger import HistoryLedger
from restock.data.schema import ensure_comments_column, init_schema, make_engine
from restock.data.snapshots import SnapshotQueryService, load_delimited
from restock.data.store import InventoryStore
from restock.errors import RestockError
from restock.excel.exports import export_history, export_snapshot
from restock.log import setup_logging


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  RESTOCK - {title}")
    print("=" * 70)


def cmd_init_db(args):
    """Create both tables and run the comments-column migration."""
    engine = make_engine(args.database_url)
    init_schema(engine)
    added = ensure_comments_column(engine)
    print(f"  Schema ready ({'comments column added' if added else 'no migration needed'})")


def cmd_import_csv(args):
    """Project a flat CSV export and insert it into inventory_data."""
    _banner("FLAT FILE IMPORT")
    engine = make_engine(args.database_url)
    init_schema(engine)
    result = load_delimited(args.path, role=args.role)
    count = InventoryStore(engine).insert_records(result.rows)
    print(f"  {count:,} rows imported from {args.path}")


def cmd_export(args):
    """Export a snapshot (or the approval history) for a date range to .xlsx."""
    _banner("HISTORY EXPORT" if args.history else "SNAPSHOT EXPORT")
    engine = make_engine(args.database_url)
    out_dir = args.output or config.EXPORTS_FOLDER

    if args.history:
        window = to_inclusive_window(args.start, args.end)
        events = HistoryLedger(engine).query(window, args.role)
        path = export_history(events, out_dir)
        print(f"  {len(events):,} approvals ({window.label})")
    else:
        service = SnapshotQueryService(InventoryStore(engine))
        result = service.fetch_range(args.start, args.end, role=args.role)
        path = export_snapshot(result, out_dir)
        print(f"  {len(result):,} rows ({args.start} to {args.end})")
    print(f"  Saved to: {path}\n")


def cmd_markets(args):
    engine = make_engine(args.database_url)
    markets = SnapshotQueryService(InventoryStore(engine)).list_distinct_markets()
    print(f"\nMARKETS ({len(markets)}):\n")
    for m in markets:
        print(f"  {m}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Restock API on port {args.port}...")
    uvicorn.run("restock.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Restock: inventory replenishment snapshots and approval history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--database-url", default=config.DATABASE_URL, help="SQLAlchemy database URL")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    init_parser = subparsers.add_parser("init-db", help="Create tables and run migrations")
    init_parser.set_defaults(func=cmd_init_db)

    import_parser = subparsers.add_parser("import-csv", help="Import a flat CSV export")
    import_parser.add_argument("path", help="CSV file with a header row")
    import_parser.add_argument("--role", help="Only import rows for this market")
    import_parser.set_defaults(func=cmd_import_csv)

    export_parser = subparsers.add_parser("export", help="Export a date range to .xlsx")
    export_parser.add_argument("--start", required=True, help="Start date (YYYY-MM-DD, MM/DD/YYYY or DD-MM-YYYY)")
    export_parser.add_argument("--end", required=True, help="End date, inclusive")
    export_parser.add_argument("--role", help="admin or a market id")
    export_parser.add_argument("--history", action="store_true", help="Export approval history instead")
    export_parser.add_argument("--output", help="Output directory (default: exports folder)")
    export_parser.set_defaults(func=cmd_export)

    markets_parser = subparsers.add_parser("markets", help="List markets")
    markets_parser.set_defaults(func=cmd_markets)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    setup_logging(config.LOG_LEVEL, config.LOGS_FOLDER)
    try:
        args.func(args)
    except RestockError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
