#!/usr/bin/env python3
"""
Khitan Board CLI — fetch the registrant sheet, print it, export reports, or serve the API.

USAGE:
  python -m khitan_board.cli fetch                           # One sync, print the list
  python -m khitan_board.cli fetch --csv export.csv          # Parse a local CSV instead

  python -m khitan_board.cli report                          # PDF into the reports folder
  python -m khitan_board.cli report --format xlsx --output ./out

  python -m khitan_board.cli watch                           # Poll and print every status change
  python -m khitan_board.cli watch --interval 10

  python -m khitan_board.cli serve                           # Start API server
  python -m khitan_board.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path

from khitan_board.config import MAX_QUOTA, REPORTS_FOLDER, REFRESH_INTERVAL_SECONDS
from khitan_board.data.errors import SheetSourceError
from khitan_board.data.loader import fetch_sheet_csv, parse_registrants
from khitan_board.data.schemas import FetchStatus, Loading, Success, quota_remaining
from khitan_board.data.store import RefreshController
from khitan_board.reports.registrant_report import registrants_frame, save_report


def _load(args):
    """One fetch cycle outside the controller: local file or the live sheet."""
    if getattr(args, "csv", None):
        text = Path(args.csv).read_text(encoding="utf-8-sig")
    else:
        text = fetch_sheet_csv()
    return parse_registrants(text)


def cmd_fetch(args):
    """Print the current registrant list."""
    try:
        registrants = _load(args)
    except SheetSourceError as exc:
        print(f"  Gagal memuat data: {exc}")
        sys.exit(1)

    total = len(registrants)
    print("\n" + "=" * 70)
    print(f"  DAFTAR PENDAFTAR — {total} peserta, sisa kuota {quota_remaining(total, MAX_QUOTA)}")
    print("=" * 70)
    if total == 0:
        print("\n  Belum ada pendaftar\n")
        return
    print(registrants_frame(registrants).to_string(index=False))
    print()


def cmd_report(args):
    """Write the printable report for the current list."""
    try:
        registrants = _load(args)
    except SheetSourceError as exc:
        print(f"  Gagal memuat data: {exc}")
        sys.exit(1)

    for fmt in args.format:
        path = save_report(registrants, Path(args.output), fmt=fmt, quota=MAX_QUOTA)
        print(f"  Saved: {path} ({len(registrants)} registrants)")


def _print_status(status: FetchStatus) -> None:
    if isinstance(status, Loading):
        print("  Memuat...")
    elif isinstance(status, Success):
        total = len(status.registrants)
        print(f"  [{status.timestamp:%H:%M:%S}] {total} peserta, sisa kuota {quota_remaining(total, MAX_QUOTA)}")
    else:
        print(f"  [{status.timestamp:%H:%M:%S}] Gagal memuat data: {status.message}")


async def _watch(interval: float) -> None:
    async with RefreshController(interval=interval) as controller:
        controller.subscribe(_print_status)
        await asyncio.Event().wait()


def cmd_watch(args):
    """Run the refresh controller in the foreground until Ctrl-C."""
    print(f"\nWatching sheet every {args.interval:g}s (Ctrl-C to stop)...")
    try:
        asyncio.run(_watch(args.interval))
    except KeyboardInterrupt:
        print("\n  Stopped")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Khitan Board API on port {args.port}...")
    uvicorn.run("khitan_board.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Khitan Board — registrant sheet sync and printable reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # fetch subcommand
    fetch_parser = subparsers.add_parser("fetch", help="Fetch and print the registrant list")
    fetch_parser.add_argument("--csv", help="Parse a local CSV export instead of the live sheet")
    fetch_parser.set_defaults(func=cmd_fetch)

    # report subcommand
    report_parser = subparsers.add_parser("report", help="Export the printable report")
    report_parser.add_argument("--csv", help="Parse a local CSV export instead of the live sheet")
    report_parser.add_argument("--format", nargs="+", choices=["pdf", "xlsx"], default=["pdf"],
                               help="Output format(s) (default pdf)")
    report_parser.add_argument("--output", default=str(REPORTS_FOLDER), help="Output directory")
    report_parser.set_defaults(func=cmd_report)

    # watch subcommand
    watch_parser = subparsers.add_parser("watch", help="Poll the sheet and print status changes")
    watch_parser.add_argument("--interval", type=float, default=REFRESH_INTERVAL_SECONDS,
                              help=f"Seconds between fetches (default {REFRESH_INTERVAL_SECONDS:g})")
    watch_parser.set_defaults(func=cmd_watch)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
