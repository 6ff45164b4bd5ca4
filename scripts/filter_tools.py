#!/usr/bin/env python3
"""
Filter the HubSpot MCP server down to the core CRM tools.

Keeps: companies, contacts, leads, deals, objects, associations, meetings,
notes, tasks. Comments out everything else (products, emails,
communications, calls, engagements) in src/index.ts, after saving
src/index.ts.backup.
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Make project root importable when running from scripts/
sys.path.append(str(Path(__file__).resolve().parents[1]))

from dotenv import load_dotenv

from toolfilter.allowlist import TOOLS_TO_KEEP, load_allowlist_csv
from toolfilter.files import backup_path_for, run_filter

ROOT = Path(__file__).resolve().parents[1]
SOURCE_PATH = ROOT / "src" / "index.ts"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Comment out server.tool blocks that are not on the keep-list.")
    ap.add_argument("--source", help=f"File to rewrite in place (default: {SOURCE_PATH.relative_to(ROOT)})")
    ap.add_argument("--keep-list", help="CSV of tool names to keep (default: built-in core CRM list)")
    ap.add_argument("--report", help="Optional CSV with one row per block decision")
    ap.add_argument("--strict", action="store_true", help="Fail on a block that never closes instead of dropping it")
    ap.add_argument("--quiet", action="store_true", help="No progress output")
    return ap


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    source = args.source or os.getenv("TOOL_FILTER_SOURCE", "").strip()
    source = Path(source) if source else SOURCE_PATH

    keep_list = args.keep_list or os.getenv("TOOL_FILTER_KEEP_LIST", "").strip()
    keep = load_allowlist_csv(Path(keep_list)) if keep_list else TOOLS_TO_KEEP

    run_filter(
        source,
        keep,
        backup=backup_path_for(source),
        report=Path(args.report) if args.report else None,
        strict=args.strict,
        quiet=args.quiet,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
