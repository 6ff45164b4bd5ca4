from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .block_filter import filter_text
from .report import write_report
from .schema import FilterResult

BACKUP_SUFFIX = ".backup"


def backup_path_for(source: Path) -> Path:
    source = Path(source)
    return source.with_name(source.name + BACKUP_SUFFIX)


def _write_durable(path: Path, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())


@contextmanager
def backed_up(source: Path, backup: Path, quiet: bool = False) -> Iterator[str]:
    """
    Read `source`, persist an exact copy to `backup`, then yield the text.

    The backup is flushed and fsynced before the caller gets the text, so
    the destructive write always happens after a recoverable copy exists.
    There is no write-then-rename: an interrupted overwrite can leave the
    source truncated and the backup is the recovery path.
    """
    source = Path(source)
    backup = Path(backup)

    if not quiet:
        print("Reading source file...")
    raw = source.read_bytes()

    if not quiet:
        print("Creating backup...")
    _write_durable(backup, raw)

    # invalid UTF-8 raises here, after the backup and before any overwrite
    yield raw.decode("utf-8")


def run_filter(
    source: Path,
    keep: Iterable[str],
    backup: Optional[Path] = None,
    report: Optional[Path] = None,
    strict: bool = False,
    quiet: bool = False,
) -> FilterResult:
    source = Path(source)
    backup = Path(backup) if backup else backup_path_for(source)

    with backed_up(source, backup, quiet=quiet) as content:
        if not quiet:
            print("Filtering tools...")
        result = filter_text(content, keep, on_unterminated="raise" if strict else "drop")

        if not quiet:
            for d in result.decisions:
                if d.kept:
                    print(f"✓ Keeping: {d.name}")
                else:
                    print(f"✗ Filtering: {d.name}")
            if result.unterminated:
                print(f"⚠️ Dropped unterminated block: {result.unterminated}")
            print("\nWriting filtered file...")
        # bytes, not text mode: no newline translation, "\r" stays as read
        source.write_bytes(result.text.encode("utf-8"))

    if report:
        out = write_report(result, Path(report))
        if not quiet:
            print(f"Report saved to: {out}")

    if not quiet:
        print("\n=== SUMMARY ===")
        print(f"Tools kept: {result.kept}")
        print(f"Tools filtered: {result.filtered}")
        print(f"Total tools: {result.total}")
        print(f"Backup saved to: {backup}")
        print("Done!")

    return result
