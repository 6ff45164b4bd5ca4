from __future__ import annotations

from pathlib import Path

import pandas as pd

from .schema import FilterResult

REPORT_COLUMNS = ["name", "decision", "start_line", "end_line", "line_count"]


def decisions_frame(result: FilterResult) -> pd.DataFrame:
    rows = [d.to_dict() for d in result.decisions]
    if not rows:
        return pd.DataFrame(columns=REPORT_COLUMNS)
    return pd.DataFrame(rows)[REPORT_COLUMNS]


def write_report(result: FilterResult, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    decisions_frame(result).to_csv(path, index=False)
    return path
