from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


@dataclass
class BlockDecision:
    name: str
    kept: bool
    start_line: int                 # 0-based index of the server.tool( line
    end_line: int                   # 0-based index of the closing ")" line
    line_count: int

    @property
    def decision(self) -> str:
        return "keep" if self.kept else "filter"

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["decision"] = self.decision
        return d


@dataclass
class FilterResult:
    lines: List[str]
    decisions: List[BlockDecision] = field(default_factory=list)
    unterminated: Optional[str] = None  # name of a block still open at EOF (dropped)

    @property
    def kept(self) -> int:
        return sum(1 for d in self.decisions if d.kept)

    @property
    def filtered(self) -> int:
        return sum(1 for d in self.decisions if not d.kept)

    @property
    def total(self) -> int:
        return len(self.decisions)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kept": self.kept,
            "filtered": self.filtered,
            "total": self.total,
            "unterminated": self.unterminated,
        }
