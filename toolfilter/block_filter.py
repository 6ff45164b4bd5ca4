from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Sequence

from .schema import BlockDecision, FilterResult


# Not anchored: a commented-out "// server.tool(" line still matches,
# so a second run over filtered output re-scans those blocks.
TOOL_START = re.compile(r"server\.tool\(\s*[\"']([^\"']+)[\"']")
TOOL_OPEN_ONLY = re.compile(r"server\.tool\(\s*$")
LEADING_NAME = re.compile(r"^\s*[\"']([^\"']+)[\"']")

COMMENT_PREFIX = "  // "
FILTERED_MARKER = "  // [FILTERED] {name}"

OUTSIDE_BLOCK = "outside"
INSIDE_BLOCK = "inside"

StartMatcher = Callable[[Sequence[str], int], Optional[str]]
EndMatcher = Callable[[Sequence[str], int], bool]


class UnterminatedBlockError(ValueError):
    def __init__(self, name: str, start_line: int):
        self.name = name
        self.start_line = start_line
        super().__init__(f"server.tool block '{name}' opened at line {start_line + 1} never closes")


def match_tool_start(lines: Sequence[str], i: int) -> Optional[str]:
    """
    Return the tool name if lines[i] opens a server.tool( block.

    The name is the first quoted string after the call. When the call sits
    alone at the end of its line, the name is read from the next line.
    """
    line = lines[i]
    m = TOOL_START.search(line)
    if m:
        return m.group(1)
    if TOOL_OPEN_ONLY.search(line) and i + 1 < len(lines):
        m = LEADING_NAME.match(lines[i + 1])
        if m:
            return m.group(1)
    return None


def is_tool_end(lines: Sequence[str], i: int) -> bool:
    # Lone ")" followed by a blank line. No paren balancing: a ")" + blank
    # line inside the call's own arguments closes the block early.
    return lines[i].strip() == ")" and i + 1 < len(lines) and lines[i + 1].strip() == ""


def comment_block(name: str, block: Iterable[str]) -> List[str]:
    out = [FILTERED_MARKER.format(name=name)]
    for ln in block:
        out.append("" if ln.strip() == "" else COMMENT_PREFIX + ln)
    return out


def filter_lines(
    lines: Sequence[str],
    keep: Iterable[str],
    match_start: StartMatcher = match_tool_start,
    is_end: EndMatcher = is_tool_end,
    on_unterminated: str = "drop",
) -> FilterResult:
    """
    Single forward pass over lines.

    Blocks whose name is in `keep` are emitted verbatim; the rest are
    commented out behind a "[FILTERED] <name>" marker line. Lines outside
    blocks pass through in order.

    on_unterminated:
      - "drop": a block still open at EOF is left out of the output
      - "raise": raise UnterminatedBlockError
    """
    if on_unterminated not in ("drop", "raise"):
        raise ValueError(f"on_unterminated must be 'drop' or 'raise', got {on_unterminated!r}")

    keep = keep if isinstance(keep, (set, frozenset)) else frozenset(keep)

    out: List[str] = []
    decisions: List[BlockDecision] = []

    state = OUTSIDE_BLOCK
    name: Optional[str] = None
    start = -1
    block: List[str] = []

    for i, line in enumerate(lines):
        if state == OUTSIDE_BLOCK:
            found = match_start(lines, i)
            if found is None:
                out.append(line)
                continue
            state = INSIDE_BLOCK
            name = found
            start = i
            block = [line]
            continue

        block.append(line)
        if not is_end(lines, i):
            continue

        kept = name in keep
        if kept:
            out.extend(block)
        else:
            out.extend(comment_block(name, block))
        decisions.append(BlockDecision(
            name=name,
            kept=kept,
            start_line=start,
            end_line=i,
            line_count=len(block),
        ))

        state = OUTSIDE_BLOCK
        name = None
        start = -1
        block = []

    if state == INSIDE_BLOCK:
        if on_unterminated == "raise":
            raise UnterminatedBlockError(name, start)
        return FilterResult(lines=out, decisions=decisions, unterminated=name)

    return FilterResult(lines=out, decisions=decisions)


def filter_text(text: str, keep: Iterable[str], **kwargs) -> FilterResult:
    # split on "\n" only: a trailing newline comes back as a final "" line
    return filter_lines(text.split("\n"), keep, **kwargs)
