from __future__ import annotations

import re
from collections.abc import Callable

"""Line segmentation and column splitting for pasted tabular text.

Pasted listings arrive either tab-delimited (machine export) or space-aligned
(copied from a screen). Columns are positional; nothing here reads headers.
"""

__all__ = [
    "is_likely_data_line",
    "accept_any_line",
    "segment_lines",
    "split_columns",
    "column_at",
]

_LINE_BREAK_RE = re.compile(r"\r?\n")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_PAREN_TOKEN_RE = re.compile(r"\([^)]{2,}\)")
_US_DATE_FRAGMENT_RE = re.compile(r"\d{1,2}/\d{1,2}/\d{4}")


def is_likely_data_line(line: str) -> bool:
    """Heuristic data-line test: an MRN-like ``(...)`` token plus an M/D/YYYY date."""
    return bool(_PAREN_TOKEN_RE.search(line)) and bool(_US_DATE_FRAGMENT_RE.search(line))


def accept_any_line(line: str) -> bool:
    return True


def segment_lines(raw_text: str, is_data_line: Callable[[str], bool] = is_likely_data_line) -> list[str]:
    """Split raw text into trimmed non-empty lines starting at the first data line.

    Everything before the first line accepted by ``is_data_line`` is treated as
    report title/header text and dropped. If no line qualifies, the result is
    empty.
    """
    lines = [line.strip() for line in _LINE_BREAK_RE.split(raw_text or "")]
    lines = [line for line in lines if line]
    for index, line in enumerate(lines):
        if is_data_line(line):
            return lines[index:]
    return []


def split_columns(line: str) -> list[str]:
    """Split on tabs when present, otherwise on runs of two or more spaces."""
    if "\t" in line:
        parts = line.split("\t")
    else:
        parts = _MULTI_SPACE_RE.split(line)
    return [part.strip() for part in parts]


def column_at(columns: list[str], index: int) -> str:
    # 列不足は空文字扱い
    return columns[index] if index < len(columns) else ""
