from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from ..models.staging_row import AbtStagingRow, RowStatus, VaxStagingRow

"""Caller-side review helpers over pipeline output.

The pipeline only computes duplicate keys. Comparing them with keys that are
already committed, and deciding what may be committed, happens here, after
the pipeline has returned.
"""

__all__ = [
    "EXISTING_DUPLICATE_WARNING",
    "ReviewSummary",
    "mark_possible_duplicates",
    "blocking_rows",
    "committable_rows",
    "summarize_rows",
    "is_duplicate_warning",
]

EXISTING_DUPLICATE_WARNING = "Possible duplicate of an existing record"

StagingRow = TypeVar("StagingRow", AbtStagingRow, VaxStagingRow)


@dataclass(frozen=True)
class ReviewSummary:
    total: int
    parsed: int
    needs_review: int
    error: int
    skipped: int
    duplicates: int


def is_duplicate_warning(message: str) -> bool:
    return message.startswith("Possible duplicate")


def mark_possible_duplicates(rows: Sequence[StagingRow], existing_keys: Iterable[str] = ()) -> list[StagingRow]:
    """Flag rows whose duplicate key was already committed or already seen in this batch.

    Args:
        rows: Pipeline output, in row order
        existing_keys: Keys of records already in the system of record

    Returns:
        New list of rows; flagged rows carry one extra warning
    """
    known = {key.strip().lower() for key in existing_keys if key and key.strip()}
    first_seen: dict[str, int] = {}
    marked: list[StagingRow] = []
    for row in rows:
        key = row.duplicate_key
        if key in known:
            row = row.with_warning(EXISTING_DUPLICATE_WARNING)
        elif key in first_seen:
            row = row.with_warning(f"Possible duplicate of row {first_seen[key]}")
        else:
            first_seen[key] = row.row_number
        marked.append(row)
    return marked


def blocking_rows(rows: Iterable[StagingRow]) -> list[StagingRow]:
    """Unskipped ERROR rows; while any exist the batch must not be committed."""
    return [r for r in rows if not r.skip and r.status is RowStatus.ERROR]


def committable_rows(rows: Iterable[StagingRow]) -> list[StagingRow]:
    return [r for r in rows if not r.skip and r.status is not RowStatus.ERROR]


def summarize_rows(rows: Sequence[StagingRow]) -> ReviewSummary:
    statuses = [r.status for r in rows]
    return ReviewSummary(
        total=len(rows),
        parsed=statuses.count(RowStatus.PARSED),
        needs_review=statuses.count(RowStatus.NEEDS_REVIEW),
        error=statuses.count(RowStatus.ERROR),
        skipped=sum(1 for r in rows if r.skip),
        duplicates=sum(1 for r in rows if any(is_duplicate_warning(w) for w in r.warnings)),
    )
