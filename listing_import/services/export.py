from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.staging_row import AbtStagingRow, VaxStagingRow

"""Reviewer export of staging rows (csv / xlsx / json) via pandas.

Tabular formats cannot hold lists, so errors and warnings are joined with
"; ". JSON keeps them as arrays.
"""

__all__ = [
    "EXPORT_FORMATS",
    "ExportError",
    "rows_to_frame",
    "export_rows",
]

EXPORT_FORMATS = ("csv", "xlsx", "json")
LIST_JOINER = "; "

# 先頭に出すレビュー用列
_LEADING_COLUMNS = ["row_number", "status", "skip", "errors", "warnings", "duplicate_key"]


class ExportError(Exception):
    """Raised when staging rows cannot be written."""


def rows_to_frame(rows: Sequence[AbtStagingRow | VaxStagingRow], *, join_lists: bool = True) -> pd.DataFrame:
    """Build a DataFrame with review columns first, then the row fields in declaration order."""
    records = [r.to_dict() for r in rows]
    if not records:
        return pd.DataFrame(columns=_LEADING_COLUMNS)
    df = pd.DataFrame.from_records(records)
    ordered = _LEADING_COLUMNS + [c for c in df.columns if c not in _LEADING_COLUMNS]
    df = df[ordered]
    if join_lists:
        for col in ("errors", "warnings"):
            df[col] = df[col].map(LIST_JOINER.join)
    return df


def export_rows(rows: Sequence[AbtStagingRow | VaxStagingRow], path: Path, fmt: str = "csv") -> Path:
    """Write rows to ``path`` in the requested format.

    Raises:
        ExportError: Unknown format or the file cannot be written
    """
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"unsupported export format: {fmt}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "csv":
            rows_to_frame(rows).to_csv(path, index=False, encoding="utf-8")
        elif fmt == "xlsx":
            rows_to_frame(rows).to_excel(path, index=False, sheet_name="staging", engine="openpyxl")
        else:
            rows_to_frame(rows, join_lists=False).to_json(path, orient="records", indent=2, force_ascii=False)
    except OSError as e:
        raise ExportError(f"failed to write {path}: {e}") from e
    return path
