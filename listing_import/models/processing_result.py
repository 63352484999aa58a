from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

"""Processing result models for the listing importer.

FileStat is collected per input listing; ProcessingResult aggregates a whole
run and feeds the SUMMARY line and the CLI exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str  # ファイル名
    variant: str  # abt / vaccination
    status: str  # success/failed
    total_rows: int  # 検出データ行数
    parsed_rows: int = 0
    needs_review_rows: int = 0
    error_rows: int = 0
    duplicate_rows: int = 0
    elapsed_seconds: float = 0.0
    output_path: str | None = None  # staging export written for the reviewer
    error: str | None = None  # file-level failure reason


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one importer run."""
    success_files: int
    failed_files: int
    total_rows: int
    parsed_rows: int
    needs_review_rows: int
    error_rows: int
    duplicate_rows: int
    blocking_rows: int  # unskipped ERROR rows, these block the commit
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
