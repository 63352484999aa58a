from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One record per hard error on a staging row, or per file-level failure. File
level failures, where no data line can be named, use row=-1.

The record shape is fixed: timestamp, file, variant, row, error_type, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Input listing filename being processed
        variant: Pipeline variant ("abt" or "vaccination")
        row: Data-line number (1-based). Use -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    variant: str
    row: int  # 行番号。不明な場合 -1 許容
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, variant: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp.

        Parameters:
            file: Input listing filename being processed
            variant: Pipeline variant
            row: Data-line number (1-based), -1 when unknown
            error_type: Error classification in UPPER_SNAKE_CASE format
            message: Description of the problem

        Returns:
            New ErrorRecord instance with current UTC timestamp
        """
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            variant=variant,
            row=row,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def error_type_for(message: str) -> str:
        """Map a row error message to an UPPER_SNAKE classification.

        >>> ErrorRecord.error_type_for("Missing MRN")
        'MISSING_MRN'
        """
        words = "".join(ch if ch.isalnum() else " " for ch in message).split()
        return "_".join(w.upper() for w in words) or "ROW_ERROR"

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format."""
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
