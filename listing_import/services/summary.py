from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for the listing importer."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={ok}/{total} failed={failed} rows={rows} parsed={parsed}
    needs_review={review} error={error} duplicates={dups} blocking={blocking}
    elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_rows=3, parsed_rows=2,
        ...     needs_review_rows=1, error_rows=0, duplicate_rows=0, blocking_rows=0,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)  # doctest: +ELLIPSIS
        'SUMMARY files=1/1 failed=0 rows=3 parsed=2 needs_review=1 error=0 ...'
    """
    return (
        f"SUMMARY files={result.success_files}/{result.total_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"parsed={result.parsed_rows} "
        f"needs_review={result.needs_review_rows} "
        f"error={result.error_rows} "
        f"duplicates={result.duplicate_rows} "
        f"blocking={result.blocking_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
