from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ConfigError, IngestConfig, SourceConfig, load_existing_keys
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.processing_result import FileStat, ProcessingResult
from ..models.staging_row import AbtStagingRow, VaxStagingRow
from .abt_pipeline import parse_raw_abt_order_listing
from .export import ExportError, export_rows
from .progress import ProgressTracker
from .review import blocking_rows, mark_possible_duplicates, summarize_rows
from .vax_pipeline import parse_raw_vax_list

logger = logging.getLogger(__name__)

"""Service orchestration for the listing importer.

Runs every configured listing file through its pipeline, flags possible
duplicates against committed keys, writes one staging export per input for
the reviewer, and aggregates the run into a ProcessingResult.

Nothing is committed here: the staging exports are the hand-off to review.
"""

__all__ = [
    "ProcessingError",
    "parse_listing",
    "scan_listing_files",
    "process_all",
]


class ProcessingError(Exception):
    """Fatal error that stops the whole run."""


def parse_listing(raw_text: str, source: SourceConfig) -> list[AbtStagingRow] | list[VaxStagingRow]:
    """Dispatch raw text to the pipeline of the source's variant."""
    if source.variant == "abt":
        return parse_raw_abt_order_listing(raw_text)
    if source.variant == "vaccination":
        return parse_raw_vax_list(raw_text, source.vaccine_type or "", source.status_selection or "")  # type: ignore[arg-type]
    raise ProcessingError(f"unknown variant: {source.variant}")


def scan_listing_files(directory: Path, sources: tuple[SourceConfig, ...]) -> list[tuple[Path, SourceConfig]]:
    """Match files in ``directory`` (non-recursive) against the source patterns.

    A file matched by several patterns belongs to the first source listing it.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    matched: list[tuple[Path, SourceConfig]] = []
    claimed: set[Path] = set()
    try:
        for source in sources:
            for path in sorted(directory.glob(source.pattern)):
                if path.is_file() and path not in claimed:
                    claimed.add(path)
                    matched.append((path, source))
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e
    return matched


def _output_path(config: IngestConfig, file_path: Path) -> Path:
    return Path(config.output_directory) / f"{file_path.stem}.staging.{config.export_format}"


def _process_single_file(
    file_path: Path,
    source: SourceConfig,
    config: IngestConfig,
    existing_keys: set[str],
    error_log: ErrorLogBuffer,
) -> tuple[FileStat, int]:
    """Parse, review-mark and export one listing.

    Returns:
        (FileStat, blocking row count). Read and export failures are recorded
        as a failed FileStat plus a file-level error record; they do not stop
        the run.
    """
    start = datetime.now(UTC)
    try:
        raw_text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        error_log.append(
            ErrorRecord.create(file=file_path.name, variant=source.variant, row=-1, error_type="READ_ERROR", message=str(e))
        )
        logger.error(f"read failed: {file_path.name}: {e}")
        return (
            FileStat(
                file_name=file_path.name,
                variant=source.variant,
                status="failed",
                total_rows=0,
                elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
                error=str(e),
            ),
            0,
        )

    rows = mark_possible_duplicates(parse_listing(raw_text, source), existing_keys)
    if not rows:
        logger.warning(f"no data lines recognized in {file_path.name}")
    error_log.append_row_errors(file_path.name, source.variant, rows)
    review = summarize_rows(rows)
    blocking = len(blocking_rows(rows))

    output_path: str | None = None
    error: str | None = None
    status = "success"
    try:
        output_path = str(export_rows(rows, _output_path(config, file_path), config.export_format))
    except ExportError as e:
        status = "failed"
        error = str(e)
        error_log.append(
            ErrorRecord.create(file=file_path.name, variant=source.variant, row=-1, error_type="EXPORT_ERROR", message=str(e))
        )
        logger.error(f"export failed: {file_path.name}: {e}")

    logger.info(
        f"{file_path.name} variant={source.variant} rows={review.total} parsed={review.parsed} "
        f"needs_review={review.needs_review} error={review.error}"
    )
    return (
        FileStat(
            file_name=file_path.name,
            variant=source.variant,
            status=status,
            total_rows=review.total,
            parsed_rows=review.parsed,
            needs_review_rows=review.needs_review,
            error_rows=review.error,
            duplicate_rows=review.duplicates,
            elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
            output_path=output_path,
            error=error,
        ),
        blocking,
    )


def process_all(config: IngestConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Process all listing files of the configured source directory.

    Args:
        config: Loaded importer configuration
        error_log: Buffer for JSON Lines error records (new buffer when None)

    Returns:
        ProcessingResult with aggregated row counts and per-file stats

    Raises:
        ProcessingError: Missing source directory or unreadable existing-keys file
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    existing_keys: set[str] = set()
    if config.existing_keys_file:
        try:
            existing_keys = load_existing_keys(Path(config.existing_keys_file))
        except ConfigError as e:
            raise ProcessingError(str(e)) from e
        logger.debug(f"loaded {len(existing_keys)} existing duplicate keys")

    files = scan_listing_files(Path(config.source_directory), config.sources)

    file_stats: list[FileStat] = []
    total_blocking = 0
    with ProgressTracker(len(files)) as progress:
        for file_path, source in files:
            progress.start_file(file_path)
            stat, blocking = _process_single_file(file_path, source, config, existing_keys, error_log)
            file_stats.append(stat)
            total_blocking += blocking
            progress.set_postfix(rows=sum(s.total_rows for s in file_stats), blocking=total_blocking)
            progress.finish_file()

    try:
        log_path = error_log.flush()
    except OSError as e:
        # Don't fail the entire run if the error log cannot be written
        logger.warning(f"error log flush failed: {e}")
    else:
        if log_path is not None:
            logger.info(f"row errors written to {log_path}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=sum(1 for s in file_stats if s.status == "success"),
        failed_files=sum(1 for s in file_stats if s.status == "failed"),
        total_rows=sum(s.total_rows for s in file_stats),
        parsed_rows=sum(s.parsed_rows for s in file_stats),
        needs_review_rows=sum(s.needs_review_rows for s in file_stats),
        error_rows=sum(s.error_rows for s in file_stats),
        duplicate_rows=sum(s.duplicate_rows for s in file_stats),
        blocking_rows=total_blocking,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
