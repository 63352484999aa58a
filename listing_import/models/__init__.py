"""Domain models for the pasted-listing importer.

Staging rows (the pipeline output), error log records and run results.
"""

from .error_record import ErrorRecord
from .processing_result import FileStat, ProcessingResult
from .staging_row import AbtStagingRow, RowStatus, VaxStagingRow, derive_status

__all__ = [
    # Staging rows
    "AbtStagingRow",
    "VaxStagingRow",
    "RowStatus",
    "derive_status",
    # Run bookkeeping
    "ErrorRecord",
    "FileStat",
    "ProcessingResult",
]
