from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any

"""Staging row models for pasted-listing imports.

A staging row is the reviewable, not-yet-committed form of one data line from
a pasted antibiotic order listing or vaccination listing. Rows are immutable;
the only caller-side edit (the skip toggle) goes through ``with_skip``.
"""

__all__ = [
    "RowStatus",
    "derive_status",
    "AbtStagingRow",
    "VaxStagingRow",
]


class RowStatus(Enum):
    """Review status of a staging row.

    - PARSED: no errors and no warnings
    - NEEDS_REVIEW: importable, but at least one warning needs confirmation
    - ERROR: at least one hard error, commit is blocked
    """
    PARSED = "PARSED"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    ERROR = "ERROR"


def derive_status(errors: tuple[str, ...], warnings: tuple[str, ...]) -> RowStatus:
    """Errors always win over warnings, regardless of counts."""
    if errors:
        return RowStatus.ERROR
    if warnings:
        return RowStatus.NEEDS_REVIEW
    return RowStatus.PARSED


class _StagingRowMixin:
    """Behaviour shared by both row variants (status, skip toggle, export)."""

    errors: tuple[str, ...]
    warnings: tuple[str, ...]

    @property
    def status(self) -> RowStatus:
        # errors/warnings から都度算出 (保持しない)
        return derive_status(self.errors, self.warnings)

    def with_skip(self, skip: bool = True):
        """Return a copy with the "exclude from import" flag set."""
        return replace(self, skip=skip)  # type: ignore[type-var]

    def with_warning(self, message: str):
        """Return a copy with one more warning appended."""
        return replace(self, warnings=(*self.warnings, message))  # type: ignore[type-var]

    def to_dict(self) -> dict[str, Any]:
        """Flat JSON-friendly mapping, status included."""
        data = asdict(self)  # type: ignore[call-overload]
        data["errors"] = list(self.errors)
        data["warnings"] = list(self.warnings)
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class AbtStagingRow(_StagingRowMixin):
    """One antibiotic order line after normalization.

    Raw fields hold the column text exactly as sliced from the source line;
    normalized fields sit next to them so a reviewer can compare.
    """
    id: str
    row_number: int  # 1-based among recognized data lines
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    duplicate_key: str
    resident_name_raw: str
    mrn: str
    resident_last_name: str
    resident_first_name: str
    order_summary_raw: str
    order_status_raw: str
    order_status: str  # active / completed / discontinued
    start_date_raw: str
    end_date_raw: str
    start_date: str  # YYYY-MM-DD or ""
    end_date: str  # explicit or computed, YYYY-MM-DD or ""
    computed_end_date: str  # set only when end_date_was_computed
    end_date_was_computed: bool
    route_raw: str
    route_normalized: str
    indication_raw: str
    medication_name: str
    dose: str
    frequency_raw: str
    frequency_normalized: str
    duration_days: str  # "" when no explicit duration
    source_of_infection: str
    indication_category: str
    syndrome: str
    skip: bool = False


@dataclass(frozen=True)
class VaxStagingRow(_StagingRowMixin):
    """One vaccination listing line after normalization."""
    id: str
    row_number: int
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    duplicate_key: str
    resident_name_raw: str
    mrn: str
    resident_last_name: str
    resident_first_name: str
    recorded_date_raw: str
    event_date: str
    vaccine_type: str
    event_status: str  # given / documented-historical / declined
    skip: bool = False
