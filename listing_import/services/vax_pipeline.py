from __future__ import annotations

import logging
import re
import uuid
from typing import Literal

from ..models.staging_row import VaxStagingRow
from ..parsing.dates import normalize_date
from ..parsing.lines import accept_any_line, column_at, segment_lines, split_columns
from ..parsing.resident import parse_resident
from ..parsing.validation import validate_vax_fields, vax_duplicate_key

logger = logging.getLogger(__name__)

"""Vaccination listing pipeline: raw pasted text -> VaxStagingRow list.

Only the resident column position is fixed (first column). The event date is
the first column holding an M/D/YYYY-shaped value. Vaccine type and status are
chosen by the caller and applied to every row of the call.
"""

__all__ = [
    "VAX_STATUS_SELECTIONS",
    "StatusSelection",
    "map_vax_status_selection",
    "parse_raw_vax_list",
]

StatusSelection = Literal["Vaccinated", "Historical", "Refused"]

VAX_STATUS_SELECTIONS: dict[str, str] = {
    "Vaccinated": "given",
    "Historical": "documented-historical",
    "Refused": "declined",
}

_DATE_CELL_RE = re.compile(r"\d{1,2}/\d{1,2}/\d{4}")


def map_vax_status_selection(selection: str) -> str:
    """Map the caller's status selection to the canonical event status.

    Raises:
        ValueError: If the selection is not one of Vaccinated/Historical/Refused
    """
    try:
        return VAX_STATUS_SELECTIONS[selection]
    except KeyError:
        raise ValueError(
            f"unknown status selection {selection!r}; expected one of {sorted(VAX_STATUS_SELECTIONS)}"
        ) from None


def _find_date_cell(columns: list[str]) -> str:
    for col in columns:
        if _DATE_CELL_RE.search(col):
            return col
    return ""


def parse_raw_vax_list(raw_text: str, vaccine_type: str, status_selection: StatusSelection) -> list[VaxStagingRow]:
    """Parse a pasted vaccination listing.

    Args:
        raw_text: Pasted report body
        vaccine_type: Free-text vaccine label applied to every row
        status_selection: Vaccinated / Historical / Refused

    Returns:
        One VaxStagingRow per non-empty line, in input order
    """
    event_status = map_vax_status_selection(status_selection)
    vaccine_type = (vaccine_type or "").strip()
    batch_token = uuid.uuid4().hex[:12]
    rows: list[VaxStagingRow] = []
    for index, line in enumerate(segment_lines(raw_text, accept_any_line)):
        cols = split_columns(line)
        resident_name_raw = column_at(cols, 0)
        date_raw = _find_date_cell(cols)
        event_date = normalize_date(date_raw)
        # vaccination 側は middle initial を落とさない (ABT と非対称)
        resident = parse_resident(resident_name_raw)

        errors, warnings = validate_vax_fields(
            mrn=resident.mrn, date_raw=date_raw, event_date=event_date, vaccine_type=vaccine_type
        )
        rows.append(
            VaxStagingRow(
                id=f"raw-vax-{index}-{batch_token}",
                row_number=index + 1,
                errors=errors,
                warnings=warnings,
                duplicate_key=vax_duplicate_key(
                    mrn=resident.mrn, vaccine_type=vaccine_type, event_date=event_date, event_status=event_status
                ),
                resident_name_raw=resident_name_raw,
                mrn=resident.mrn,
                resident_last_name=resident.last_name,
                resident_first_name=resident.first_name,
                recorded_date_raw=date_raw,
                event_date=event_date,
                vaccine_type=vaccine_type,
                event_status=event_status,
            )
        )
    logger.debug(f"vaccination listing: {len(rows)} data lines")
    return rows
