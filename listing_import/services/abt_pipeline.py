from __future__ import annotations

import logging
import uuid

from ..models.staging_row import AbtStagingRow
from ..parsing.dates import normalize_date
from ..parsing.indication import classify_indication
from ..parsing.lines import column_at, is_likely_data_line, segment_lines, split_columns
from ..parsing.normalizers import (
    derive_end_date,
    extract_medication_and_dose,
    normalize_frequency,
    normalize_order_status,
    normalize_route,
    parse_duration_days,
)
from ..parsing.resident import parse_resident
from ..parsing.validation import abt_duplicate_key, validate_abt_fields

logger = logging.getLogger(__name__)

"""Antibiotic order listing pipeline: raw pasted text -> AbtStagingRow list.

Expected column order of the source report:
    0 resident name "LAST, FIRST M (MRN)"
    1 order summary (medication, dose, directions)
    2 order status
    3 start date
    4 end date
    5 route
    6 indication
"""

__all__ = [
    "ABT_COLUMNS",
    "parse_raw_abt_order_listing",
    "assemble_abt_row",
]

ABT_COLUMNS = (
    "resident_name",
    "order_summary",
    "order_status",
    "start_date",
    "end_date",
    "route",
    "indication",
)


def assemble_abt_row(line: str, index: int, batch_token: str) -> AbtStagingRow:
    """Build one staging row from one data line.

    Args:
        line: Trimmed data line
        index: 0-based position among data lines
        batch_token: Per-invocation token used in row ids

    Returns:
        Fully normalized, validated AbtStagingRow
    """
    cols = split_columns(line)
    resident_name_raw = column_at(cols, 0)
    order_summary_raw = column_at(cols, 1)
    order_status_raw = column_at(cols, 2)
    start_date_raw = column_at(cols, 3)
    end_date_raw = column_at(cols, 4)
    route_raw = column_at(cols, 5)
    indication_raw = column_at(cols, 6)

    row_number = index + 1
    resident = parse_resident(resident_name_raw, strip_middle_initial=True)
    start_date = normalize_date(start_date_raw)
    parsed_end_date = normalize_date(end_date_raw)
    med = extract_medication_and_dose(order_summary_raw)
    duration_days = parse_duration_days(order_summary_raw)
    frequency = normalize_frequency(order_summary_raw)
    route_normalized = normalize_route(route_raw)
    end_date, end_date_was_computed = derive_end_date(start_date, parsed_end_date, duration_days)
    indication = classify_indication(indication_raw, order_summary_raw)

    errors, warnings = validate_abt_fields(
        mrn=resident.mrn,
        start_date_raw=start_date_raw,
        start_date=start_date,
        end_date_raw=end_date_raw,
        end_date=parsed_end_date,
        order_summary_raw=order_summary_raw,
        route_normalized=route_normalized,
        frequency_normalized=frequency.normalized,
        indication_classified=indication.classified,
    )
    duplicate_key = abt_duplicate_key(
        mrn=resident.mrn,
        medication_name=med.medication_name,
        order_summary_raw=order_summary_raw,
        row_number=row_number,
        start_date=start_date,
        route_normalized=route_normalized,
    )

    return AbtStagingRow(
        id=f"raw-abt-{index}-{batch_token}",
        row_number=row_number,
        errors=errors,
        warnings=warnings,
        duplicate_key=duplicate_key,
        resident_name_raw=resident_name_raw,
        mrn=resident.mrn,
        resident_last_name=resident.last_name,
        resident_first_name=resident.first_name,
        order_summary_raw=order_summary_raw,
        order_status_raw=order_status_raw,
        order_status=normalize_order_status(order_status_raw),
        start_date_raw=start_date_raw,
        end_date_raw=end_date_raw,
        start_date=start_date,
        end_date=end_date,
        computed_end_date=end_date if end_date_was_computed else "",
        end_date_was_computed=end_date_was_computed,
        route_raw=route_raw,
        route_normalized=route_normalized,
        indication_raw=indication_raw,
        medication_name=med.medication_name,
        dose=med.dose,
        frequency_raw=frequency.raw,
        frequency_normalized=frequency.normalized,
        duration_days=str(duration_days) if duration_days else "",
        source_of_infection=indication.source_of_infection,
        indication_category=indication.indication_category,
        syndrome=indication.syndrome,
    )


def parse_raw_abt_order_listing(raw_text: str) -> list[AbtStagingRow]:
    """Parse a pasted antibiotic order listing.

    Lines before the first recognizable data line (report titles, headers) are
    dropped. Every remaining non-empty line yields exactly one row, in input
    order; malformed lines become ERROR rows rather than exceptions.
    """
    lines = segment_lines(raw_text, is_likely_data_line)
    batch_token = uuid.uuid4().hex[:12]
    rows = [assemble_abt_row(line, index, batch_token) for index, line in enumerate(lines)]
    logger.debug(f"abt listing: {len(rows)} data lines")
    return rows
