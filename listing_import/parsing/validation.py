from __future__ import annotations

from .normalizers import ROUTE_OTHER

"""Row validation rules and duplicate-key construction.

Validation never raises. Each rule appends a message to either the error list
(commit blocked) or the warning list (importable after review), in the fixed
order below so that output is deterministic.
"""

__all__ = [
    "MISSING_MRN",
    "INVALID_START_DATE",
    "INVALID_END_DATE",
    "MISSING_ORDER_SUMMARY",
    "UNKNOWN_ROUTE",
    "UNKNOWN_FREQUENCY",
    "UNCLASSIFIED_INDICATION",
    "INVALID_EVENT_DATE",
    "MISSING_VACCINE_TYPE",
    "validate_abt_fields",
    "validate_vax_fields",
    "build_duplicate_key",
    "abt_duplicate_key",
    "vax_duplicate_key",
]

MISSING_MRN = "Missing MRN"
INVALID_START_DATE = "Invalid or missing start date"
INVALID_END_DATE = "Invalid end date"
MISSING_ORDER_SUMMARY = "Missing order summary"
UNKNOWN_ROUTE = "Unknown route — verify manually"
UNKNOWN_FREQUENCY = "Unknown frequency — verify manually"
UNCLASSIFIED_INDICATION = "Indication not auto-classified — verify manually"

INVALID_EVENT_DATE = "Invalid or missing event date"
MISSING_VACCINE_TYPE = "Missing vaccine type"

KEY_SEPARATOR = "|"


def validate_abt_fields(
    *,
    mrn: str,
    start_date_raw: str,
    start_date: str,
    end_date_raw: str,
    end_date: str,
    order_summary_raw: str,
    route_normalized: str,
    frequency_normalized: str,
    indication_classified: bool,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Apply the antibiotic order rule set.

    ``end_date`` here is the parsed explicit end date, not a computed one.

    Returns:
        (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not mrn:
        errors.append(MISSING_MRN)
    if not start_date_raw or not start_date:
        errors.append(INVALID_START_DATE)
    if end_date_raw and not end_date:
        errors.append(INVALID_END_DATE)
    if not order_summary_raw:
        errors.append(MISSING_ORDER_SUMMARY)

    if not route_normalized or route_normalized == ROUTE_OTHER:
        warnings.append(UNKNOWN_ROUTE)
    if not frequency_normalized:
        warnings.append(UNKNOWN_FREQUENCY)
    if not indication_classified:
        warnings.append(UNCLASSIFIED_INDICATION)

    return tuple(errors), tuple(warnings)


def validate_vax_fields(
    *, mrn: str, date_raw: str, event_date: str, vaccine_type: str
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    errors: list[str] = []
    if not mrn:
        errors.append(MISSING_MRN)
    if not date_raw or not event_date:
        errors.append(INVALID_EVENT_DATE)
    if not vaccine_type.strip():
        errors.append(MISSING_VACCINE_TYPE)
    # 現状 vaccination に warning ルールなし
    return tuple(errors), ()


def build_duplicate_key(*parts: str) -> str:
    return KEY_SEPARATOR.join(parts).lower()


def abt_duplicate_key(
    *, mrn: str, medication_name: str, order_summary_raw: str, row_number: int, start_date: str, route_normalized: str
) -> str:
    """Key over mrn, medication, start date and route.

    When no medication name could be extracted the raw order summary stands in,
    and failing that a ``row-<n>`` token, so every row gets a key.
    """
    medication = medication_name or order_summary_raw or f"row-{row_number}"
    return build_duplicate_key(mrn, medication, start_date, route_normalized or ROUTE_OTHER)


def vax_duplicate_key(*, mrn: str, vaccine_type: str, event_date: str, event_status: str) -> str:
    return build_duplicate_key(mrn, vaccine_type, event_date, event_status)
