from __future__ import annotations

import re
from dataclasses import dataclass

from .dates import add_days

"""Field normalizers for antibiotic order listings.

Route, frequency and dose come out of loosely written order text. The route
and frequency tables are ordered: the first matching entry wins, so longer or
more specific phrases must stay ahead of the short abbreviations they contain.
"""

__all__ = [
    "ROUTE_TABLE",
    "ROUTE_OTHER",
    "FREQUENCY_TABLE",
    "FrequencyMatch",
    "MedicationDose",
    "normalize_route",
    "normalize_frequency",
    "extract_medication_and_dose",
    "parse_duration_days",
    "derive_end_date",
    "normalize_order_status",
]

ROUTE_OTHER = "Other"

# (phrase, code); substring containment on the lower-cased route text
ROUTE_TABLE: tuple[tuple[str, str], ...] = (
    ("by mouth", "PO"),
    ("orally", "PO"),
    ("oral", "PO"),
    ("intravenously", "IV"),
    ("intravenous", "IV"),
    ("intramuscularly", "IM"),
    ("intramuscular", "IM"),
    ("subcutaneously", "SC"),
    ("subcutaneous", "SC"),
    ("sub-q", "SC"),
    ("subq", "SC"),
    ("topically", "TOP"),
    ("topical", "TOP"),
    ("apply to skin", "TOP"),
    ("inhalation", "INH"),
    ("inhaled", "INH"),
    ("nebuliz", "INH"),
    ("ophthalmic", "OPH"),
    ("both eyes", "OPH"),
    ("left eye", "OPH"),
    ("right eye", "OPH"),
    ("eye", "OPH"),
    ("otic", "OTC"),
    ("both ears", "OTC"),
    ("left ear", "OTC"),
    ("right ear", "OTC"),
    ("vaginally", "VAG"),
    ("vaginal", "VAG"),
    ("per rectum", "PR"),
    ("rectally", "PR"),
    ("rectal", "PR"),
    ("transdermal", "TD"),
    ("nasogastric", "NG"),
    ("feeding tube", "NG"),
    ("g-tube", "NG"),
    ("peg tube", "NG"),
    ("po", "PO"),
    ("iv", "IV"),
    ("im", "IM"),
    ("sc", "SC"),
    ("sq", "SC"),
    ("neb", "INH"),
)

FREQUENCY_TABLE: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), code)
    for pattern, code in (
        (r"\b(two times a day|twice daily|twice a day|bid|bd)\b", "BID"),
        (r"\b(three times a day|three times daily|tid)\b", "TID"),
        (r"\b(four times a day|four times daily|qid)\b", "QID"),
        (r"\b(every\s*4\s*hours|q\s*4\s*h)\b", "Q4H"),
        (r"\b(every\s*6\s*hours|q\s*6\s*h)\b", "Q6H"),
        (r"\b(every\s*8\s*hours|q\s*8\s*h)\b", "Q8H"),
        (r"\b(every\s*12\s*hours|q\s*12\s*h)\b", "Q12H"),
        (r"\b(every\s*24\s*hours|q\s*24\s*h)\b", "Q24H"),
        (r"\b(every other day|qod)\b", "QOD"),
        (r"\b(once a week|one time a week|weekly)\b", "QWEEK"),
        (r"\b(at bedtime|qhs)\b", "QHS"),
        (r"\b(one time a day|once a day|once daily|daily|qd)\b", "QD"),
        (r"\b(one time only|once|x\s*1\s*dose)\b", "ONCE"),
        (r"\b(as needed|prn)\b", "PRN"),
    )
)

_DOSE_RE = re.compile(r"\b(\d+(?:\.\d+)?)\s*(MG|MCG|GRAM|G|ML|UNITS?)\b", re.IGNORECASE)
_DURATION_RE = re.compile(r"(?:for|x)\s*(\d{1,3})\s*days?\b", re.IGNORECASE)
_LEADING_DASH_RE = re.compile(r"^-\s*")


@dataclass(frozen=True)
class FrequencyMatch:
    raw: str
    normalized: str


@dataclass(frozen=True)
class MedicationDose:
    medication_name: str
    dose: str


def normalize_route(value: str) -> str:
    """Map free-text route to a standard code, ``Other`` when unrecognized."""
    text = (value or "").strip().lower()
    if not text:
        return ""
    for phrase, code in ROUTE_TABLE:
        if phrase in text:
            return code
    return ROUTE_OTHER


def normalize_frequency(summary: str) -> FrequencyMatch:
    """Return the first frequency phrase found in the order summary."""
    for pattern, code in FREQUENCY_TABLE:
        match = pattern.search(summary or "")
        if match:
            return FrequencyMatch(raw=match.group(0), normalized=code)
    return FrequencyMatch(raw="", normalized="")


def extract_medication_and_dose(summary: str) -> MedicationDose:
    """Split an order summary into medication name and dose.

    The medication is the text before the first ``<number> <unit>``; without a
    dose the medication is the text before the first ``" for "``.
    """
    summary = summary or ""
    match = _DOSE_RE.search(summary)
    if not match:
        return MedicationDose(medication_name=summary.split(" for ")[0].strip(), dose="")
    dose = f"{match.group(1)} {match.group(2).upper()}"
    medication_name = _LEADING_DASH_RE.sub("", summary[: match.start()]).strip()
    return MedicationDose(medication_name=medication_name, dose=dose)


def parse_duration_days(summary: str) -> int:
    """Explicit course length (``for 10 days``, ``x 7 days``), 0 when absent."""
    match = _DURATION_RE.search(summary or "")
    return int(match.group(1)) if match else 0


def derive_end_date(start_date: str, explicit_end_date: str, duration_days: int) -> tuple[str, bool]:
    """Pick the course end date.

    Returns:
        (end_date, was_computed). An explicit end date is used as-is; otherwise
        start + duration when both exist; otherwise ("", False).
    """
    if explicit_end_date:
        return explicit_end_date, False
    if start_date and duration_days:
        computed = add_days(start_date, duration_days)
        return computed, bool(computed)
    return "", False


def normalize_order_status(value: str) -> str:
    lowered = (value or "").strip().lower()
    if "complete" in lowered:
        return "completed"
    if "discontinu" in lowered:
        return "discontinued"
    return "active"
