from __future__ import annotations

import re
from dataclasses import dataclass

"""Resident identity parsing for ``LASTNAME, FIRSTNAME M (MRN)`` columns.

The MRN is the linking key for downstream resident matching. The parsed name
is display-only and must not be used to resolve identity.
"""

__all__ = [
    "ResidentName",
    "parse_resident",
]

_MRN_RE = re.compile(r"\(([^)]+)\)")
_PAREN_GROUP_RE = re.compile(r"\([^)]*\)")
_MIDDLE_INITIAL_RE = re.compile(r"\s+[A-Z]\.?$")


@dataclass(frozen=True)
class ResidentName:
    mrn: str
    last_name: str
    first_name: str


def parse_resident(resident_name_raw: str, strip_middle_initial: bool = False) -> ResidentName:
    """Parse a resident name column.

    Args:
        resident_name_raw: Column text, e.g. ``"CASANO, MARYANN A (200999)"``
        strip_middle_initial: Drop a trailing single-letter initial from the
            first name (``"MARYANN A"`` -> ``"MARYANN"``)

    Returns:
        ResidentName with empty strings for anything not present
    """
    match = _MRN_RE.search(resident_name_raw)
    mrn = match.group(1).strip() if match else ""
    without_mrn = _PAREN_GROUP_RE.sub("", resident_name_raw).strip()
    last_name, _, first_chunk = without_mrn.partition(",")
    last_name = last_name.strip()
    first_name = first_chunk.strip()
    if strip_middle_initial:
        first_name = _MIDDLE_INITIAL_RE.sub("", first_name).strip()
    return ResidentName(mrn=mrn, last_name=last_name, first_name=first_name)
