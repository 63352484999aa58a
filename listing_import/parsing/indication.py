from __future__ import annotations

import re
from dataclasses import dataclass

"""Default infection source / indication classification for antibiotic orders.

The indication column and the order summary are searched together against an
ordered table. The first matching entry wins, so narrower syndromes sit above
the broader ones that would otherwise swallow them (urosepsis before sepsis,
brain or dental abscess before skin abscess, upper respiratory before
respiratory).
"""

__all__ = [
    "INDICATION_TABLE",
    "IndicationMatch",
    "classify_indication",
]


@dataclass(frozen=True)
class IndicationMatch:
    source_of_infection: str
    indication_category: str
    syndrome: str

    @property
    def classified(self) -> bool:
        return bool(self.source_of_infection)


_UNCLASSIFIED = IndicationMatch(source_of_infection="", indication_category="", syndrome="")

# (pattern, source_of_infection, indication_category, syndrome)
_INDICATION_ROWS: tuple[tuple[str, str, str, str], ...] = (
    (r"\buti\b|urinary tract|bacteriuria|cystitis|pyelonephritis|urosepsis", "Urinary", "UTI", "Genitourinary"),
    (r"oral suppression|chronic suppression|suppressive", "Chronic", "Suppression", "Chronic suppression"),
    (r"c\.?\s?diff|clostridi|\bcdi\b", "GI", "CDI", "Gastrointestinal"),
    (r"diverticulitis|intra-?abdominal|cholecystitis|h\.?\s?pylori|gastroenteritis", "GI", "Intra-abdominal", "Gastrointestinal"),
    (r"endocarditis|pericarditis|cardiac device", "Cardiovascular", "Endocarditis", "Cardiovascular"),
    (r"bacteremia|sepsis|bloodstream|\bbsi\b", "Blood", "BSI", "Bloodstream"),
    (r"meningitis|encephalitis|brain abscess|\bcns\b", "CNS", "CNS infection", "Central nervous system"),
    (r"osteomyelitis|septic arthritis|prosthetic joint|\bbone\b", "Bone/Joint", "Osteomyelitis", "Bone/Joint"),
    (r"sinusitis|pharyngitis|strep throat|\burti\b|upper respiratory", "Respiratory", "URTI", "Respiratory"),
    (r"pneumonia|bronchitis|\blrti\b|lower respiratory|respiratory|copd exacerbation", "Respiratory", "LRTI", "Respiratory"),
    (r"dental|tooth|periodontal|thrush|stomatitis", "Oral", "Dental/Oral", "Oral cavity"),
    (r"cellulitis|abscess|\bskin\b|wound|soft tissue|\bssti\b", "Skin", "SSTI", "Skin/Soft Tissue"),
    (r"conjunctivitis|\beye\b", "Eye", "Conjunctivitis", "Eye"),
    (r"otitis|\bear\b", "Ear", "Otitis", "Ear"),
    (r"prophyla|pre-?op", "Prophylaxis", "Prophylaxis", "Prophylaxis"),
)

INDICATION_TABLE: tuple[tuple[re.Pattern[str], IndicationMatch], ...] = tuple(
    (
        re.compile(pattern, re.IGNORECASE),
        IndicationMatch(source_of_infection=source, indication_category=category, syndrome=syndrome),
    )
    for pattern, source, category, syndrome in _INDICATION_ROWS
)


def classify_indication(indication_raw: str, order_summary_raw: str) -> IndicationMatch:
    combined = f"{indication_raw} {order_summary_raw}"
    for pattern, match in INDICATION_TABLE:
        if pattern.search(combined):
            return match
    return _UNCLASSIFIED
