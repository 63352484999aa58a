from __future__ import annotations

import pytest

from listing_import.parsing.resident import ResidentName, parse_resident


def test_parse_resident_full():
    r = parse_resident("CASANO, MARYANN A (200999)", strip_middle_initial=True)
    assert r == ResidentName(mrn="200999", last_name="CASANO", first_name="MARYANN")


def test_parse_resident_keeps_initial_without_stripping():
    r = parse_resident("CASANO, MARYANN A (200999)")
    assert r.first_name == "MARYANN A"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("DOE, JANE Q. (1)", "JANE"),
        ("DOE, MARY ANN (1)", "MARY ANN"),
        ("DOE, JANE a (1)", "JANE a"),
        ("DOE, J (1)", "J"),
    ],
)
def test_middle_initial_stripping_rules(raw: str, expected: str):
    assert parse_resident(raw, strip_middle_initial=True).first_name == expected


def test_parse_resident_missing_mrn():
    r = parse_resident("DOE, JANE")
    assert r.mrn == ""
    assert r.last_name == "DOE"
    assert r.first_name == "JANE"


def test_parse_resident_uses_first_paren_group_and_trims():
    r = parse_resident("DOE, JANE ( 555 ) (old 444)")
    assert r.mrn == "555"
    assert r.first_name == "JANE"


def test_parse_resident_without_comma():
    r = parse_resident("JANEDOE (123)")
    assert r == ResidentName(mrn="123", last_name="JANEDOE", first_name="")


def test_parse_resident_splits_on_first_comma_only():
    r = parse_resident("DOE, JANE, JR (9)")
    assert r.last_name == "DOE"
    assert r.first_name == "JANE, JR"
