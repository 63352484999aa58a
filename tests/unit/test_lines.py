from __future__ import annotations

from listing_import.parsing.lines import (
    accept_any_line,
    column_at,
    is_likely_data_line,
    segment_lines,
    split_columns,
)


def test_data_line_needs_paren_token_and_date():
    assert is_likely_data_line("DOE, JANE (100123)  Cipro  1/5/2024")
    assert not is_likely_data_line("DOE, JANE (100123)  Cipro  no date")
    assert not is_likely_data_line("Printed 1/5/2024")
    # 1文字の括弧は MRN とみなさない
    assert not is_likely_data_line("DOE, JANE (1)  1/5/2024")


def test_segment_lines_drops_header_and_blank_lines():
    raw = "Order Listing\r\n\r\n  Resident  Order  \nDOE, JANE (100123)\tX\tActive\t1/5/2024\n\n  SMITH (22)  y  2/1/2024  \n"
    lines = segment_lines(raw)
    assert lines == ["DOE, JANE (100123)\tX\tActive\t1/5/2024", "SMITH (22)  y  2/1/2024"]


def test_segment_lines_keeps_non_data_lines_after_first_data_line():
    raw = "Title\nDOE, JANE (100123)\t1/5/2024\nPage 2 of 3\n"
    assert segment_lines(raw) == ["DOE, JANE (100123)\t1/5/2024", "Page 2 of 3"]


def test_segment_lines_without_data_line_is_empty():
    assert segment_lines("Antibiotic Order Listing\nNo orders found\n") == []
    assert segment_lines("") == []


def test_segment_lines_with_accept_any_line():
    assert segment_lines("a\n\n b \n", accept_any_line) == ["a", "b"]


def test_split_columns_prefers_tabs():
    # タブがあればスペース連続は区切りにしない
    assert split_columns("DOE, JANE  (1)\t Cipro 500 MG \t\tActive") == ["DOE, JANE  (1)", "Cipro 500 MG", "", "Active"]


def test_split_columns_on_multi_space_runs():
    assert split_columns("DOE, JANE (100123)   Cipro 500 MG   Active  1/5/2024") == [
        "DOE, JANE (100123)",
        "Cipro 500 MG",
        "Active",
        "1/5/2024",
    ]


def test_split_columns_single_space_is_not_a_delimiter():
    assert split_columns("Give 1 tablet by mouth") == ["Give 1 tablet by mouth"]


def test_column_at_pads_missing_columns():
    cols = ["a", "b"]
    assert column_at(cols, 1) == "b"
    assert column_at(cols, 6) == ""
