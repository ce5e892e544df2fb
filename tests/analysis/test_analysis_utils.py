"""Tests for shared analysis helpers."""

from __future__ import annotations

import pytest

from storygen.analysis.utils import (
    is_identifier,
    normalise_number_literal,
    quote_string_literal,
    string_literal_value,
    title_path,
    to_pascal_case,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("button", "Button"),
        ("empty-state", "EmptyState"),
        ("date picker", "DatePicker"),
        ("my_comp", "My_comp"),
        ("AlertDialog", "AlertDialog"),
    ],
)
def test_to_pascal_case(value: str, expected: str) -> None:
    assert to_pascal_case(value) == expected


def test_title_path_cases_each_segment() -> None:
    assert title_path("ui/date-picker/Calendar") == "Ui/DatePicker/Calendar"


def test_is_identifier() -> None:
    assert is_identifier("label")
    assert is_identifier("$value")
    assert not is_identifier("aria-label")
    assert not is_identifier("1st")


def test_quote_string_literal() -> None:
    assert quote_string_literal("'red'") == '"red"'
    assert quote_string_literal('"blue"') == '"blue"'
    assert quote_string_literal("'say \"hi\"'") == '"say \\"hi\\""'
    assert quote_string_literal("'it\\'s'") == '"it\'s"'


def test_string_literal_value() -> None:
    assert string_literal_value("'aria-label'") == "aria-label"
    assert string_literal_value("plain") == "plain"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2", "2"),
        ("-1", "-1"),
        ("- 3", "-3"),
        ("1_000", "1000"),
        ("0x10", "16"),
        ("1.50", "1.5"),
        ("2.0", "2"),
    ],
)
def test_normalise_number_literal(raw: str, expected: str) -> None:
    assert normalise_number_literal(raw) == expected
