"""Tests for audioshelf.core.sanitizer.

Covers:
- Replacement of forbidden and control characters
- Whitespace collapsing, trimming and truncation
- Idempotence of sanitize
- Cross-platform path validation (reserved names, trailing dots, length)
"""

import pytest

from audioshelf.core.sanitizer import MAX_NAME_LENGTH, sanitize, validate_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('a<b>c:d"e', "a_b_c_d_e"),
        ("AC/DC \\ Live", "AC_DC _ Live"),
        ("what|why?*", "what_why__"),
        ("tab\x01bell\x07", "tab_bell_"),
        ("  The   Great Adventure  ", "The Great Adventure"),
        ("line\nbreak", "line_break"),
        ("", ""),
    ],
)
def test_sanitize_replaces_and_collapses(raw: str, expected: str) -> None:
    assert sanitize(raw) == expected


def test_sanitize_none_is_empty() -> None:
    assert sanitize(None) == ""


def test_sanitize_non_string_values() -> None:
    assert sanitize(1999) == "1999"


def test_sanitize_truncates_to_max_length() -> None:
    result = sanitize("x" * 500)
    assert len(result) == MAX_NAME_LENGTH


def test_sanitize_truncation_does_not_leave_trailing_space() -> None:
    text = "a" * (MAX_NAME_LENGTH - 1) + " tail"
    result = sanitize(text)
    assert not result.endswith(" ")
    assert sanitize(result) == result


@pytest.mark.parametrize(
    "raw",
    [
        "Mistborn: The Final Empire",
        "  spaced   out  ",
        "x" * 300,
        "a" * 239 + "  b",
        'bad<>:"/\\|?*chars',
        "\x00\x1f control",
    ],
)
def test_sanitize_is_idempotent(raw: str) -> None:
    once = sanitize(raw)
    assert sanitize(once) == once


def test_validate_path_accepts_plain_path() -> None:
    result = validate_path("/library/Dune - Frank Herbert.mp3")
    assert result.is_valid
    assert result.errors == []


def test_validate_path_empty() -> None:
    result = validate_path("")
    assert not result.is_valid
    assert result.errors == ["Path cannot be empty"]


def test_validate_path_flags_invalid_characters() -> None:
    result = validate_path("/library/what?.mp3")
    assert not result.is_valid
    assert any("Invalid characters" in e for e in result.errors)


def test_validate_path_allows_drive_letter() -> None:
    assert validate_path("C:\\Books\\Dune.mp3").is_valid


def test_validate_path_flags_reserved_names() -> None:
    result = validate_path("/library/CON.mp3")
    assert not result.is_valid
    assert any("reserved" in e for e in result.errors)


def test_validate_path_flags_trailing_period() -> None:
    result = validate_path("/library/Vol. /Book.mp3")
    assert not result.is_valid
    assert any("should not end" in e for e in result.errors)


def test_validate_path_allows_relative_segments() -> None:
    assert validate_path("../library/./Book.mp3").is_valid


def test_validate_path_flags_length() -> None:
    result = validate_path("/" + "a" * 300)
    assert not result.is_valid
    assert any("maximum length" in e for e in result.errors)
