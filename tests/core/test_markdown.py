"""Unit tests for plan description extraction."""

from __future__ import annotations

from goalkeeper.core.markdown import extract_description


def test_heading_and_first_paragraph() -> None:
    plan = "# Title\n\nBody line.\n\n## Details\nMore."
    assert extract_description(plan) == "Title\n\nBody line."


def test_multiline_paragraph_stops_at_blank_line() -> None:
    plan = "# Ship it\n\nFirst line\nsecond line\n\nLater paragraph."
    assert extract_description(plan) == "Ship it\n\nFirst line\nsecond line"


def test_paragraph_runs_to_end_of_input() -> None:
    assert extract_description("# Title\n\nOnly paragraph") == "Title\n\nOnly paragraph"


def test_no_leading_heading() -> None:
    assert extract_description("Intro text\n\n# Title\n\nBody.") is None


def test_second_level_heading_is_not_a_title() -> None:
    assert extract_description("## Title\n\nBody.") is None


def test_heading_without_paragraph() -> None:
    assert extract_description("# Title\n") is None
    assert extract_description("# Title") is None


def test_empty_plan() -> None:
    assert extract_description("") is None


def test_crlf_line_endings() -> None:
    assert extract_description("# Title\r\n\r\nBody.\r\n") == "Title\n\nBody."


def test_heading_must_be_first_line() -> None:
    assert extract_description("\n# Title\n\nBody.") is None
    assert extract_description("   \n# Title\n\nBody.") is None


def test_blank_lines_between_heading_and_paragraph() -> None:
    assert extract_description("# Title\n\n\n\nBody.") == "Title\n\nBody."
