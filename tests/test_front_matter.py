from datetime import UTC, date, datetime

import pytest

from errors import FrontMatterParseError, MetadataError
from front_matter import decode_front_matter, extract_front_matter, parse_post_date
from models import FrontMatter

SAMPLE_POST = """---
title: Run
date: 2024-01-15
tags: [跑步, health]
featured: true
author: ignored
---
# Heading

Body text.
"""


def test_extract_front_matter_splits_metadata_and_body() -> None:
    data, body = extract_front_matter(SAMPLE_POST)

    assert data["title"] == "Run"
    assert data["date"] == date(2024, 1, 15)
    assert data["tags"] == ["跑步", "health"]
    assert data["featured"] is True
    assert body == "# Heading\n\nBody text.\n"


def test_extract_without_front_matter_returns_full_text() -> None:
    text = "Just a body\n---\nwith a rule"
    assert extract_front_matter(text) == ({}, text)


def test_extract_empty_block() -> None:
    assert extract_front_matter("---\n---\nbody") == ({}, "body")


def test_extract_handles_bom_and_crlf() -> None:
    data, body = extract_front_matter("\ufeff---\r\ntitle: Hi\r\n---\r\nbody\r\n")
    assert data == {"title": "Hi"}
    assert body == "body\r\n"


def test_unclosed_block_is_treated_as_body() -> None:
    text = "---\ntitle: Hi\nno closing fence"
    assert extract_front_matter(text) == ({}, text)


def test_malformed_yaml_raises_parse_error() -> None:
    with pytest.raises(FrontMatterParseError):
        extract_front_matter("---\ntitle: [unclosed\n---\nbody")


def test_non_mapping_block_raises_parse_error() -> None:
    with pytest.raises(FrontMatterParseError):
        extract_front_matter("---\n- a\n- b\n---\nbody")


def test_parse_error_is_a_metadata_error() -> None:
    assert issubclass(FrontMatterParseError, MetadataError)


def test_decode_full_front_matter() -> None:
    data, _ = extract_front_matter(SAMPLE_POST)
    fm = decode_front_matter(data)

    assert fm == FrontMatter(
        title="Run",
        date="2024-01-15",
        excerpt=None,
        tags=("跑步", "health"),
        featured=True,
    )


def test_decode_applies_defaults() -> None:
    fm = decode_front_matter({"title": "Only", "date": "2024-03-01"})

    assert fm.excerpt is None
    assert fm.tags == ()
    assert fm.featured is False


@pytest.mark.parametrize("data", [
    {"date": "2024-01-01"},
    {"title": "No date"},
    {"title": "   ", "date": "2024-01-01"},
    {"title": "Null date", "date": None},
    {},
])
def test_decode_missing_required_field(data: dict) -> None:
    with pytest.raises(MetadataError, match="Missing required field"):
        decode_front_matter(data)


@pytest.mark.parametrize("data", [
    {"title": "T", "date": "not a date"},
    {"title": "T", "date": ["2024-01-01"]},
    {"title": "T", "date": "2024-01-01", "tags": "single"},
    {"title": "T", "date": "2024-01-01", "tags": [["nested"]]},
    {"title": "T", "date": "2024-01-01", "featured": "maybe"},
    {"title": ["T"], "date": "2024-01-01"},
])
def test_decode_rejects_wrong_shapes(data: dict) -> None:
    with pytest.raises(MetadataError):
        decode_front_matter(data)


def test_decode_coerces_scalar_values() -> None:
    fm = decode_front_matter({"title": 2024, "date": "2024-01-01", "tags": [1, "two", None]})

    assert fm.title == "2024"
    assert fm.tags == ("1", "two")


def test_decode_datetime_values() -> None:
    fm = decode_front_matter({"title": "T", "date": datetime(2024, 1, 15, 8, 30)})
    assert fm.date == "2024-01-15T08:30:00"

    fm = decode_front_matter({"title": "T", "date": "2024-01-15T08:30:00Z"})
    assert fm.date == "2024-01-15T08:30:00Z"


def test_blank_excerpt_counts_as_missing() -> None:
    fm = decode_front_matter({"title": "T", "date": "2024-01-01", "excerpt": "  "})
    assert fm.excerpt is None


def test_parse_post_date_normalizes_to_utc() -> None:
    assert parse_post_date("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)
    assert parse_post_date("2024-01-15T10:00:00+02:00") == datetime(2024, 1, 15, 8, tzinfo=UTC)


@pytest.mark.parametrize("bad_date", ["2024-02-30", "2024-13-01"])
def test_impossible_unquoted_date_raises_parse_error(bad_date: str) -> None:
    """YAML's timestamp constructor fails with ValueError, not YAMLError."""
    with pytest.raises(FrontMatterParseError):
        extract_front_matter(f"---\ntitle: Typo\ndate: {bad_date}\n---\nbody")
