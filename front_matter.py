"""Front-matter extraction and strict schema decoding for Markdown posts."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Any

import yaml

from errors import FrontMatterParseError, MetadataError
from models import FrontMatter

# Opening "---" must be the first line; the block ends at the next "---" line.
_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

REQUIRED_FIELDS: tuple[str, ...] = ("title", "date")


def extract_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a raw document into its metadata mapping and body.

    Documents without a leading front-matter block yield an empty mapping and
    the full text as body. Raises FrontMatterParseError if the block is not
    valid YAML or does not hold a mapping.
    """
    text = text.removeprefix("\ufeff")
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError) as exc:
        # Unquoted impossible dates (2024-02-30) fail in the timestamp
        # constructor with a plain ValueError.
        raise FrontMatterParseError(f"Invalid YAML in front matter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterParseError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )

    return data, text[match.end():]


def decode_front_matter(data: dict[str, Any]) -> FrontMatter:
    """Validate a raw metadata mapping into a FrontMatter.

    Recognized keys are title, date, excerpt, tags and featured; anything
    else is ignored. Raises MetadataError on a missing required field or a
    value of the wrong shape.
    """
    missing = [name for name in REQUIRED_FIELDS if _is_blank(data.get(name))]
    if missing:
        raise MetadataError(f"Missing required field(s): {', '.join(missing)}")

    title = _as_scalar_text(data["title"], "title")
    post_date = _as_date_text(data["date"])

    excerpt_raw = data.get("excerpt")
    excerpt = None
    if not _is_blank(excerpt_raw):
        # Explicit excerpts are published verbatim.
        excerpt = _as_scalar_text(excerpt_raw, "excerpt", strip=False)

    return FrontMatter(
        title=title,
        date=post_date,
        excerpt=excerpt,
        tags=_as_tags(data.get("tags")),
        featured=_as_featured(data.get("featured")),
    )


def parse_post_date(value: str) -> datetime:
    """Parse an ISO date or date-time into an aware UTC datetime.

    Plain dates map to midnight UTC; naive date-times are treated as UTC.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise MetadataError(f"Unparseable date: {value!r}") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _as_date_text(value: Any) -> str:
    # YAML turns unquoted dates into date/datetime objects.
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if not isinstance(value, str):
        raise MetadataError(f"Field 'date' must be a date, got {type(value).__name__}")
    text = value.strip()
    parse_post_date(text)
    return text


def _as_scalar_text(value: Any, name: str, strip: bool = True) -> str:
    if isinstance(value, (list, dict)):
        raise MetadataError(f"Field '{name}' must be a scalar, got {type(value).__name__}")
    text = str(value)
    return text.strip() if strip else text


def _as_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise MetadataError(f"Field 'tags' must be a list, got {type(value).__name__}")
    tags: list[str] = []
    for item in value:
        if item is None:
            continue
        tags.append(_as_scalar_text(item, "tags"))
    return tuple(tags)


def _as_featured(value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MetadataError(f"Field 'featured' must be a boolean, got {value!r}")
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
