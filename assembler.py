"""Per-file assembly of validated ContentRecords."""

from __future__ import annotations

import logging
from pathlib import Path

from errors import MetadataError, ReadError
from front_matter import decode_front_matter, extract_front_matter
from models import ContentRecord
from normalizer import build_excerpt, normalize_markdown
from post_ids import generate_post_id
from reading_time import estimate_reading_time

LOGGER = logging.getLogger(__name__)


def read_post_file(path: Path) -> str:
    """Read a source file as UTF-8, raising ReadError on any failure."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(f"Cannot read {path}: {exc}") from exc


def assemble_record(filename: str, text: str) -> ContentRecord:
    """Build a ContentRecord from a filename and its raw text.

    Raises MetadataError when the front matter is malformed, lacks title or
    date, or the filename yields an empty id.
    """
    data, body = extract_front_matter(text)
    front_matter = decode_front_matter(data)

    post_id = generate_post_id(filename)
    if not post_id:
        raise MetadataError(f"Filename {filename!r} produces an empty post id")

    plain_text = normalize_markdown(body)

    return ContentRecord(
        id=post_id,
        title=front_matter.title,
        date=front_matter.date,
        excerpt=build_excerpt(plain_text, front_matter.excerpt),
        content=body,
        tags=front_matter.tags,
        reading_time=estimate_reading_time(plain_text),
        featured=front_matter.featured,
    )


def parse_post_file(path: Path) -> ContentRecord | None:
    """Parse one post file, returning None when it has to be skipped.

    Read failures are logged as errors and metadata problems as warnings;
    neither is raised, so one bad file never aborts the batch.
    """
    try:
        text = read_post_file(path)
    except ReadError as exc:
        LOGGER.error("Skipping %s: %s", path, exc)
        return None

    try:
        return assemble_record(path.name, text)
    except MetadataError as exc:
        LOGGER.warning("Skipping %s: %s", path, exc)
        return None
