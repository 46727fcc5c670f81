"""Filename-derived post identifiers."""

from __future__ import annotations

import re
from pathlib import PurePath

from reading_time import CJK_END, CJK_START

POST_EXTENSION = ".md"

_DISALLOWED_RE = re.compile(f"[^a-z0-9{CJK_START}-{CJK_END}]")
_HYPHEN_RUN_RE = re.compile(r"-+")


def generate_post_id(filename: str) -> str:
    """Derive a URL-safe slug from a post filename.

    Directory and a trailing ".md" are dropped. Two filenames that slug to
    the same id are not disambiguated here.
    """
    name = PurePath(filename).name
    if name.lower().endswith(POST_EXTENSION):
        name = name[: -len(POST_EXTENSION)]

    slug = _DISALLOWED_RE.sub("-", name.lower())
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    return slug.strip("-")
