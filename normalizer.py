"""Markdown-to-plain-text normalization and excerpt generation."""

from __future__ import annotations

import re

EXCERPT_LENGTH = 150
EXCERPT_ELLIPSIS = "..."

# Applied in order: code must go before emphasis collapsing, or "*" and "_"
# inside code would be rewritten and leak into the prose.
_MARKDOWN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(```|~~~).*?\1", re.DOTALL), ""),      # fenced code blocks
    (re.compile(r"`[^`]*`"), ""),                        # inline code
    (re.compile(r"!\[.*?\]\(.*?\)"), ""),                # images
    (re.compile(r"\[.*?\]\(.*?\)"), ""),                 # links, text included
    (re.compile(r"^[ \t]*#{1,6}(?:[ \t]+|(?=\r?$))", re.MULTILINE), ""),  # headings
    (re.compile(r"[*_]{1,2}(.*?)[*_]{1,2}"), r"\1"),     # bold / italic
    (re.compile(r"\r?\n"), " "),                         # line breaks
)


def normalize_markdown(text: str) -> str:
    """Strip Markdown constructs and return plain prose.

    The result is not trimmed; callers strip it when they need to.
    """
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def build_excerpt(
    plain_text: str,
    explicit: str | None = None,
    limit: int = EXCERPT_LENGTH,
) -> str:
    """Return the explicit excerpt, or the first `limit` chars of plain_text.

    The ellipsis is appended only when the trimmed text is longer than limit.
    """
    if explicit:
        return explicit

    text = plain_text.strip()
    excerpt = text[:limit]
    if len(text) > limit:
        excerpt += EXCERPT_ELLIPSIS
    return excerpt
