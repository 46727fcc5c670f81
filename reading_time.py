"""Reading-time estimation for mixed CJK / space-delimited text."""

from __future__ import annotations

import math
import re

# CJK Unified Ideographs, basic block.
CJK_START = "\u4e00"
CJK_END = "\u9fa5"

CJK_CHARS_PER_MINUTE = 200
WORDS_PER_MINUTE = 250
MIN_READING_TIME = 1

_CJK_RE = re.compile(f"[{CJK_START}-{CJK_END}]")


def is_cjk(char: str) -> bool:
    """Return True if char is a CJK ideograph counted per character."""
    return CJK_START <= char <= CJK_END


def count_cjk_chars(text: str) -> int:
    return sum(1 for char in text if is_cjk(char))


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens once CJK characters are removed."""
    return len(_CJK_RE.sub("", text).split())


def estimate_reading_time(plain_text: str) -> int:
    """Estimate reading time in whole minutes, never less than one.

    CJK characters and words contribute fractional minutes that are summed
    before rounding up, so a short mixed post is not counted as two minutes.
    """
    minutes = math.ceil(
        count_cjk_chars(plain_text) / CJK_CHARS_PER_MINUTE
        + count_words(plain_text) / WORDS_PER_MINUTE
    )
    return max(MIN_READING_TIME, minutes)
