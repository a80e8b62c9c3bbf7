"""UTF-16 code unit view of Python strings.

Markers handled by this package count positions in UTF-16 code units, the
way C#, Java and JavaScript index strings. Python strings index by code
point, so the decoder and the index converter work on a "unit string": a
``str`` holding exactly one character per code unit, with every character
above U+FFFF split into its two surrogate code points.
"""

from __future__ import annotations

import re

from .constants import (
    HIGH_SURROGATE_END,
    HIGH_SURROGATE_START,
    LOW_SURROGATE_END,
    LOW_SURROGATE_START,
    SURROGATE_BLOCK_SIZE,
    UNICODE_PLANE00_END,
    UNICODE_PLANE01_START,
)

_ASTRAL_PATTERN = re.compile("[\U00010000-\U0010ffff]")
_SURROGATE_UNIT_PATTERN = re.compile("[\ud800-\udfff\U00010000-\U0010ffff]")
_PAIR_PATTERN = re.compile("[\ud800-\udbff][\udc00-\udfff]")


def split_surrogates(code_point: int) -> tuple[str, str]:
    """Return the (high, low) surrogate pair for a code point above U+FFFF."""
    offset = code_point - UNICODE_PLANE01_START
    high = chr(offset // SURROGATE_BLOCK_SIZE + HIGH_SURROGATE_START)
    low = chr(offset % SURROGATE_BLOCK_SIZE + LOW_SURROGATE_START)
    return high, low


def combine_surrogates(high: str, low: str) -> int:
    return (
        (ord(high) - HIGH_SURROGATE_START) * SURROGATE_BLOCK_SIZE
        + (ord(low) - LOW_SURROGATE_START)
        + UNICODE_PLANE01_START
    )


def is_high_surrogate(ch: str) -> bool:
    return HIGH_SURROGATE_START <= ord(ch) <= HIGH_SURROGATE_END


def is_low_surrogate(ch: str) -> bool:
    return LOW_SURROGATE_START <= ord(ch) <= LOW_SURROGATE_END


def is_surrogate_pair(high: str, low: str) -> bool:
    return is_high_surrogate(high) and is_low_surrogate(low)


def has_surrogates(text: str) -> bool:
    """True if the UTF-16 form of *text* contains any surrogate unit."""
    return _SURROGATE_UNIT_PATTERN.search(text) is not None


def to_units(text: str) -> str:
    """Split every character above U+FFFF into two surrogate code points."""
    if _ASTRAL_PATTERN.search(text) is None:
        return text
    parts: list[str] = []
    for ch in text:
        code_point = ord(ch)
        if code_point > UNICODE_PLANE00_END:
            parts.extend(split_surrogates(code_point))
        else:
            parts.append(ch)
    return "".join(parts)


def from_units(units: str) -> str:
    """Join valid surrogate pairs back into single characters.

    Lone surrogates are kept as they are.
    """
    if _PAIR_PATTERN.search(units) is None:
        return units
    return _PAIR_PATTERN.sub(lambda m: chr(combine_surrogates(m.group()[0], m.group()[1])), units)


def unit_length(text: str) -> int:
    """Length of *text* in UTF-16 code units."""
    return len(text) + len(_ASTRAL_PATTERN.findall(text))
