"""Code point to code unit index conversion.

Offsets produced by code that counts characters (Python, UTF-32 tools)
count a character above U+FFFF once; UTF-16 consumers such as the decoder
count it twice. ``widen`` moves such offsets onto the UTF-16 scale.
"""

from __future__ import annotations

from typing import MutableSequence, Sequence

from .errors import MissingArgumentError
from .units import from_units, is_surrogate_pair, to_units, unit_length


def widen(text: str | None, markers: MutableSequence[int] | None = None) -> None:
    """Convert code point *markers* into code unit markers, in place.

    Every marker after a surrogate pair in *text* moves right by one per
    pair. A marker at the start of a pair stays where it is.

    Raises:
        MissingArgumentError: if text or markers is None
    """
    if text is None:
        raise MissingArgumentError("text")
    if markers is None:
        raise MissingArgumentError("markers")
    if not markers:
        return

    units = to_units(text)
    i = 0
    # The last unit cannot start a pair
    last = len(units) - 1
    while i < last:
        if is_surrogate_pair(units[i], units[i + 1]):
            for j, value in enumerate(markers):
                if value > i:
                    markers[j] = value + 1
            i += 2
        else:
            i += 1


def widened(text: str, markers: Sequence[int] | None) -> list[int]:
    """Return widened copies of *markers*, leaving the input untouched."""
    if markers is None:
        raise MissingArgumentError("markers")
    result = list(markers)
    widen(text, result)
    return result


def utf16_offset(text: str, index: int) -> int:
    """Code unit offset of the code point index *index* in *text*.

    Agrees with ``widen`` for a single marker: a pair given as two
    surrogate code points counts as one code point, and indices past the
    end keep counting one unit each.
    """
    text = from_units(text)
    if index > len(text):
        return unit_length(text) + index - len(text)
    return unit_length(text[:index])
