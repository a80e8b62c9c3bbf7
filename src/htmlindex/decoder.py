"""HTML entity decoding with marker correction.

Decodes &name; and &#N; / &#xN; references while moving a caller-owned list
of markers (offsets into the encoded text) so that each one points at the
same character in the decoded text.

All offsets are UTF-16 code units. Scanning runs over the unit string from
``units.to_units`` so a character above U+FFFF occupies two positions, the
same as the surrogate pair a numeric reference like &#128658; produces.

Correction works against a snapshot of the markers taken before the scan:
the snapshot decides which branch a marker falls in, the live value is what
gets adjusted. Shifts from earlier entities therefore accumulate without
being compared against already-moved positions.
"""

from __future__ import annotations

import re
from typing import MutableSequence, TextIO

from .entities import lookup_named_entity, numeric_reference_units, parse_numeric_reference
from .errors import MissingArgumentError
from .units import from_units, has_surrogates, to_units

# Next ';' or '&' after an ampersand. Text spanning two '&' is never one entity.
_ENTITY_END_PATTERN = re.compile("[;&]")


def correct_marker(original: int, current: int, start: int, end: int, correct_by: int) -> int:
    """Return the new live value of one marker after an entity is consumed.

    Args:
        original: Marker value in encoded coordinates (the pre-scan snapshot)
        current: Marker value after corrections for earlier entities
        start: Encoded position of the entity's '&'
        end: Encoded position of the entity's ';'
        correct_by: Units the text shrank by when the entity was replaced

    Returns:
        The corrected marker value
    """
    if original <= start:
        return current
    if original <= end:
        # Inside the entity: land on the replacement. original - current is
        # the shift already applied by earlier entities.
        return start - (original - current)
    return current - correct_by


class HtmlDecoder:
    __slots__ = ("env_debug",)

    def __init__(self, *, debug=False):
        self.env_debug = bool(debug)

    def debug(self, message, indent=4):
        if self.env_debug:
            print(f"{' ' * indent}{message}")

    def decode(self, text: str | None, markers: MutableSequence[int] | None) -> str | None:
        """Decode *text* and correct *markers* in place.

        Raises:
            MissingArgumentError: if markers is None
        """
        if markers is None:
            raise MissingArgumentError("markers")
        if not text:
            return text
        if not self.requires_decoding(text):
            return text
        return self._decode(text, markers)

    def decode_into(self, text: str | None, output: TextIO | None, markers: MutableSequence[int] | None) -> None:
        """Decode *text* into the text stream *output*, correcting *markers*."""
        if output is None:
            raise MissingArgumentError("output")
        if markers is None:
            raise MissingArgumentError("markers")
        if text is None:
            return
        if not self.requires_decoding(text):
            output.write(text)
            return
        output.write(self._decode(text, markers))

    @staticmethod
    def requires_decoding(text: str) -> bool:
        # Strict policy: surrogates also route through the full scan
        return "&" in text or has_surrogates(text)

    def _decode(self, text: str, markers: MutableSequence[int]) -> str:
        units = to_units(text)
        original = list(markers)
        result: list[str] = []
        length = len(units)
        i = 0

        while i < length:
            next_amp = units.find("&", i)
            if next_amp == -1:
                result.append(units[i:])
                break
            if next_amp > i:
                result.append(units[i:next_amp])
            i = next_amp

            match = _ENTITY_END_PATTERN.search(units, i + 1)
            if match is None or match.group() != ";":
                # Bare '&'
                result.append("&")
                i += 1
                continue

            end = match.start()
            body = units[i + 1 : end]

            if len(body) > 1 and body[0] == "#":
                code_point = parse_numeric_reference(body)
                if code_point is None:
                    self.debug(f"Rejected numeric reference &{body}; at {i}")
                    result.append("&")
                    i += 1
                    continue
                replacement = numeric_reference_units(code_point)
            else:
                replacement = lookup_named_entity(body)
                if replacement is None:
                    self.debug(f"Unknown entity &{body}; at {i}, kept as text")
                    result.append(units[i : end + 1])
                    i = end + 1
                    continue

            result.append(replacement)
            correct_by = (len(body) + 2) - len(replacement)
            self.debug(f"Decoded &{body}; at {i}..{end} to {len(replacement)} unit(s), shrink {correct_by}")
            self._correct_markers(markers, original, i, end, correct_by)
            i = end + 1

        return from_units("".join(result))

    def _correct_markers(self, markers, original, start, end, correct_by):
        for j, value in enumerate(original):
            corrected = correct_marker(value, markers[j], start, end, correct_by)
            if corrected != markers[j]:
                self.debug(f"marker[{j}] {markers[j]} -> {corrected}", indent=6)
                markers[j] = corrected


_default_decoder = HtmlDecoder()


def decode(text, markers=None):
    """Decode HTML entities in *text*, correcting *markers* in place.

    Markers are UTF-16 code unit offsets into *text* on entry and into the
    returned string on exit. Unknown or malformed references are kept as
    literal text and leave markers alone.

    A surrogate pair given as two separate code points comes back as one
    character, even when *text* holds no references. Both forms are the same
    two code units, so markers do not move.

    Raises:
        MissingArgumentError: if markers is None
    """
    return _default_decoder.decode(text, markers)


def decode_into(text, output=None, markers=None):
    """Like decode, but writes the result to the text stream *output*."""
    _default_decoder.decode_into(text, output, markers)
