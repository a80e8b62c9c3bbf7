"""HTML encoding, the inverse of the decoder (no marker correction)."""

from __future__ import annotations

import re

from .constants import (
    HIGH_CHAR_END,
    HIGH_CHAR_START,
    HIGH_SURROGATE_START,
    LOW_SURROGATE_END,
    RESERVED_ENCODINGS,
    UNICODE_PLANE01_START,
    UNICODE_REPLACEMENT_CHAR,
)
from .entities import ENTITY_NAMES
from .units import from_units

_RESERVED_OR_SURROGATE = "<>\"'&\ud800-\udfff\U00010000-\U0010ffff"
_ENCODING_CHARS_PATTERN = re.compile(f"[{_RESERVED_OR_SURROGATE}]")
_ENCODING_CHARS_HIGH_PATTERN = re.compile(f"[{_RESERVED_OR_SURROGATE}\xa0-\xff]")


class EncoderOpts:
    __slots__ = ("encode_high_chars", "named_entities")

    def __init__(self, encode_high_chars=True, named_entities=False):
        self.encode_high_chars = bool(encode_high_chars)
        self.named_entities = bool(named_entities)


_DEFAULT_OPTS = EncoderOpts()


def index_of_encoding_char(text: str, opts: EncoderOpts | None = None) -> int:
    """Position of the first character that needs encoding, or -1."""
    opts = opts or _DEFAULT_OPTS
    pattern = _ENCODING_CHARS_HIGH_PATTERN if opts.encode_high_chars else _ENCODING_CHARS_PATTERN
    match = pattern.search(text)
    return match.start() if match else -1


def _reference(ch: str, opts: EncoderOpts) -> str:
    if opts.named_entities:
        name = ENTITY_NAMES.get(ch)
        if name is not None:
            return f"&{name};"
    return f"&#{ord(ch)};"


def encode(text: str | None, opts: EncoderOpts | None = None) -> str | None:
    """Escape ``<>"'&`` and, per *opts*, Latin-1 high and non-BMP characters.

    Characters above U+FFFF become &#N; references with the full scalar
    value. A lone surrogate cannot be encoded and is written as U+FFFD.
    """
    if not text:
        return text
    opts = opts or _DEFAULT_OPTS
    index = index_of_encoding_char(text, opts)
    if index == -1:
        return text

    # Join surrogate pairs given as two code points before looking at them
    rest = from_units(text[index:])
    parts = [text[:index]]
    for ch in rest:
        escaped = RESERVED_ENCODINGS.get(ch)
        if escaped is not None:
            parts.append(escaped)
            continue
        code_point = ord(ch)
        if opts.encode_high_chars and HIGH_CHAR_START <= code_point < HIGH_CHAR_END:
            parts.append(_reference(ch, opts))
        elif code_point >= UNICODE_PLANE01_START:
            parts.append(f"&#{code_point};")
        elif HIGH_SURROGATE_START <= code_point <= LOW_SURROGATE_END:
            parts.append(chr(UNICODE_REPLACEMENT_CHAR))
        else:
            parts.append(ch)
    return "".join(parts)
