"""HTML 4.0 character entity lookup and numeric reference parsing.

Supports named entities (&amp;, &euml;) from the HTML 4.0 list plus &apos;,
and numeric references (&#229;, &#xE5;) under a single strict policy: any
code point from U+0000 to U+10FFFF except the surrogate range.
"""

import re

from .constants import (
    ENTITY_DATA,
    HIGH_SURROGATE_START,
    LOW_SURROGATE_END,
    UNICODE_PLANE00_END,
    UNICODE_PLANE16_END,
)
from .units import split_surrogates

# Built once at import and never mutated
NAMED_ENTITIES = {}
ENTITY_NAMES = {}
for code_point, name in ENTITY_DATA:
    NAMED_ENTITIES[name] = chr(code_point)
    ENTITY_NAMES[chr(code_point)] = name

# Decimal allows surrounding ASCII whitespace and one sign, hex only digits
_DECIMAL_DIGITS = re.compile(r"[\t\n\v\f\r ]*([+-]?)([0-9]+)[\t\n\v\f\r ]*")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

# Longest digit runs (after leading zeros) that can still be <= U+10FFFF
_MAX_DECIMAL_DIGITS = 7
_MAX_HEX_DIGITS = 6


def lookup_named_entity(name):
    """Return the character for an entity name (without & and ;), or None."""
    return NAMED_ENTITIES.get(name)


def is_legal_code_point(code_point):
    """Strict policy: U+0000..U+10FFFF, excluding surrogates."""
    return code_point < HIGH_SURROGATE_START or LOW_SURROGATE_END < code_point <= UNICODE_PLANE16_END


def parse_numeric_reference(body):
    """Parse the body of a numeric character reference like #229 or #xE5.

    Decimal digits may carry one leading sign and surrounding ASCII
    whitespace (a minus only on zero); hex digits may not.

    Args:
        body: The text between '&' and ';', starting with '#'

    Returns:
        The code point, or None if the digits are malformed or the value is
        not a legal code point
    """
    if len(body) < 2 or body[0] != "#":
        return None

    if body[1] in "xX":
        digits = body[2:]
        if not _HEX_DIGITS.fullmatch(digits):
            return None
        digits = digits.lstrip("0") or "0"
        if len(digits) > _MAX_HEX_DIGITS:
            return None
        code_point = int(digits, 16)
    else:
        match = _DECIMAL_DIGITS.fullmatch(body, 1)
        if match is None:
            return None
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        if sign == "-" and digits != "0":
            return None
        if len(digits) > _MAX_DECIMAL_DIGITS:
            return None
        code_point = int(digits, 10)

    if not is_legal_code_point(code_point):
        return None
    return code_point


def numeric_reference_units(code_point):
    """UTF-16 units for a decoded code point: one, or a surrogate pair."""
    if code_point <= UNICODE_PLANE00_END:
        return chr(code_point)
    high, low = split_surrogates(code_point)
    return high + low
