from .decoder import HtmlDecoder, correct_marker, decode, decode_into
from .encoder import EncoderOpts, encode
from .entities import NAMED_ENTITIES
from .errors import MissingArgumentError
from .indices import utf16_offset, widen, widened

__all__ = [
    "NAMED_ENTITIES",
    "EncoderOpts",
    "HtmlDecoder",
    "MissingArgumentError",
    "correct_marker",
    "decode",
    "decode_into",
    "encode",
    "utf16_offset",
    "widen",
    "widened",
]
