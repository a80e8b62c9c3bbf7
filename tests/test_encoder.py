from __future__ import annotations

import unittest

from htmlindex import EncoderOpts, decode, encode
from htmlindex.encoder import index_of_encoding_char


class TestEncode(unittest.TestCase):
    def test_empty_and_none(self) -> None:
        assert encode("") == ""
        assert encode(None) is None

    def test_plain_text_is_same_object(self) -> None:
        text = "Hello World!"
        assert encode(text) is text

    def test_reserved_characters(self) -> None:
        assert encode("<a href=\"x\">'&'</a>") == "&lt;a href=&quot;x&quot;&gt;&#39;&amp;&#39;&lt;/a&gt;"

    def test_high_chars_as_numeric_references(self) -> None:
        assert encode("caf\xe9 \xa0\xff") == "caf&#233; &#160;&#255;"

    def test_high_chars_left_alone_when_disabled(self) -> None:
        opts = EncoderOpts(encode_high_chars=False)
        assert encode("caf\xe9 & co", opts) == "caf\xe9 &amp; co"

    def test_named_high_chars(self) -> None:
        opts = EncoderOpts(named_entities=True)
        assert encode("caf\xe9 \xa9 2024", opts) == "caf&eacute; &copy; 2024"

    def test_chars_above_latin1_not_encoded(self) -> None:
        assert encode("Ā α €") == "Ā α €"

    def test_astral_character(self) -> None:
        assert encode("fire \U0001f692!") == "fire &#128658;!"

    def test_pair_given_as_surrogate_code_points(self) -> None:
        assert encode("\ud83d\ude92") == "&#128658;"

    def test_lone_surrogate_replaced(self) -> None:
        assert encode("a\ud800b") == "a\ufffdb"
        assert encode("\ude92<") == "\ufffd&lt;"

    def test_index_of_encoding_char(self) -> None:
        assert index_of_encoding_char("abc") == -1
        assert index_of_encoding_char("ab<") == 2
        assert index_of_encoding_char("a\xe9") == 1
        assert index_of_encoding_char("a\xe9", EncoderOpts(encode_high_chars=False)) == -1
        assert index_of_encoding_char("ab\U0001f692") == 2


class TestRoundTrip(unittest.TestCase):
    def test_decode_reverses_encode(self) -> None:
        samples = [
            "plain",
            "<p class='x'>Fish & \"chips\"</p>",
            "caf\xe9 \xa9 \xbd",
            "\U0001f692 \U0001f600 and €",
            "&amp; already escaped",
        ]
        for opts in (EncoderOpts(), EncoderOpts(named_entities=True), EncoderOpts(encode_high_chars=False)):
            for text in samples:
                with self.subTest(text=text, named=opts.named_entities, high=opts.encode_high_chars):
                    assert decode(encode(text, opts), []) == text


if __name__ == "__main__":
    unittest.main()
