from __future__ import annotations

import unittest

from htmlindex import MissingArgumentError, decode, utf16_offset, widen, widened

FIRE_ENGINE = "\U0001f692"
TEXT = f"asd{FIRE_ENGINE}defsa"


class TestWiden(unittest.TestCase):
    def test_empty_string(self) -> None:
        markers: list[int] = []
        widen("", markers)
        assert markers == []

    def test_empty_markers(self) -> None:
        markers: list[int] = []
        widen("asdf", markers)
        assert markers == []

    def test_no_surrogates(self) -> None:
        markers = [1, 7, 2, 30]
        widen("asdfjyuhqbgwnetfyw34tbKSDJFH78fnsyf9unhgj", markers)
        assert markers == [1, 7, 2, 30]

    def test_before_pair(self) -> None:
        markers = [0, 2]
        widen(TEXT, markers)
        assert markers == [0, 2]

    def test_at_pair(self) -> None:
        markers = [3]
        widen(TEXT, markers)
        assert markers == [3]

    def test_after_pair(self) -> None:
        markers = [4, 8]
        widen(TEXT, markers)
        assert markers == [5, 9]

    def test_mixed(self) -> None:
        markers = [0, 2, 3, 4, 8]
        widen(TEXT, markers)
        assert markers == [0, 2, 3, 5, 9]

    def test_multiple_pairs(self) -> None:
        markers = [0, 2, 3, 4, 8, 9, 10, 11]
        widen(f"asd{FIRE_ENGINE}defsa{FIRE_ENGINE}sd", markers)
        assert markers == [0, 2, 3, 5, 9, 10, 12, 13]

    def test_adjacent_pairs(self) -> None:
        markers = [0, 1, 2, 3]
        widen(FIRE_ENGINE * 3, markers)
        assert markers == [0, 2, 4, 6]

    def test_pair_given_as_surrogate_code_points(self) -> None:
        markers = [4]
        widen("asd\ud83d\ude92defsa", markers)
        assert markers == [5]

    def test_lone_surrogates_are_not_pairs(self) -> None:
        markers = [1, 2, 3]
        widen("\ude92\ud83dx", markers)
        assert markers == [1, 2, 3]

    def test_trailing_high_surrogate(self) -> None:
        markers = [1]
        widen("a\ud83d", markers)
        assert markers == [1]

    def test_returns_none(self) -> None:
        assert widen(TEXT, [4]) is None

    def test_missing_markers(self) -> None:
        with self.assertRaises(MissingArgumentError) as ctx:
            widen(TEXT, None)
        assert ctx.exception.argument == "markers"

    def test_markers_argument_omitted(self) -> None:
        with self.assertRaises(MissingArgumentError):
            widen(TEXT)

    def test_missing_text(self) -> None:
        with self.assertRaises(MissingArgumentError) as ctx:
            widen(None, [])
        assert ctx.exception.argument == "text"


class TestWidened(unittest.TestCase):
    def test_input_untouched(self) -> None:
        markers = (0, 4, 8)
        assert widened(TEXT, markers) == [0, 5, 9]
        assert markers == (0, 4, 8)

    def test_missing_markers(self) -> None:
        with self.assertRaises(MissingArgumentError):
            widened(TEXT, None)


class TestUtf16Offset(unittest.TestCase):
    def test_matches_widen(self) -> None:
        for text in (
            f"a{FIRE_ENGINE}b{FIRE_ENGINE}{FIRE_ENGINE}c",
            "a\ud800\udc00b",
            f"\ud83d{FIRE_ENGINE}\ude92x",
        ):
            for index in range(len(text) + 2):
                with self.subTest(text=text, index=index):
                    assert utf16_offset(text, index) == widened(text, [index])[0]

    def test_pair_given_as_surrogate_code_points(self) -> None:
        text = "a\ud800\udc00b"
        assert [utf16_offset(text, index) for index in range(4)] == [0, 1, 3, 4]
        assert utf16_offset(text, 4) == 5

    def test_bmp_only(self) -> None:
        assert utf16_offset("héllo", 3) == 3


class TestWidenThenDecode(unittest.TestCase):
    def test_python_offsets_through_decode(self) -> None:
        # Offsets computed with str.index count the literal fire engine once
        encoded = f"{FIRE_ENGINE} &lt;b&gt; tail"
        markers = [encoded.index("&lt;"), encoded.index("b"), encoded.index("tail")]
        assert markers == [2, 6, 12]

        widen(encoded, markers)
        assert markers == [3, 7, 13]

        decoded = decode(encoded, markers)
        assert decoded == f"{FIRE_ENGINE} <b> tail"
        assert markers == [3, 4, 7]


if __name__ == "__main__":
    unittest.main()
