import pickle

import pytest

from unitext import CompareOption, LocaleMode, UTF16Text
from unitext.exceptions import (
    ArgumentError,
    ArgumentRangeError,
    EncodingError,
    InvalidUTF16Sequence,
    UnrecognizedLocale,
)

EMOJI = "a😀b"


def lone_high() -> UTF16Text:
    return UTF16Text.from_units([0x61, 0xD800, 0x62])


def test_length_counts_units() -> None:
    text = UTF16Text(EMOJI)
    assert len(text) == 4
    assert text.units == (0x61, 0xD83D, 0xDE00, 0x62)
    assert len(UTF16Text()) == 0


def test_from_units_joins_pairs_and_keeps_lone_surrogates() -> None:
    assert UTF16Text.from_units([0xD83D, 0xDE00]) == "😀"
    assert lone_high().units == (0x61, 0xD800, 0x62)
    with pytest.raises(ArgumentRangeError):
        UTF16Text.from_units([0x10000])


def test_from_codepoints() -> None:
    assert UTF16Text.from_codepoints(0x48, 0x1F600) == "H😀"
    assert UTF16Text.from_codepoints() == ""
    with pytest.raises(ArgumentRangeError):
        UTF16Text.from_codepoints(0x110000)


def test_from_bytes_lossless_and_lossy() -> None:
    assert UTF16Text.from_bytes("héllo".encode("latin-1"), "latin-1") == "héllo"
    with pytest.raises(EncodingError):
        UTF16Text.from_bytes(b"ok\xff", "utf-8")
    assert UTF16Text.from_bytes(b"ok\xff", "utf-8", lossy=True) == "ok�"
    with pytest.raises(EncodingError):
        UTF16Text.from_bytes(b"abc", "no-such-codec")


def test_encode() -> None:
    assert UTF16Text("€").encode() == "€".encode("utf-8")
    with pytest.raises(EncodingError):
        UTF16Text("€").encode("latin-1")
    assert UTF16Text("€").encode("latin-1", lossy=True) == b"?"
    with pytest.raises(EncodingError):
        lone_high().encode()


def test_copy_is_equal_but_independent() -> None:
    original = UTF16Text(EMOJI)
    duplicate = original.copy()
    assert duplicate == original
    assert duplicate is not original
    assert pickle.loads(pickle.dumps(original)) == original


def test_unit_character() -> None:
    text = UTF16Text(EMOJI)
    assert text.unit_character() == [0x61]
    assert text.unit_character(2, 3) == [0xD83D, 0xDE00]
    assert text.unit_character(-1) == [0x62]
    assert text.unit_character(3, 2) == []
    with pytest.raises(ArgumentRangeError):
        text.unit_character(5)
    with pytest.raises(ArgumentRangeError):
        text.unit_character(1, 0)


def test_codepoint() -> None:
    text = UTF16Text(EMOJI)
    assert text.codepoint(1, -1) == [0x61, 0x1F600, 0x62]
    assert text.codepoint(2) == [0x1F600]
    with pytest.raises(InvalidUTF16Sequence) as excinfo:
        text.codepoint(3)
    assert excinfo.value.index == 3
    with pytest.raises(ArgumentRangeError):
        text.codepoint(len(text) + 1)


def test_codepoint_rejects_lone_surrogate() -> None:
    with pytest.raises(InvalidUTF16Sequence) as excinfo:
        lone_high().codepoint(1, 3)
    assert excinfo.value.index == 2


@pytest.mark.parametrize(
    ("i", "j", "expected"),
    [
        (2, 4, "ell"),
        (-3, -1, "llo"),
        (0, -1, "hello"),
        (1, 100, "hello"),
        (4, 2, ""),
        (5, 4, ""),
        (-100, 2, "he"),
    ],
)
def test_sub_clamps(i: int, j: int, expected: str) -> None:
    assert UTF16Text("hello").sub(i, j) == expected


def test_sub_rejects_start_past_end() -> None:
    with pytest.raises(ArgumentRangeError):
        UTF16Text("hello").sub(6)
    with pytest.raises(ArgumentRangeError):
        UTF16Text("hello").sub(10, -1)
    assert UTF16Text().sub() == ""


def test_sub_may_split_pairs() -> None:
    assert UTF16Text("a😀").sub(1, 2).units == (0x61, 0xD83D)


def test_character_count() -> None:
    assert UTF16Text(EMOJI).character_count().count == 3
    assert UTF16Text("e\u0301x").character_count().count == 3
    assert UTF16Text("e\u0301x").character_count(True).count == 2
    assert UTF16Text("abc").character_count(i=4).count == 0
    assert UTF16Text().character_count().count == 0


def test_character_count_reports_invalid_positions() -> None:
    result = lone_high().character_count()
    assert not result.valid
    assert result.invalid_index == 2
    assert UTF16Text("a😀").character_count(False, 1, 2).invalid_index == 2
    assert UTF16Text("e\u0301x").character_count(True, 1, 1).invalid_index == 1
    assert UTF16Text("e\u0301x").character_count(True, 2).invalid_index == 2


def test_character_count_range_errors() -> None:
    with pytest.raises(ArgumentRangeError):
        UTF16Text("abc").character_count(i=5)
    with pytest.raises(ArgumentRangeError):
        UTF16Text("abc").character_count(j=4)


def test_offset_follows_utf8_offset() -> None:
    text = UTF16Text(EMOJI)
    assert text.offset(1) == 1
    assert text.offset(2) == 2
    assert text.offset(3) == 4
    assert text.offset(4) == 5
    assert text.offset(5) is None
    assert text.offset(-1) == 4
    assert text.offset(-2) == 2
    assert text.offset(-4) is None
    assert text.offset(0, 3) == 2


def test_offset_composed() -> None:
    text = UTF16Text("e\u0301x")
    assert text.offset(2, composed=True) == 3
    assert text.offset(2) == 2
    assert text.offset(0, 2, composed=True) == 1


def test_offset_rejects_start_inside_character() -> None:
    with pytest.raises(ArgumentError):
        UTF16Text(EMOJI).offset(1, 3)
    with pytest.raises(ArgumentRangeError):
        UTF16Text(EMOJI).offset(1, 6)


def test_composed_character_range() -> None:
    text = UTF16Text("e\u0301x😀")
    assert text.composed_character_range(2) == (1, 2)
    assert text.composed_character_range(3) == (3, 3)
    assert text.composed_character_range(5) == (4, 5)
    assert text.composed_character_range(2, 4) == (1, 5)
    assert text.composed_character_range(*text.composed_character_range(2, 4)) == (1, 5)
    with pytest.raises(ArgumentRangeError):
        text.composed_character_range(6)


def test_reverse_keeps_sequences_intact() -> None:
    text = UTF16Text("ab😀e\u0301")
    assert text.reverse() == "e\u0301😀ba"
    assert text.reverse().reverse() == text


def test_case_mapping() -> None:
    assert UTF16Text("straße").upper() == "STRASSE"
    assert UTF16Text("HeLLo").lower() == "hello"
    assert UTF16Text("hello wORLD\tagain").capitalize() == "Hello World\tAgain"
    assert UTF16Text("abc").upper(LocaleMode.SYSTEM) == "ABC"


def test_turkic_case_mapping() -> None:
    assert UTF16Text("istanbul").upper("tr") == "İSTANBUL"
    assert UTF16Text("ISPARTA").lower("tr_TR") == "ısparta"
    assert UTF16Text("istanbul").capitalize("az") == "İstanbul"
    assert UTF16Text("istanbul").upper() == "ISTANBUL"


def test_unrecognized_locale() -> None:
    with pytest.raises(UnrecognizedLocale):
        UTF16Text("abc").upper("not a locale!")


def test_compare_options() -> None:
    assert UTF16Text("a").compare("b") == -1
    assert UTF16Text("b").compare(UTF16Text("a")) == 1
    assert UTF16Text("ABC").compare("abc", CompareOption.CASE_INSENSITIVE) == 0
    assert UTF16Text("file10").compare("file9") == -1
    assert UTF16Text("file10").compare("file9", CompareOption.NUMERIC) == 1
    assert UTF16Text("café").compare("cafe", CompareOption.DIACRITIC_INSENSITIVE) == 0
    assert UTF16Text("ＡＢＣ").compare("ABC", CompareOption.WIDTH_INSENSITIVE) == 0
    assert UTF16Text("\u00e9").compare("e\u0301") == 0
    assert UTF16Text("\u00e9").compare("e\u0301", CompareOption.LITERAL) != 0
    assert UTF16Text("abc").compare("ABC", ["caseInsensitive", "forcedOrdering"]) == 1


def test_finder_file_order_sorts_like_a_file_browser() -> None:
    from functools import cmp_to_key

    names = [UTF16Text(name) for name in ["file10", "File2", "file1"]]
    ordered = sorted(names, key=cmp_to_key(lambda a, b: a.compare(b, CompareOption.FINDER_FILE_ORDER)))
    assert [str(name) for name in ordered] == ["file1", "File2", "file10"]


def test_operators() -> None:
    assert UTF16Text("a") < "b"
    assert UTF16Text("b") >= UTF16Text("a")
    assert UTF16Text("x") == "x"
    assert hash(UTF16Text("x")) == hash("x")
    assert UTF16Text("a") + "b" == "ab"
    assert "x" + UTF16Text("y") == UTF16Text("xy")
    assert UTF16Text("v") + 5 == "v5"
    assert str(UTF16Text(EMOJI)) == EMOJI


def test_normalization() -> None:
    assert UTF16Text("e\u0301").unicode_composition() == "\u00e9"
    assert len(UTF16Text("\u00e9").unicode_decomposition()) == 2
    assert UTF16Text("ﬁ").unicode_decomposition() == "ﬁ"
    assert UTF16Text("ﬁ").unicode_decomposition(True) == "fi"
    assert UTF16Text("ﬁ").unicode_composition(True) == "fi"
