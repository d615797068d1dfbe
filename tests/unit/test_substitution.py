import pytest

from unitext import (
    ArgumentRangeError,
    InvalidArgumentType,
    InvalidReplacementValue,
    Pattern,
    UTF16Text,
    gsub,
)


def test_template_swaps_captures():
    pattern = Pattern(r"(\w+)@(\w+)")
    assert pattern.gsub(b"alice@example bob@test", "$2:$1") == (b"example:alice test:bob", 2)


def test_swapping_word_pairs():
    pattern = Pattern(r"(\w+)\s*(\w+)")
    assert pattern.gsub(b"hello world from Lua", "$2 $1") == (b"world hello Lua from", 2)
    assert pattern.gsub(UTF16Text("hello world from Lua"), "$2 $1") == (UTF16Text("world hello Lua from"), 2)


def test_whole_match_repeated_once():
    assert Pattern(r"\w+").gsub(b"hello world", "$0 $0", 1) == (b"hello hello world", 1)


def test_template_repeats_captures():
    assert Pattern(r"(\w+)").gsub(b"hello world", "$1 $1") == (b"hello hello world world", 2)
    assert Pattern(r"\d").gsub(b"a1", "<$0>") == (b"a<1>", 1)


def test_lookup_table_keyed_by_first_capture():
    table = {"name": "Ann", "age": 30}
    updated, count = Pattern(r"\$(\w+)").gsub(b"$name is $age, $missing", table)
    assert updated == b"Ann is 30, $missing"
    assert count == 2


def test_lookup_table_keyed_by_whole_match():
    table = {b"cat": UTF16Text("feline"), "pi": 3.5}
    assert Pattern(r"\w+").gsub(b"cat dog pi", table) == (b"feline dog 3.5", 2)


@pytest.mark.parametrize("table", [{"a": True}, {"a": None}, {"a": object()}, {1: "x"}])
def test_lookup_table_rejects_invalid_entries(table):
    with pytest.raises(InvalidReplacementValue):
        Pattern("a").gsub(b"zzz", table)


def test_callback_receives_captures_in_input_type():
    seen = []

    def double(digits):
        seen.append(digits)
        return str(int(digits) * 2)

    assert Pattern(r"(\d+)").gsub(b"1 2 30", double) == (b"2 4 60", 3)
    assert seen == [b"1", b"2", b"30"]

    units = Pattern(r"\w+").gsub(UTF16Text("ab cd"), lambda word: word.upper())
    assert units == (UTF16Text("AB CD"), 2)


def test_callback_none_leaves_match_unreplaced():
    replace = lambda word: None if word == b"keep" else word.upper()  # noqa: E731
    assert Pattern(r"\w+").gsub(b"keep drop", replace) == (b"keep DROP", 1)


def test_callback_numbers_are_converted():
    assert Pattern(r"\d").gsub(b"a1b2", lambda digit: int(digit) + 1) == (b"a2b3", 2)


def test_callback_unmatched_capture_is_empty():
    pattern = Pattern(r"(a)|(b)")
    updated, count = pattern.gsub(b"ab", lambda first, second: b"[" + first + b"|" + second + b"]")
    assert updated == b"[a|][|b]"
    assert count == 2


def test_callback_invalid_result():
    with pytest.raises(InvalidReplacementValue):
        Pattern("a").gsub(b"a", lambda match: True)
    with pytest.raises(InvalidReplacementValue):
        Pattern("a").gsub(b"a", lambda match: ["list"])


def test_callback_errors_propagate():
    def explode(match):
        raise ZeroDivisionError("boom")

    with pytest.raises(ZeroDivisionError):
        Pattern("a").gsub(b"xa", explode)


def test_template_escapes():
    assert Pattern(r"(\d)").gsub(b"5", r"\$1=$1") == (b"$1=5", 1)
    assert Pattern("a").gsub(b"a", "$x") == (b"$x", 1)
    assert Pattern("a").gsub(b"a", "cost$") == (b"cost$", 1)
    assert Pattern("a").gsub(b"a", r"\\") == (b"\\", 1)


def test_template_reference_is_greedy_within_capture_count():
    ten = Pattern("(a)(b)(c)(d)(e)(f)(g)(h)(i)(j)")
    assert ten.gsub(b"abcdefghij", "$10") == (b"j", 1)
    assert Pattern("(a)").gsub(b"a", "$10") == (b"a0", 1)


def test_template_reference_beyond_captures():
    with pytest.raises(ArgumentRangeError):
        Pattern("(a)").gsub(b"zzz", "$2")


def test_named_template_reference():
    assert Pattern(r"(?P<word>\w+)").gsub(b"hi", "<${word}>") == (b"<hi>", 1)
    with pytest.raises(ArgumentRangeError):
        Pattern(r"(?P<word>\w+)").gsub(b"hi", "${other}")


def test_max_count():
    assert Pattern(r"\d").gsub(b"1 2 3", "#", 0) == (b"1 2 3", 0)
    assert Pattern(r"\d").gsub(b"1 2 3", "#", 2) == (b"# # 3", 2)


def test_max_count_ignores_unreplaced_matches():
    table = {"b": "B", "c": "C"}
    assert Pattern(r"\w").gsub(b"abc", table, 1) == (b"aBc", 1)


def test_multibyte_replacements_keep_offsets_straight():
    updated, count = Pattern("é").gsub("café é!".encode("utf-8"), "e")
    assert updated == b"cafe e!"
    assert count == 2
    assert Pattern("e").gsub(b"eee", "€") == ("€€€".encode("utf-8"), 3)


def test_unit_substitution_returns_buffer():
    updated, count = Pattern("b").gsub(UTF16Text("a😀b😀b"), "😀")
    assert isinstance(updated, UTF16Text)
    assert updated == "a😀😀😀😀"
    assert len(updated) == 9
    assert count == 2


def test_empty_matches_are_replaced_between_characters():
    assert Pattern("x*").gsub(b"ab", "-") == (b"-a-b-", 3)


def test_module_level_gsub():
    assert gsub(Pattern("a"), b"aa", "b", 1) == (b"ba", 1)


def test_unsupported_replacement_type():
    with pytest.raises(InvalidReplacementValue):
        Pattern("a").gsub(b"a", 42)


def test_str_subject_rejected():
    with pytest.raises(InvalidArgumentType):
        Pattern("a").gsub("a", "b")
