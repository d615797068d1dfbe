from hypothesis import given, strategies as st

from unitext import Pattern, UTF16Text, codepoint_for_pair, pair_for_codepoint

_bases = st.sampled_from(["a", "Z", "7", " ", "é", "ß", "€", "中", "😀", "𝔘"])
_marks = st.sampled_from(["", "\u0301", "\u0308"])
_clusters = st.builds(lambda base, mark: base + mark, _bases, _marks)
_texts = st.lists(_clusters, max_size=16).map("".join)


@given(_texts)
def test_reverse_twice_is_identity(text: str) -> None:
    buffer = UTF16Text(text)
    assert buffer.reverse().reverse() == buffer


@given(_texts)
def test_units_round_trip(text: str) -> None:
    buffer = UTF16Text(text)
    assert UTF16Text.from_units(buffer.units) == buffer
    assert UTF16Text.from_bytes(buffer.encode()) == buffer


@given(_texts.filter(bool), st.data())
def test_composed_range_covers_request_and_is_stable(text: str, data: st.DataObject) -> None:
    buffer = UTF16Text(text)
    i = data.draw(st.integers(min_value=1, max_value=len(buffer)))
    j = data.draw(st.integers(min_value=1, max_value=len(buffer)))
    start, end = buffer.composed_character_range(i, j)
    assert start <= min(i, j) and end >= max(i, j)
    assert buffer.composed_character_range(start, end) == (start, end)


@given(st.integers(min_value=0x10000, max_value=0x10FFFF))
def test_pairs_round_trip(codepoint: int) -> None:
    pair = pair_for_codepoint(codepoint)
    assert pair is not None
    assert codepoint_for_pair(*pair) == codepoint


@given(_texts)
def test_byte_spans_slice_out_match_values(text: str) -> None:
    data = text.encode("utf-8")
    for result in Pattern(r"\X").iter_matches(data):
        start, end = result.span.as_tuple()
        assert data[start - 1 : end] == result.value


@given(_texts)
def test_unit_spans_slice_out_match_values(text: str) -> None:
    buffer = UTF16Text(text)
    for result in Pattern(r"\w+").iter_matches(buffer):
        start, end = result.span.as_tuple()
        assert buffer.sub(start, end) == result.value


@given(_texts)
def test_character_count_matches_offsets(text: str) -> None:
    buffer = UTF16Text(text)
    count = buffer.character_count().count
    assert count == len(text)
    assert buffer.offset(count + 1) == len(buffer) + 1
