import pytest

from unitext.utf16.clusters import cluster_boundaries, composed_range, split_clusters
from unitext.utf16.surrogates import codepoint_for_pair, is_high_surrogate, is_low_surrogate, pair_for_codepoint


@pytest.mark.parametrize("unit", [0xD800, 0xDA00, 0xDBFF])
def test_high_surrogates(unit: int):
    assert is_high_surrogate(unit)
    assert not is_low_surrogate(unit)


@pytest.mark.parametrize("unit", [0xDC00, 0xDE00, 0xDFFF])
def test_low_surrogates(unit: int):
    assert is_low_surrogate(unit)
    assert not is_high_surrogate(unit)


@pytest.mark.parametrize("unit", [0x0041, 0xD7FF, 0xE000, 0xFFFF])
def test_non_surrogates(unit: int):
    assert not is_high_surrogate(unit)
    assert not is_low_surrogate(unit)


def test_pair_conversion():
    assert pair_for_codepoint(0x1F600) == (0xD83D, 0xDE00)
    assert codepoint_for_pair(0xD83D, 0xDE00) == 0x1F600
    assert pair_for_codepoint(0x10000) == (0xD800, 0xDC00)
    assert pair_for_codepoint(0x10FFFF) == (0xDBFF, 0xDFFF)


@pytest.mark.parametrize("codepoint", [0x41, 0xFFFF, 0x110000, -1])
def test_pair_for_codepoint_outside_supplementary_planes(codepoint: int):
    assert pair_for_codepoint(codepoint) is None


def test_codepoint_for_invalid_pair():
    assert codepoint_for_pair(0xDE00, 0xD83D) is None
    assert codepoint_for_pair(0x41, 0xDC00) is None


def test_cluster_boundaries_use_unit_offsets():
    text = "e\u0301😀x"
    starts = [0, 1, 2, 4, 5]
    assert split_clusters(text) == ["e\u0301", "😀", "x"]
    boundaries = cluster_boundaries(text, starts)
    assert boundaries == [0, 2, 4, 5]
    assert composed_range(boundaries, 1, 1) == (0, 2)
    assert composed_range(boundaries, 3, 4) == (2, 5)
