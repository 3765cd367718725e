import pytest

from boltserve.constants import CACHE_LINE_SIZE, align, cache_align


@pytest.mark.parametrize("alignment", [1, 2, 8, 64, 4096])
@pytest.mark.parametrize("size", [0, 1, 7, 63, 64, 65, 1000, 4097])
def test_align_is_smallest_multiple_not_below_size(size, alignment):
    result = align(size, alignment)
    assert result % alignment == 0
    assert result >= size
    assert result - size < alignment


@pytest.mark.parametrize("size", [0, 64, 128, 4096])
def test_align_keeps_exact_multiples(size):
    assert align(size, 64) == size


def test_align_rounds_up_to_next_block():
    assert align(100, 64) == 128


@pytest.mark.parametrize("size", [0, 1, 63, 64, 65, 500])
def test_cache_align_uses_cache_line(size):
    result = cache_align(size)
    assert result % CACHE_LINE_SIZE == 0
    assert size <= result < size + CACHE_LINE_SIZE