from __future__ import annotations

import pytest

from stonerview.utils import NumpyRandomSource, ScriptedRandomSource, trunc_div


def test_numpy_source_is_inclusive_on_both_ends() -> None:
    rng = NumpyRandomSource(0)
    draws = {rng.rand_range(2, 5) for _ in range(400)}
    assert draws == {2, 3, 4, 5}


def test_numpy_source_is_reproducible() -> None:
    a = NumpyRandomSource(77)
    b = NumpyRandomSource(77)
    assert [a.rand_range(0, 1000) for _ in range(20)] == [b.rand_range(0, 1000) for _ in range(20)]


@pytest.mark.parametrize("low, high", [(3, 3), (5, 2), (0, -1)])
def test_degenerate_range_returns_low_without_drawing(low, high) -> None:
    rng = ScriptedRandomSource([])
    assert rng.rand_range(low, high) == low
    assert rng.consumed == 0
    assert NumpyRandomSource(1).rand_range(low, high) == low


def test_scripted_source_clamps_and_exhausts() -> None:
    rng = ScriptedRandomSource([7, -3, 2])
    assert rng.rand_range(0, 4) == 4
    assert rng.rand_range(0, 4) == 0
    assert rng.rand_range(0, 4) == 2
    assert rng.consumed == 3
    with pytest.raises(IndexError):
        rng.rand_range(0, 4)


@pytest.mark.parametrize(
    "numerator, denominator, expected",
    [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (0, 5, 0), (10, 3, 3)],
)
def test_trunc_div_rounds_toward_zero(numerator, denominator, expected) -> None:
    assert trunc_div(numerator, denominator) == expected


def test_trunc_div_by_zero_raises() -> None:
    with pytest.raises(ZeroDivisionError):
        trunc_div(4, 0)
