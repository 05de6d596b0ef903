from __future__ import annotations

import math

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from brickwall.render.renderer import MARGIN, compute_pitch
from brickwall.render.shapes import SHAPES


@pytest.mark.parametrize(
    "w,h,n,ratio,expected",
    [
        # width-bound: floor(360/32)=11 -> 10
        (400, 2000, 32, 1.0, 10),
        # height-bound square: floor(160/10)=16
        (1000, 200, 10, 1.0, 16),
        # height-bound rect: floor(160/10)=16 -> 16/0.5=32
        (1000, 200, 10, 0.5, 32),
        # hexagon: floor(109-40)/10=6 -> floor(6/0.75)=8
        (1000, 109, 10, 0.75, 8),
        # exact multiple stays put: 9/0.75 = 12
        (1000, 130, 10, 0.75, 12),
    ],
)
def test_compute_pitch_examples(w: int, h: int, n: int, ratio: float, expected: int) -> None:
    assert compute_pitch(w, h, n, ratio) == expected


@pytest.mark.parametrize("w,h", [(40, 40), (10, 500), (500, 10), (41, 1000), (0, 0)])
def test_degenerate_viewports_yield_zero(w: int, h: int) -> None:
    assert compute_pitch(w, h, 32, 1.0) == 0


def test_odd_pitch_rounds_down_to_even() -> None:
    # floor((200-40)/10)=16 width, 17 would be odd
    assert compute_pitch(40 + 17 * 4, 1000, 4, 1.0) == 16


def test_custom_margin() -> None:
    assert compute_pitch(100, 100, 5, 1.0, margin=0) == 20
    assert compute_pitch(100, 100, 5, 1.0, margin=10) == 16


@settings(deadline=None, max_examples=300)
@given(
    w=st.integers(min_value=0, max_value=4000),
    h=st.integers(min_value=0, max_value=4000),
    n=st.integers(min_value=1, max_value=200),
    shape=st.sampled_from(sorted(SHAPES)),
)
def test_pitch_is_even_and_fits(w: int, h: int, n: int, shape: str) -> None:
    ratio = SHAPES[shape].ratio
    pitch = compute_pitch(w, h, n, ratio)
    assert pitch >= 0
    assert pitch % 2 == 0
    if pitch == 0:
        return
    assert pitch * n + 2 * MARGIN <= w
    assert pitch * ratio <= math.floor((h - 2 * MARGIN) / n)
    assert pitch * ratio * n + 2 * MARGIN <= h
    # largest even pitch: the next even value breaks one of the bounds
    nxt = pitch + 2
    assert (
        nxt > math.floor((w - 2 * MARGIN) / n)
        or nxt * ratio > math.floor((h - 2 * MARGIN) / n)
    )
