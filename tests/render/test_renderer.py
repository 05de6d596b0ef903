from __future__ import annotations

from typing import Any

import pytest

from brickwall.core.grid import Grid
from brickwall.core.rules import TableRule, run_wall
from brickwall.core.time import SimTimeSource
from brickwall.render.legend import InfoBox
from brickwall.render.renderer import WallRenderer
from brickwall.render.shapes import make_shape

A = (255, 255, 224, 255)
B = (72, 61, 139, 255)
C = (240, 128, 128, 255)
PALETTE = [A, B, C]
RULE = TableRule([[0, 2, 1], [2, 1, 0], [1, 0, 2]])


def build(
    display: Any,
    *,
    size: int = 3,
    delay_ms: float = 10.0,
    shape: str = "square",
    ts: SimTimeSource | None = None,
) -> tuple[WallRenderer, Grid, SimTimeSource]:
    ts = ts or SimTimeSource()
    grid = Grid(size, PALETTE, 0, delay_ms, now=ts.monotonic())
    r = WallRenderer(display, grid, make_shape(shape), ts)
    return r, grid, ts


def fills(canvas: Any) -> list[Any]:
    return [fill for _pts, fill, _outline in canvas.of("polygon")]


def test_construction_configures_but_does_not_paint(make_display) -> None:
    display = make_display((400, 300))
    r, _grid, _ts = build(display)
    # min(floor(360/3)=120, floor(260/3)=86) -> 86
    assert r.cell_pitch == 86
    assert display.frames == []


def test_frame_paints_every_cell_once_with_background(make_display) -> None:
    display = make_display((400, 300))
    r, _grid, _ts = build(display, size=4)
    r.frame(0.0)
    canvas = display.last
    assert canvas.calls[0] == ("clear", r.background)
    assert len(canvas.of("polygon")) == 4 * 5 // 2
    assert set(fills(canvas)) == {A}


def test_anchor_staggers_rows_by_half_pitch(make_display) -> None:
    display = make_display((1000, 1000))
    r, _grid, _ts = build(display, size=4, shape="hexagon")
    p = r.cell_pitch
    assert p % 2 == 0
    assert r.anchor(0, 0) == (20, 20)
    assert r.anchor(0, 2) == (20 + 2 * p, 20)
    assert r.anchor(1, 0) == (20 + p / 2, 20 + p * 0.75)
    assert r.anchor(3, 0) == (20 + 3 * p / 2, 20 + 3 * p * 0.75)


def test_polygons_follow_row_major_walk(make_display) -> None:
    display = make_display((400, 400))
    r, _grid, _ts = build(display, size=3, shape="square")
    r.frame(0.0)
    shape = r.shape
    expected = [
        shape.vertices(*r.anchor(row, col), r.cell_pitch)
        for row in range(3)
        for col in range(3 - row)
    ]
    assert [pts for pts, _f, _o in display.last.of("polygon")] == expected


def test_animation_drains_and_reschedules_until_settled(make_display) -> None:
    display = make_display((400, 300))
    r, grid, ts = build(display, delay_ms=10.0)
    run_wall(grid, RULE, [0, 1, 2])
    grid.mark_start(ts.monotonic())
    r.frame(ts.monotonic())
    # first frame: no time has elapsed, nothing shown yet, follow-up pending
    assert set(fills(display.last)) == {A}
    assert r.frame_scheduled
    assert ts.next_due_monotonic() == pytest.approx(0.010)

    steps = ts.run_until_idle()
    assert steps == 6
    assert not grid.busy
    assert not r.frame_scheduled
    assert grid.displayed_snapshot() == ((0, 1, 2), (2, 0), (1,))
    # row-major fills of the last frame: row0 A B C, row1 C A, row2 B
    assert fills(display.last) == [A, B, C, C, A, B]
    assert len(display.frames) == 7


def test_irregular_polling_catches_up(make_display) -> None:
    display = make_display((400, 300))
    r, grid, _ts = build(display, delay_ms=10.0)
    run_wall(grid, RULE, [0, 1, 2])
    grid.mark_start(0.0)
    r.cancel()
    # host throttled: one late frame at 45 ms releases ceil(4.5) = 5
    r.frame(0.045)
    assert grid.pending == 1


def test_no_reschedule_once_settled(make_display) -> None:
    display = make_display((400, 300))
    r, grid, ts = build(display, delay_ms=10.0)
    r.frame(0.0)
    assert not r.frame_scheduled
    assert ts.next_due_monotonic() is None


def test_zero_delay_reveals_in_first_frame(make_display) -> None:
    display = make_display((400, 300))
    r, grid, ts = build(display, delay_ms=0.0)
    run_wall(grid, RULE, [2, 2, 0])
    r.frame(0.0)
    assert not grid.busy
    assert not r.frame_scheduled
    assert grid.displayed_snapshot() == grid.snapshot()


def test_resize_before_animation_reconfigures_and_repaints_once(make_display) -> None:
    display = make_display((400, 300))
    r, grid, ts = build(display)
    old = r.cell_pitch
    r.on_viewport_resize(800, 800)
    assert display.size() == (800, 800)
    assert r.cell_pitch != old
    assert r.cell_pitch == 252  # min(floor(760/3)=253, 253) -> 252
    assert len(display.frames) == 1
    assert not r.frame_scheduled


def test_resize_during_animation_keeps_single_pending_frame(make_display) -> None:
    display = make_display((400, 300))
    r, grid, ts = build(display, delay_ms=10.0)
    run_wall(grid, RULE, [0, 1, 2])
    grid.mark_start(0.0)
    r.frame(0.0)
    r.on_viewport_resize(500, 500)
    r.on_viewport_resize(600, 600)
    assert ts.pending() == 1
    ts.run_until_idle()
    assert not grid.busy


def test_degenerate_viewport_paints_nothing(make_display) -> None:
    display = make_display((30, 30))
    r, grid, ts = build(display, delay_ms=0.0)
    assert r.cell_pitch == 0
    run_wall(grid, RULE, [0, 1, 2])
    r.frame(0.0)
    assert display.last.of("polygon") == []
    # the queue still drains so the state is correct once the window grows
    assert not grid.busy


def test_reset_between_frames_is_tolerated(make_display) -> None:
    display = make_display((400, 300))
    r, grid, ts = build(display, delay_ms=10.0)
    run_wall(grid, RULE, [0, 1, 2])
    grid.mark_start(0.0)
    r.frame(0.0)
    grid.reset()
    ts.advance(0.010)
    # the stale frame ran on the reset grid and stopped rescheduling
    assert set(fills(display.last)) == {A}
    assert not r.frame_scheduled


def test_set_shape_reconfigures(make_display) -> None:
    display = make_display((1000, 300))
    r, grid, ts = build(display, shape="square")
    sq = r.cell_pitch
    r.set_shape(make_shape("rect"))
    assert r.shape.name == "rect"
    assert r.cell_pitch > sq
    assert len(display.frames) == 1


def test_legend_drawn_after_cells_and_toggleable(make_display) -> None:
    display = make_display((800, 600))
    ts = SimTimeSource()
    grid = Grid(3, PALETTE, 0, 10.0)
    legend = InfoBox(3, 10.0, PALETTE, RULE)
    r = WallRenderer(display, grid, make_shape("square"), ts, legend=legend)
    r.frame(0.0)
    names = [name for name, _ in display.last.calls]
    assert "text" in names
    assert names.index("text") > max(
        i for i, n in enumerate(names[:7]) if n == "polygon"
    )
    r.toggle_legend()
    assert display.last.of("text") == []
