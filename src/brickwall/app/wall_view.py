"""Wall viewer (application entrypoint).

Provides the interactive asyncio runner ``main_async``, a headless renderer
that drains a whole run on a simulated clock and writes a PNG, and the
argparse parser shared with :mod:`brickwall.cli`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import random
from pathlib import Path

from brickwall.config import WallConfig, make_wall_config
from brickwall.core.grid import Grid
from brickwall.core.rules import TableRule, random_row, run_wall
from brickwall.core.time import RealTimeSource, SimTimeSource, TimeSource
from brickwall.platform.display.pygame_backend import PygameDisplayBackend
from brickwall.platform.input.pygame_input import PygameInputBackend, WallEvent
from brickwall.render.canvas import Color, DisplayBackend
from brickwall.render.legend import InfoBox
from brickwall.render.renderer import WallRenderer
from brickwall.render.shapes import SHAPE_ORDER, SHAPES, make_shape
from brickwall.settings.store import SettingsStore

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class WallApp:
    """Wires one grid, rule and renderer to host callbacks.

    Hosts call :meth:`on_run_requested` and :meth:`on_viewport_resize`;
    :meth:`handle` maps input-backend events onto them.
    """

    def __init__(
        self,
        cfg: WallConfig,
        display: DisplayBackend,
        ts: TimeSource,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.cfg = cfg
        self._ts = ts
        self._rng = rng if rng is not None else random.Random(cfg.seed)
        self.rule = TableRule(cfg.rules)
        self.grid: Grid[Color] = Grid(
            cfg.size, cfg.palette, cfg.initial_color, cfg.delay_ms, now=ts.monotonic()
        )
        legend = InfoBox(
            cfg.size,
            cfg.delay_ms,
            cfg.palette,
            self.rule,
            bg=cfg.legend_bg,
            fg=cfg.legend_fg,
        )
        self.renderer = WallRenderer(
            display,
            self.grid,
            make_shape(cfg.shape, outline=cfg.outline),
            ts,
            margin=cfg.margin,
            background=cfg.background,
            legend=legend,
        )
        self.renderer.show_legend = cfg.show_legend
        self.runs = 0

    def on_run_requested(self) -> None:
        """Start a new run with a random top row and animate it."""
        row0 = random_row(self.grid.size, len(self.grid.palette), self._rng)
        run_wall(self.grid, self.rule, row0)
        self.runs += 1
        now = self._ts.monotonic()
        self.grid.mark_start(now)
        logger.info("run %d started, %d bricks queued", self.runs, self.grid.pending)
        self.renderer.frame(now)

    def on_viewport_resize(self, width: int, height: int) -> None:
        self.renderer.on_viewport_resize(width, height)

    def cycle_shape(self, *, persist: bool = True) -> str:
        current = self.renderer.shape.name
        idx = SHAPE_ORDER.index(current) if current in SHAPE_ORDER else -1
        name = SHAPE_ORDER[(idx + 1) % len(SHAPE_ORDER)]
        self.renderer.set_shape(make_shape(name, outline=self.cfg.outline))
        self.cfg.shape = name
        logger.info("shape: %s", name)
        if persist:
            self._save(shape=name)
        return name

    def toggle_legend(self, *, persist: bool = True) -> bool:
        self.renderer.toggle_legend()
        shown = self.renderer.show_legend
        self.cfg.show_legend = shown
        if persist:
            self._save(show_legend=shown)
        return shown

    def _save(self, **changes: object) -> None:
        # Start from the stored file so session-only CLI overrides stay unsaved
        settings = SettingsStore.load().model_copy(update=changes)
        SettingsStore.save(settings)

    def handle(self, ev: WallEvent) -> bool:
        """Apply one input event; returns False when the app should quit."""
        if ev.type == "quit":
            return False
        if ev.type == "run":
            self.on_run_requested()
        elif ev.type == "resize":
            self.on_viewport_resize(ev.width, ev.height)
        elif ev.type == "shape":
            self.cycle_shape()
        elif ev.type == "legend":
            self.toggle_legend()
        return True


def _print_help() -> None:
    print("Keys: space/enter or click = new run, s shape, i legend, q/ESC quit")


async def main_async(args: argparse.Namespace) -> None:
    cfg = make_wall_config(args=args)
    ts = RealTimeSource()
    display = PygameDisplayBackend(size=(cfg.width, cfg.height), create_window=True)
    if not display.windowed:
        logger.warning("No window available; use --headless --out to render a PNG")
    inp = PygameInputBackend()
    app = WallApp(cfg, display, ts)
    logger.info("wall n=%d delay=%gms shape=%s", cfg.size, cfg.delay_ms, cfg.shape)

    _print_help()
    app.on_run_requested()
    try:
        running = True
        while running:
            for ev in inp.pump():
                if not app.handle(ev):
                    running = False
                    break
            # Input polling only; frames are paced by the renderer's timers
            await ts.sleep(1.0 / 60.0)
    finally:
        app.renderer.cancel()


def render_headless(cfg: WallConfig, out_path: str | Path) -> WallApp:
    """Render one complete run offscreen and save it as PNG.

    Uses a simulated clock so the full animation drains instantly while
    still going through the same paced frame loop as the live viewer.
    """
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    ts = SimTimeSource()
    display = PygameDisplayBackend(size=(cfg.width, cfg.height), create_window=False)
    app = WallApp(cfg, display, ts)
    app.on_run_requested()
    steps = ts.run_until_idle()
    logger.info("headless run drained in %d frames (%.3fs simulated)", steps, ts.monotonic())
    display.save_png(str(out_path))
    return app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Options left unset (None) fall back to the persisted settings.
    """
    p = argparse.ArgumentParser(description="Brickwall triangular wall viewer")
    p.add_argument("--size", type=int, default=None, help="Bricks in the top row")
    p.add_argument(
        "--delay-ms",
        dest="delay_ms",
        type=float,
        default=None,
        help="Milliseconds per brick update (0 = instant)",
    )
    p.add_argument(
        "--shape",
        choices=sorted(SHAPES),
        default=None,
        help="Brick shape",
    )
    p.add_argument(
        "--seed", type=int, default=None, help="Seed for the random top row"
    )
    p.add_argument("--width", type=int, default=None, help="Window width in px")
    p.add_argument("--height", type=int, default=None, help="Window height in px")
    p.add_argument(
        "--no-legend",
        dest="no_legend",
        action="store_true",
        help="Hide the info box",
    )
    p.add_argument(
        "--headless",
        dest="headless",
        action="store_true",
        help="Render one full run offscreen and save it (see --out)",
    )
    p.add_argument(
        "--out",
        type=str,
        default="wall.png",
        help="PNG path for --headless (default: wall.png)",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    args = p.parse_args(argv)
    for name in ("size", "width", "height"):
        v = getattr(args, name)
        if v is not None and v < 1:
            p.error(f"--{name} must be >= 1")
    if args.delay_ms is not None and args.delay_ms < 0:
        p.error("--delay-ms must be >= 0")
    return args


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level)
    try:
        if args.headless:
            render_headless(make_wall_config(args=args), args.out)
        else:
            asyncio.run(main_async(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
