"""Runtime configuration helpers.

Merges the packaged defaults (settings.values), the persisted Settings
store and optional CLI overrides into a single WallConfig. CLI values win
for the current session only; nothing is written back to disk here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .settings.schema import RGBA, Settings
from .settings.store import SettingsStore
from .settings.values import WALL_DEFAULTS, WINDOW_SIZE, theme_color

# Settings field -> argparse attribute
_OVERRIDES = {
    "size": "size",
    "delay_ms": "delay_ms",
    "shape": "shape",
    "seed": "seed",
}


@dataclass(slots=True)
class WallConfig:
    size: int
    delay_ms: float
    palette: list[RGBA]
    initial_color: int
    rules: list[list[int]]
    shape: str
    seed: int | None
    show_legend: bool
    width: int = WINDOW_SIZE[0]
    height: int = WINDOW_SIZE[1]
    margin: int = int(WALL_DEFAULTS["margin"])
    background: RGBA = theme_color("background")
    outline: RGBA = theme_color("outline")
    legend_bg: RGBA = theme_color("legend_bg")
    legend_fg: RGBA = theme_color("legend_fg")


def make_wall_config(
    *, args: Optional[object] = None, settings: Settings | None = None
) -> WallConfig:
    """Build a WallConfig from persisted settings and CLI overrides.

    *args* is argparse.Namespace-like; attributes that are missing or None
    leave the persisted value alone. The merged result is re-validated, so
    an override such as ``--size 0`` raises pydantic's ValidationError.
    """
    base = settings if settings is not None else SettingsStore.load()
    data: dict[str, Any] = base.model_dump()
    if args is not None:
        for field, attr in _OVERRIDES.items():
            v = getattr(args, attr, None)
            if v is not None:
                data[field] = v
        if getattr(args, "no_legend", False):
            data["show_legend"] = False
    merged = Settings.model_validate(data)

    cfg = WallConfig(
        size=merged.size,
        delay_ms=merged.delay_ms,
        palette=list(merged.palette),
        initial_color=merged.initial_color,
        rules=[list(r) for r in merged.rules],
        shape=merged.shape,
        seed=merged.seed,
        show_legend=merged.show_legend,
    )
    if args is not None:
        w = getattr(args, "width", None)
        h = getattr(args, "height", None)
        if w is not None:
            cfg.width = int(w)
        if h is not None:
            cfg.height = int(h)
    return cfg
