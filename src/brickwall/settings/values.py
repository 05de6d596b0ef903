"""Centralized default values loaded from YAML.

The master source is ``values.yml`` in this package. On import we load and
parse it; a missing or malformed file (or section) falls back to the
hard-coded literals below, which mirror the shipped YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

RGBA = Tuple[int, int, int, int]

# --- Fallback literals ---------------------------------------------------
_FALLBACK_WALL: Dict[str, Any] = {
    "size": 32,
    "delay_ms": 10.0,
    "initial_color": 0,
    "shape": "hexagon",
    "margin": 20,
}
_FALLBACK_PALETTE: List[Tuple[str, RGBA]] = [
    ("lightyellow", (255, 255, 224, 255)),
    ("darkslateblue", (72, 61, 139, 255)),
    ("lightcoral", (240, 128, 128, 255)),
]
_FALLBACK_RULES: List[List[int]] = [[0, 2, 1], [2, 1, 0], [1, 0, 2]]
_FALLBACK_THEME: Dict[str, Any] = {
    "colors": {
        "background": [255, 255, 255, 255],
        "outline": [0, 0, 0, 255],
        "legend_bg": [255, 255, 255, 230],
        "legend_fg": [0, 0, 0, 255],
    }
}
_FALLBACK_WINDOW: Dict[str, int] = {"width": 1024, "height": 768}


def _rgba(v: object) -> RGBA | None:
    if (
        isinstance(v, (list, tuple))
        and len(v) in (3, 4)
        and all(isinstance(c, int) and 0 <= c <= 255 for c in v)
    ):
        a = v[3] if len(v) == 4 else 255
        return (int(v[0]), int(v[1]), int(v[2]), int(a))
    return None


def _load(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s, using built-in defaults: %s", path, e)
        return {}
    if not isinstance(raw, dict):
        logger.warning("%s is not a mapping, using built-in defaults", path)
        return {}
    return raw


_wall: Dict[str, Any] = dict(_FALLBACK_WALL)
_palette: List[Tuple[str, RGBA]] = list(_FALLBACK_PALETTE)
_rules: List[List[int]] = [list(r) for r in _FALLBACK_RULES]
_theme: Dict[str, Any] = {"colors": dict(_FALLBACK_THEME["colors"])}
_window: Dict[str, int] = dict(_FALLBACK_WINDOW)

_raw = _load(_YAML_PATH)

wall = _raw.get("wall")
if isinstance(wall, dict):
    for k in ("size", "initial_color", "margin"):
        if isinstance(wall.get(k), int):
            _wall[k] = int(wall[k])
    if isinstance(wall.get("delay_ms"), (int, float)):
        _wall["delay_ms"] = float(wall["delay_ms"])
    if isinstance(wall.get("shape"), str):
        _wall["shape"] = wall["shape"]

pal = _raw.get("palette")
if isinstance(pal, list):
    cleaned: List[Tuple[str, RGBA]] = []
    for i, entry in enumerate(pal):
        if not isinstance(entry, dict):
            continue
        c = _rgba(entry.get("rgba"))
        if c is None:
            continue
        cleaned.append((str(entry.get("name", f"color{i}")), c))
    if cleaned:
        _palette = cleaned

rules = _raw.get("rules")
if isinstance(rules, list) and all(
    isinstance(r, list) and all(isinstance(v, int) for v in r) for r in rules
):
    _rules = [list(r) for r in rules]

theme = _raw.get("theme")
if isinstance(theme, dict) and isinstance(theme.get("colors"), dict):
    for k, v in theme["colors"].items():
        if _rgba(v) is not None:
            _theme["colors"][k] = list(v)

win = _raw.get("window")
if isinstance(win, dict):
    for k in ("width", "height"):
        if isinstance(win.get(k), int) and win[k] > 0:
            _window[k] = int(win[k])


def theme_color(key: str) -> RGBA:
    """Return a theme color as an RGBA tuple."""
    c = _rgba(_theme["colors"].get(key))
    if c is None:
        c = _rgba(_FALLBACK_THEME["colors"].get(key))
    if c is None:
        raise KeyError(key)
    return c


# --- Public accessors ----------------------------------------------------
WALL_DEFAULTS: Dict[str, Any] = dict(_wall)
PALETTE_NAMES: Sequence[str] = tuple(name for name, _ in _palette)
PALETTE: Sequence[RGBA] = tuple(c for _, c in _palette)
RULES: Sequence[Sequence[int]] = tuple(tuple(r) for r in _rules)
THEME: Dict[str, Any] = dict(_theme)
WINDOW_SIZE: Tuple[int, int] = (_window["width"], _window["height"])

__all__ = [
    "WALL_DEFAULTS",
    "PALETTE_NAMES",
    "PALETTE",
    "RULES",
    "THEME",
    "WINDOW_SIZE",
    "theme_color",
]
