from __future__ import annotations

import argparse

import pytest
from pydantic import ValidationError

from brickwall.config import make_wall_config
from brickwall.settings.schema import Settings
from brickwall.settings.store import SettingsStore


def test_defaults_without_args() -> None:
    cfg = make_wall_config()
    assert cfg.size == 32
    assert cfg.delay_ms == 10.0
    assert cfg.shape == "hexagon"
    assert cfg.margin == 20
    assert cfg.background == (255, 255, 255, 255)
    assert (cfg.width, cfg.height) == (1024, 768)


def test_persisted_settings_are_used() -> None:
    SettingsStore.save(Settings(size=9, shape="square", show_legend=False))
    cfg = make_wall_config()
    assert cfg.size == 9
    assert cfg.shape == "square"
    assert cfg.show_legend is False


def test_cli_overrides_win() -> None:
    SettingsStore.save(Settings(size=9))
    args = argparse.Namespace(
        size=5, delay_ms=0.0, shape="rect", seed=3, width=640, height=None, no_legend=True
    )
    cfg = make_wall_config(args=args)
    assert (cfg.size, cfg.delay_ms, cfg.shape, cfg.seed) == (5, 0.0, "rect", 3)
    assert cfg.width == 640 and cfg.height == 768
    assert cfg.show_legend is False
    # persisted value untouched
    assert SettingsStore.load().size == 9


def test_invalid_override_raises() -> None:
    with pytest.raises(ValidationError):
        make_wall_config(args=argparse.Namespace(size=0))
