from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Sequence, Tuple

import pytest

# Headless pygame for every test that touches the real backend
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class RecordingCanvas:
    """Canvas double that records every primitive call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def clear(self, color: Any) -> None:
        self.calls.append(("clear", color))

    def polygon(
        self,
        pts: Sequence[Tuple[float, float]],
        fill: Any,
        outline: Any = None,
        width: int = 1,
    ) -> None:
        self.calls.append(("polygon", (list(pts), fill, outline)))

    def line(self, p0: Any, p1: Any, width: int = 1, color: Any = None) -> None:
        self.calls.append(("line", (p0, p1, color)))

    def circle(self, center: Any, radius: int, width: int = 1, color: Any = None) -> None:
        self.calls.append(("circle", (center, radius, color)))

    def filled_circle(self, center: Any, radius: int, color: Any) -> None:
        self.calls.append(("filled_circle", (center, radius, color)))

    def text(self, pos: Any, s: str, size_px: int = 12, color: Any = None) -> None:
        self.calls.append(("text", (pos, s)))

    def of(self, kind: str) -> list[Any]:
        return [args for name, args in self.calls if name == kind]


class RecordingDisplay:
    """DisplayBackend double keeping the canvas of each finished frame."""

    def __init__(self, size: Tuple[int, int] = (400, 300)) -> None:
        self._size = size
        self.frames: list[RecordingCanvas] = []
        self._current: RecordingCanvas | None = None

    def size(self) -> Tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)

    def begin_frame(self) -> RecordingCanvas:
        self._current = RecordingCanvas()
        return self._current

    def end_frame(self) -> None:
        assert self._current is not None
        self.frames.append(self._current)
        self._current = None

    def save_png(self, path: str) -> None:  # pragma: no cover - unused
        raise NotImplementedError

    @property
    def last(self) -> RecordingCanvas:
        return self.frames[-1]


@pytest.fixture(autouse=True)
def brickwall_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the settings store at an empty per-test directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("BRICKWALL_HOME", str(home))
    return home


@pytest.fixture
def recording_display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def make_display() -> Any:
    def _make(size: Tuple[int, int] = (400, 300)) -> RecordingDisplay:
        return RecordingDisplay(size)

    return _make


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()
