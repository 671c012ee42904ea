"""Drawing-surface contract — what the engine asks of its compositor.

The engine owns no pixels. It sets a pen (stroke, fill, width) and issues
draw intents: smooth curves through points, circles, optionally rotated
squares, all possibly inside a translated block. SurfaceBase tracks the pen
and translation; concrete surfaces only implement ``_emit``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from phishmark.engine.palettes import Color

Point = tuple[float, float]


@dataclass(frozen=True)
class Pen:
    stroke: Color | None = None
    fill: Color | None = None
    stroke_width: float = 1.0


@dataclass(frozen=True)
class DrawIntent:
    kind: str  # "curve" | "circle" | "square"
    points: tuple[Point, ...]
    pen: Pen
    size: float = 0.0
    rotation: float = 0.0
    offset: Point = (0.0, 0.0)

    @property
    def is_shadow(self) -> bool:
        return self.offset != (0.0, 0.0)


class SurfaceBase:
    """Pen state + translation stack shared by every surface."""

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.background_color: Color | None = None
        self._stroke: Color | None = None
        self._fill: Color | None = None
        self._stroke_width = 1.0
        self._offset: Point = (0.0, 0.0)

    # ── pen ──

    @property
    def pen(self) -> Pen:
        return Pen(stroke=self._stroke, fill=self._fill, stroke_width=self._stroke_width)

    def background(self, color: Color) -> None:
        self.background_color = color

    def set_stroke(self, color: Color, width: float | None = None) -> None:
        self._stroke = color
        if width is not None:
            self._stroke_width = width

    def no_stroke(self) -> None:
        self._stroke = None

    def set_fill(self, color: Color) -> None:
        self._fill = color

    def no_fill(self) -> None:
        self._fill = None

    def set_stroke_width(self, width: float) -> None:
        self._stroke_width = width

    @contextmanager
    def translated(self, dx: float, dy: float) -> Iterator[None]:
        previous = self._offset
        self._offset = (previous[0] + dx, previous[1] + dy)
        try:
            yield
        finally:
            self._offset = previous

    # ── draw intents ──

    def curve(self, points: Sequence[Point]) -> None:
        """Smooth curve through >= 2 points."""
        if len(points) < 2:
            return
        self._emit(DrawIntent("curve", tuple(points), self.pen, offset=self._offset))

    def circle(self, x: float, y: float, diameter: float) -> None:
        self._emit(DrawIntent("circle", ((x, y),), self.pen, size=diameter, offset=self._offset))

    def square(self, x: float, y: float, size: float, rotation: float = 0.0) -> None:
        self._emit(
            DrawIntent("square", ((x, y),), self.pen, size=size, rotation=rotation, offset=self._offset)
        )

    def _emit(self, intent: DrawIntent) -> None:
        raise NotImplementedError


class RecordingSurface(SurfaceBase):
    """Keeps every intent in order. Used for inspection and determinism checks."""

    def __init__(self, width: float = 0.0, height: float = 0.0) -> None:
        super().__init__(width, height)
        self.intents: list[DrawIntent] = []

    def _emit(self, intent: DrawIntent) -> None:
        self.intents.append(intent)

    @property
    def curves(self) -> list[DrawIntent]:
        return [i for i in self.intents if i.kind == "curve" and not i.is_shadow]

    @property
    def shapes(self) -> list[DrawIntent]:
        return [i for i in self.intents if i.kind in ("circle", "square") and not i.is_shadow]
