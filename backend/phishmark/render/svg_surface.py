"""SvgSurface — drawing surface that builds an SVG document from draw intents.

Curves are uniform Catmull-Rom splines through every point, with the first and
last vertices duplicated so the curve starts and ends on them, converted to
cubic Bézier segments. Consecutive intents sharing a translation are grouped
under one ``<g transform="translate(...)">``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from phishmark.engine.palettes import Color
from phishmark.engine.surface import DrawIntent, Pen, Point, SurfaceBase
from phishmark.render.serializer import fmt, serialize_svg


def catmull_rom_path(points: Sequence[Point]) -> str:
    """SVG path data for a Catmull-Rom spline through points (tension 0)."""
    if len(points) < 2:
        return ""
    padded = [points[0], *points, points[-1]]
    parts = [f"M{fmt(points[0][0])} {fmt(points[0][1])}"]
    for i in range(1, len(padded) - 2):
        p0, p1, p2, p3 = padded[i - 1], padded[i], padded[i + 1], padded[i + 2]
        c1x = p1[0] + (p2[0] - p0[0]) / 6
        c1y = p1[1] + (p2[1] - p0[1]) / 6
        c2x = p2[0] - (p3[0] - p1[0]) / 6
        c2y = p2[1] - (p3[1] - p1[1]) / 6
        parts.append(
            f"C{fmt(c1x)} {fmt(c1y)} {fmt(c2x)} {fmt(c2y)} {fmt(p2[0])} {fmt(p2[1])}"
        )
    return " ".join(parts)


def _paint(pen: Pen) -> dict[str, Any]:
    attrs: dict[str, Any] = {}
    attrs.update(_color_attrs("fill", pen.fill))
    attrs.update(_color_attrs("stroke", pen.stroke))
    if pen.stroke is not None:
        attrs["stroke-width"] = fmt(pen.stroke_width)
        attrs["stroke-linecap"] = "butt"
    return attrs


def _color_attrs(prefix: str, color: Color | None) -> dict[str, Any]:
    if color is None:
        return {prefix: "none"}
    attrs: dict[str, Any] = {prefix: color.to_hex()}
    if color.opacity < 1.0:
        attrs[f"{prefix}-opacity"] = fmt(color.opacity)
    return attrs


def intent_element(intent: DrawIntent) -> dict[str, Any] | None:
    """SVG element dict for one intent, ignoring its translation."""
    paint = _paint(intent.pen)
    if intent.kind == "curve":
        d = catmull_rom_path(intent.points)
        if not d:
            return None
        return {"tag": "path", "d": d, **paint}

    (x, y) = intent.points[0]
    if intent.kind == "circle":
        return {"tag": "circle", "cx": fmt(x), "cy": fmt(y), "r": fmt(intent.size / 2), **paint}

    if intent.kind == "square":
        half = intent.size / 2
        elem: dict[str, Any] = {
            "tag": "rect",
            "x": fmt(-half),
            "y": fmt(-half),
            "width": fmt(intent.size),
            "height": fmt(intent.size),
        }
        transform = f"translate({fmt(x)} {fmt(y)})"
        if intent.rotation:
            transform += f" rotate({fmt(math.degrees(intent.rotation))})"
        elem["transform"] = transform
        elem.update(paint)
        return elem

    raise ValueError(f"Unknown draw intent: {intent.kind}")


class SvgSurface(SurfaceBase):
    """Collects draw intents as SVG elements."""

    def __init__(self, width: float, height: float) -> None:
        super().__init__(width, height)
        self.elements: list[dict[str, Any]] = []
        self.intent_count = 0
        self._group_offset: Point | None = None

    def _emit(self, intent: DrawIntent) -> None:
        elem = intent_element(intent)
        if elem is None:
            return
        self.intent_count += 1

        if intent.offset == (0.0, 0.0):
            self.elements.append(elem)
            self._group_offset = None
            return

        if self._group_offset != intent.offset:
            dx, dy = intent.offset
            self.elements.append({"tag": "g", "transform": f"translate({fmt(dx)} {fmt(dy)})", "children": []})
            self._group_offset = intent.offset
        self.elements[-1]["children"].append(elem)

    def to_svg(self, title: str = "") -> str:
        background = self.background_color.to_hex() if self.background_color else None
        return serialize_svg(self.elements, self.width, self.height, background=background, title=title)
