"""Shared drawing steps for the layouts: crossing coin, standard and curl curves, shapes."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from phishmark.engine.colors import ColorAssigner
from phishmark.engine.context import GeneratorState
from phishmark.engine.params import ShapeKind
from phishmark.engine.rng import RandomStream
from phishmark.engine.surface import Point, SurfaceBase
from phishmark.engine.tracer import trace_curl, trace_standard


@dataclass
class DrawContext:
    """What a layout needs: the frozen state, the live random stream, and the surface."""

    state: GeneratorState
    stream: RandomStream
    surface: SurfaceBase
    colors: ColorAssigner

    @classmethod
    def create(cls, state: GeneratorState, stream: RandomStream, surface: SurfaceBase) -> DrawContext:
        return cls(state=state, stream=stream, surface=surface, colors=ColorAssigner(state, stream))


def crossed_offset(ctx: DrawContext, angle_offset: float) -> float:
    """Angle offset for the next standard curve.

    The coin is drawn for every curve, crossed or not.
    """
    coin = ctx.stream.random() < 0.5
    if coin and ctx.state.style.crossed:
        return angle_offset * 2
    return angle_offset


def draw_points(
    ctx: DrawContext,
    points: Sequence[Point],
    curve_index: int,
    headings: Sequence[float] | None = None,
    shadow: bool = False,
) -> None:
    """Emit one traced path: a smooth curve, or a shape at every point.

    Squares skip the first point. They are rotated by heading + pi/4 only
    when headings are given and rotated squares are on.
    """
    style = ctx.state.style
    surface = ctx.surface

    if not style.has_shapes:
        surface.curve(points)
        return

    size = style.stroke_width
    rotate = headings is not None and style.rotated_squares
    for i, (x, y) in enumerate(points):
        if style.color_per_shape and not shadow:
            ctx.colors.apply(surface, x, y, curve_index)
        if style.shape is ShapeKind.CIRCLE:
            surface.circle(x, y, size)
        elif i > 0:
            rotation = headings[i] + math.pi / 4 if rotate else 0.0
            surface.square(x, y, size, rotation)


def draw_shadow(ctx: DrawContext, points: Sequence[Point], offset: float, curve_index: int) -> None:
    ctx.colors.apply_shadow(ctx.surface)
    with ctx.surface.translated(offset, offset):
        draw_points(ctx, points, curve_index, shadow=True)


def draw_standard_curve(
    ctx: DrawContext,
    x: float,
    y: float,
    curve_index: int,
    angle_offset: float,
) -> bool:
    """Trace and draw one field-following curve. False if the seed is outside the field."""
    state = ctx.state
    trace = trace_standard(state, x, y, angle_offset, curve_index)
    if not trace.points:
        return False

    if state.style.shadowed:
        draw_shadow(ctx, trace.points, state.config.shadow_offset * state.res, curve_index)

    ctx.colors.apply(ctx.surface, x, y, curve_index)
    draw_points(ctx, trace.points, curve_index, headings=trace.headings)
    return True


def draw_curl_curve(ctx: DrawContext, x: float, y: float, curve_index: int) -> bool:
    """Colour then trace one curl curve. False when fewer than two points were traced."""
    ctx.colors.apply(ctx.surface, x, y, curve_index)
    trace = trace_curl(ctx.state, x, y)
    ctx.surface.curve(trace.points)
    return len(trace) >= 2
