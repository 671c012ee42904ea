"""Grid layout — one curve per lattice point over the virtual canvas."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from phishmark.engine.context import GeneratorState
from phishmark.engine.layouts.drawing import DrawContext, crossed_offset, draw_curl_curve, draw_standard_curve
from phishmark.engine.registry import LayoutKind, layout
from phishmark.engine.surface import Point
from phishmark.utils.math_helpers import map_range

logger = logging.getLogger(__name__)


def grid_spacing(state: GeneratorState) -> float:
    """Lattice spacing in canvas pixels.

    Mapped from the unscaled stroke width on the reference canvas, then
    scaled by res, so the seed count is the same at every canvas size.
    """
    cfg = state.config
    low, high = cfg.grid_spacing
    spacing = map_range(state.style.stroke_width / state.res, cfg.min_stroke, cfg.max_stroke, low, high)
    spacing = max(spacing, low)
    if state.style.monochrome:
        spacing = max(spacing, cfg.grid_mono_min_spacing)
    return spacing * state.res


def grid_seeds(state: GeneratorState) -> Iterator[Point]:
    """Lattice points column by column, starting at the virtual top-left corner."""
    g = state.geometry
    spacing = grid_spacing(state)
    x = g.left_x
    while x < g.right_x:
        y = g.top_y
        while y < g.bottom_y:
            yield x, y
            y += spacing
        x += spacing


@layout(kind=LayoutKind.GRID, description="Seeds on a uniform lattice over the virtual canvas")
def grid_curves(ctx: DrawContext, angle_offset: float) -> int:
    curl = ctx.state.style.curl

    i = 0
    for x, y in grid_seeds(ctx.state):
        if curl:
            draw_curl_curve(ctx, x, y, i)
        else:
            draw_standard_curve(ctx, x, y, i, crossed_offset(ctx, angle_offset))
        i += 1

    logger.debug("Grid: spacing=%.2f seeds=%d", grid_spacing(ctx.state), i)
    return i
