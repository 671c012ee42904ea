"""Poisson layout — Bridson Poisson-disc sampling, then one curve per accepted point.

The accelerator has cells of r/sqrt(2), so each holds at most one point and any
point closer than r lies within two cells of the candidate.
"""

from __future__ import annotations

import logging
import math

from phishmark.engine.context import GeneratorState
from phishmark.engine.field import TWO_PI
from phishmark.engine.layouts.drawing import DrawContext, crossed_offset, draw_curl_curve, draw_standard_curve
from phishmark.engine.registry import LayoutKind, layout
from phishmark.engine.rng import RandomStream
from phishmark.engine.surface import Point
from phishmark.utils.math_helpers import map_range

logger = logging.getLogger(__name__)

# Neighbour cells scanned on each side of a candidate (ceil(sqrt(2)))
NEIGHBOUR_REACH = 2


def poisson_radius(state: GeneratorState) -> float:
    cfg = state.config
    res = state.res
    low, high = cfg.poisson_radius
    return map_range(
        state.style.stroke_width,
        cfg.min_stroke * res,
        cfg.max_stroke * res,
        low * res,
        high * res,
    )


def poisson_points(state: GeneratorState, stream: RandomStream, radius: float | None = None) -> list[Point]:
    """Accepted sample points in acceptance order (the start point excluded).

    Starts at the canvas centre; each pass picks a random active point and
    tries ``poisson_k`` candidates at distance [r, 2r). An active point
    without a successful candidate is retired.
    """
    cfg = state.config
    r = radius if radius is not None else poisson_radius(state)
    w = r / math.sqrt(2)
    left = state.geometry.left_x
    top = state.geometry.top_y
    cols = math.ceil(cfg.poisson_extent * state.width / w)
    rows = math.ceil(cfg.poisson_extent * state.height / w)
    cells: list[Point | None] = [None] * (cols * rows)

    start = (state.width / 2, state.height / 2)
    cells[math.floor((start[0] - left) / w) + math.floor((start[1] - top) / w) * cols] = start
    active: list[Point] = [start]
    ordered: list[Point] = []

    while active:
        idx = stream.index(len(active))
        px, py = active[idx]
        found = False

        for _ in range(cfg.poisson_k):
            theta = stream.uniform(0, TWO_PI)
            m = stream.uniform(r, 2 * r)
            sx = px + m * math.cos(theta)
            sy = py + m * math.sin(theta)

            col = math.floor((sx - left) / w)
            row = math.floor((sy - top) / w)
            if col < 0 or row < 0 or col >= cols or row >= rows:
                continue
            if cells[col + row * cols] is not None:
                continue
            if _has_close_neighbour(cells, cols, rows, col, row, sx, sy, r):
                continue

            sample = (sx, sy)
            cells[col + row * cols] = sample
            active.append(sample)
            ordered.append(sample)
            found = True
            break

        if not found:
            active.pop(idx)

    return ordered


def _has_close_neighbour(
    cells: list[Point | None],
    cols: int,
    rows: int,
    col: int,
    row: int,
    x: float,
    y: float,
    r: float,
) -> bool:
    for c in range(max(col - NEIGHBOUR_REACH, 0), min(col + NEIGHBOUR_REACH, cols - 1) + 1):
        for rr in range(max(row - NEIGHBOUR_REACH, 0), min(row + NEIGHBOUR_REACH, rows - 1) + 1):
            neighbour = cells[c + rr * cols]
            if neighbour is not None and math.hypot(x - neighbour[0], y - neighbour[1]) < r:
                return True
    return False


@layout(kind=LayoutKind.POISSON, description="Poisson-disc seeds with a stroke-derived minimum distance")
def poisson_curves(ctx: DrawContext, angle_offset: float) -> int:
    state = ctx.state
    points = poisson_points(state, ctx.stream)
    curl = state.style.curl

    for i, (x, y) in enumerate(points):
        if curl:
            draw_curl_curve(ctx, x, y, i)
        else:
            draw_standard_curve(ctx, x, y, i, crossed_offset(ctx, angle_offset))

    logger.debug("Poisson: r=%.2f points=%d", poisson_radius(state), len(points))
    return len(points)
