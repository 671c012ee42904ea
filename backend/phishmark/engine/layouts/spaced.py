"""Spaced layout — evenly spaced streamlines (Jobard–Lefer).

Seeds are popped at random from a queue. Each valid seed proposes two
candidates at distance ``sep`` perpendicular to the field. A candidate that is
on screen and clear of every recorded point grows a curve in both directions
until it nears a recorded point. Curves long enough are drawn, their points
recorded, and the seeds collected along them queued. The loop stops after
``spaced_max_iterations`` pops whatever the queue holds.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from phishmark.engine.collision import CollisionGrid
from phishmark.engine.context import GeneratorState
from phishmark.engine.layouts.drawing import DrawContext, draw_points, draw_shadow
from phishmark.engine.registry import LayoutKind, layout
from phishmark.engine.surface import Point
from phishmark.engine.tracer import trace_half
from phishmark.utils.math_helpers import map_range

logger = logging.getLogger(__name__)


@dataclass
class SpacedRun:
    """Outcome of one Spaced layout run."""

    sep: float
    min_distance: float
    grid: CollisionGrid
    curves: list[list[Point]] = field(default_factory=list)
    iterations: int = 0


def separation(state: GeneratorState) -> float:
    sep = state.config.spaced_sep_ratio * state.style.stroke_width
    if state.style.monochrome:
        sep *= 2
    return sep


def inside_screen(state: GeneratorState, x: float, y: float) -> bool:
    eps = state.config.screen_epsilon * state.res
    return eps < x < state.width - eps and eps < y < state.height - eps


def shadow_offset(state: GeneratorState) -> float:
    cfg = state.config
    mult = map_range(state.style.stroke_width / state.res, cfg.min_stroke, cfg.max_stroke, *cfg.shadow_scale_range)
    return cfg.shadow_offset * state.res * mult


def grow_curve(
    state: GeneratorState,
    grid: CollisionGrid,
    x: float,
    y: float,
    angle_offset: float,
    curve_index: int,
) -> tuple[list[Point], list[Point]] | None:
    """Trace both halves from (x, y) and merge them.

    Returns (merged points, seed candidates), or None when the merged curve is
    shorter than the minimum length.
    """
    cfg = state.config
    step = cfg.spaced_step * state.res

    def on_screen(px: float, py: float) -> bool:
        return inside_screen(state, px, py)

    halves = [
        trace_half(
            state,
            x,
            y,
            is_free=grid.is_free,
            on_screen=on_screen,
            step_length=step,
            seed_every=cfg.spaced_seed_every,
            reversed_=reverse,
            angle_offset=angle_offset,
            curve_index=curve_index,
            max_steps=cfg.spaced_max_steps,
        )
        for reverse in (False, True)
    ]
    (forward_seeds, forward), (backward_seeds, backward) = halves

    merged = backward[::-1] + [(x, y)] + forward
    if (len(merged) - 1) * step < cfg.spaced_min_curve_length * state.res:
        return None
    return merged, forward_seeds + backward_seeds


def spaced_streamlines(ctx: DrawContext, angle_offset: float) -> SpacedRun:
    state = ctx.state
    cfg = state.config
    rnd = ctx.stream
    fld = state.field

    sep = separation(state)
    run = SpacedRun(sep=sep, min_distance=sep / 2, grid=CollisionGrid(state.width, state.height, sep, sep / 2))
    grid = run.grid
    shadow = shadow_offset(state) if state.style.shadowed else None

    seeds: list[Point] = [(state.width / 2, state.height / 2)]
    curve_index = 0

    while seeds:
        x, y = seeds.pop(rnd.index(len(seeds)))

        deg = fld.angle_at(x, y)
        if deg is not None:
            for sign in (1, -1):
                effective = deg + (math.pi / 2) * sign
                sx = x + math.cos(effective) * sep
                sy = y + math.sin(effective) * sep
                if not (inside_screen(state, sx, sy) and grid.is_free(sx, sy)):
                    continue

                grown = grow_curve(state, grid, sx, sy, angle_offset, curve_index)
                if grown is None:
                    continue
                merged, new_seeds = grown

                if shadow is not None:
                    draw_shadow(ctx, merged, shadow, curve_index)
                ctx.colors.apply(ctx.surface, sx, sy, curve_index)
                draw_points(ctx, merged, curve_index)

                seeds.extend(p for p in new_seeds if inside_screen(state, *p) and grid.is_free(*p))
                for px, py in merged:
                    grid.insert(px, py)
                run.curves.append(merged)
            curve_index += 1

        run.iterations += 1
        if run.iterations >= cfg.spaced_max_iterations:
            break

    logger.debug(
        "Spaced: sep=%.2f curves=%d points=%d iterations=%d",
        sep,
        len(run.curves),
        grid.count,
        run.iterations,
    )
    return run


@layout(kind=LayoutKind.SPACED, description="Collision-free evenly spaced streamlines")
def spaced_curves(ctx: DrawContext, angle_offset: float) -> int:
    return len(spaced_streamlines(ctx, angle_offset).curves)
