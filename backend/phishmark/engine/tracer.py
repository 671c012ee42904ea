"""Streamline tracing — walks a seed point through the vector field.

Three walks share the same nearest-cell lookup:
- trace_standard: fixed step count, follows field angle + offset
- trace_curl: fixed step count, follows the curl of the angle field
- trace_half: Spaced layout half-curve, runs until a stop predicate fires

A lookup outside the field ends the walk; it is never an error.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field

from phishmark.engine.context import GeneratorState
from phishmark.engine.noise import PerlinNoise
from phishmark.engine.surface import Point


@dataclass
class Trace:
    """Visited points and the heading used to reach each one."""

    points: list[Point] = field(default_factory=list)
    headings: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)


def curve_steps(state: GeneratorState) -> int:
    cfg = state.config
    return math.floor(cfg.curve_steps_slope * state.style.stroke_width / state.res + cfg.curve_steps_offset)


def curl_steps(state: GeneratorState) -> int:
    return math.floor(state.style.stroke_width / state.res + state.config.curl_steps_offset)


def standard_step_length(state: GeneratorState) -> float:
    cfg = state.config
    if state.style.has_shapes:
        return cfg.shape_step_stroke_ratio * state.style.stroke_width + cfg.shape_step_offset * state.res
    return state.size / cfg.curve_step_divisor


def zigzag_hit(noise: PerlinNoise, t: float, curve_index: int, scale: float = 1000.0) -> bool:
    """Parity of a scaled 1-D noise sample decides whether to bend this step."""
    return math.floor(noise.value(t * (curve_index + 1)) * scale) % 2 == 0


def trace_standard(
    state: GeneratorState,
    x: float,
    y: float,
    angle_offset: float,
    curve_index: int,
) -> Trace:
    """Fixed-length walk following field angle + offset.

    Returns an empty trace when the seed lies outside the field.
    """
    fld = state.field
    if fld.cell_of(x, y) is None:
        return Trace()

    zigzag = state.style.zigzag
    scale = state.config.zigzag_scale
    step = standard_step_length(state)
    trace = Trace()
    heading = 0.0

    for i in range(curve_steps(state)):
        trace.points.append((x, y))
        trace.headings.append(heading)

        angle = fld.angle_at(x, y)
        if angle is None:
            break
        angle += angle_offset
        if zigzag and zigzag_hit(state.noise, i + 1, curve_index, scale):
            angle += angle_offset

        heading = angle
        x += step * math.cos(angle)
        y += step * math.sin(angle)

    return trace


def trace_curl(state: GeneratorState, x: float, y: float) -> Trace:
    """Fixed-length walk along the rotated angle gradient."""
    fld = state.field
    mul = state.config.curl_step * state.res
    trace = Trace()
    heading = 0.0

    for _ in range(curl_steps(state)):
        trace.points.append((x, y))
        trace.headings.append(heading)
        direction = fld.curl_at(x, y)
        if direction is None:
            break
        heading = math.atan2(direction[1], direction[0])
        x += direction[0] * mul
        y += direction[1] * mul

    return trace


def trace_half(
    state: GeneratorState,
    x: float,
    y: float,
    *,
    is_free: Callable[[float, float], bool],
    on_screen: Callable[[float, float], bool],
    step_length: float,
    seed_every: int,
    reversed_: bool,
    angle_offset: float,
    curve_index: int,
    max_steps: int = 2000,
) -> tuple[list[Point], list[Point]]:
    """Half-curve for the Spaced layout.

    Walks until is_free fails, the point leaves the field, or max_steps
    is reached. Every ``seed_every`` steps an on-screen point becomes a
    seed candidate.
    Returns (seed candidates, curve points without the seed itself).
    """
    fld = state.field
    zigzag = state.style.zigzag
    scale = state.config.zigzag_scale
    seeds: list[Point] = []
    points: list[Point] = []
    t = 0

    while t < max_steps and is_free(x, y):
        if t % seed_every == 0 and on_screen(x, y):
            seeds.append((x, y))

        angle = fld.angle_at(x, y)
        if angle is None:
            break

        if t > 0:
            points.append((x, y))

        if reversed_:
            angle += math.pi
        if zigzag and zigzag_hit(state.noise, t, curve_index, scale):
            angle += angle_offset

        x += step_length * math.cos(angle)
        y += step_length * math.sin(angle)
        t += 1

    return seeds, points
