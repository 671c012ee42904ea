"""Random layout — n uniformly placed seeds; thinner strokes get more curves."""

from __future__ import annotations

import logging

from phishmark.engine.context import GeneratorState
from phishmark.engine.layouts.drawing import DrawContext, crossed_offset, draw_curl_curve, draw_standard_curve
from phishmark.engine.registry import LayoutKind, layout
from phishmark.utils.math_helpers import map_range

logger = logging.getLogger(__name__)


def random_count(state: GeneratorState) -> float:
    cfg = state.config
    low, high = cfg.random_count
    return map_range(state.style.stroke_width / state.res, cfg.max_stroke, cfg.min_stroke, low, high)


@layout(kind=LayoutKind.RANDOM, description="Uniformly random seeds inside the virtual canvas")
def random_curves(ctx: DrawContext, angle_offset: float) -> int:
    state = ctx.state
    g = state.geometry
    rnd = ctx.stream
    n = random_count(state)
    curl = state.style.curl

    i = 0
    while i < n:
        x = rnd.uniform(g.left_x, g.right_x)
        y = rnd.uniform(g.top_y, g.bottom_y)
        if curl:
            draw_curl_curve(ctx, x, y, i)
        else:
            draw_standard_curve(ctx, x, y, i, crossed_offset(ctx, angle_offset))
        i += 1

    logger.debug("Random: n=%.1f seeds=%d", n, i)
    return i
