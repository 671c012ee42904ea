"""ColorAssigner — palette entry for a curve or shape, and pen setup."""

from __future__ import annotations

import math

from phishmark.engine.context import GeneratorState
from phishmark.engine.palettes import MONOCHROME, SHADOW, SHAPE_BORDER, Color
from phishmark.engine.params import ColorStyle
from phishmark.engine.rng import RandomStream
from phishmark.engine.surface import SurfaceBase
from phishmark.utils.math_helpers import map_range


class ColorAssigner:
    """Colour choice per the instance colour style.

    Gradient draws one jitter sample per call; the other styles draw nothing.
    """

    def __init__(self, state: GeneratorState, stream: RandomStream) -> None:
        self.state = state
        self.stream = stream
        self.palette = state.palette

    def color_for(self, x: float, y: float, curve_index: int = 0) -> Color:
        style = self.state.style.color_style
        n = len(self.palette)

        if style is ColorStyle.MONOCHROME:
            return MONOCHROME

        if style is ColorStyle.GRADIENT:
            g = self.state.geometry
            jitter = self.state.size * self.state.config.gradient_jitter_ratio
            r = self.stream.uniform(-jitter, jitter)
            i = math.floor(map_range(y + r, g.top_y, g.bottom_y, 0, n))
            return self.palette[min(max(i, 0), n - 1)]

        return self.palette[((math.floor(curve_index) % n) + n) % n]

    def apply(self, surface: SurfaceBase, x: float, y: float, curve_index: int = 0) -> Color:
        """Set the surface pen for a curve (or shape) seeded at (x, y)."""
        style = self.state.style
        color = self.color_for(x, y, curve_index)

        if style.filled:
            surface.set_fill(color)
            surface.no_stroke()
        else:
            surface.no_fill()
            surface.set_stroke(color)

        if style.has_shapes:
            surface.set_fill(color)
            if style.bordered:
                surface.set_stroke(SHAPE_BORDER, self.state.config.shape_border_width * self.state.res)
            else:
                surface.no_stroke()
        return color

    def apply_shadow(self, surface: SurfaceBase) -> None:
        """Translucent black pen for shadow copies."""
        style = self.state.style
        if style.filled or style.has_shapes:
            surface.set_fill(SHADOW)
            surface.no_stroke()
        else:
            surface.no_fill()
            surface.set_stroke(SHADOW)
