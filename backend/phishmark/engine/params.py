"""Style selection — draws the per-instance style flags.

Each flag is an independent coin flip against its configured probability,
drawn in a fixed order (see select_style). The exclusion rules in
resolve_style are then applied in order; applying them twice is a no-op.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass, replace
from typing import Any

from phishmark.engine.config import DEFAULT_CONFIG, EngineConfig
from phishmark.engine.rng import RandomStream

logger = logging.getLogger(__name__)


class ShapeKind(str, enum.Enum):
    NONE = "none"
    CIRCLE = "circle"
    RECT = "rect"


class ColorStyle(str, enum.Enum):
    MONOCHROME = "monochrome"
    GRADIENT = "gradient"
    ORDERED = "ordered"


# Order in which a shape kind is picked once shapes are enabled.
_SHAPE_CHOICES = (ShapeKind.RECT, ShapeKind.CIRCLE)


@dataclass(frozen=True)
class StyleConfiguration:
    stroke_width: float
    color_style: ColorStyle
    shape: ShapeKind = ShapeKind.NONE
    rotated_squares: bool = False
    continuous: bool = False
    filled: bool = False
    curl: bool = False
    shadowed: bool = False
    crossed: bool = False
    zigzag: bool = False
    color_per_shape: bool = False
    bordered: bool = False
    palette_index: int = 0

    @property
    def has_shapes(self) -> bool:
        return self.shape is not ShapeKind.NONE

    @property
    def monochrome(self) -> bool:
        return self.color_style is ColorStyle.MONOCHROME

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["color_style"] = self.color_style.value
        data["shape"] = self.shape.value
        return data


def resolve_style(style: StyleConfiguration) -> StyleConfiguration:
    """Apply the mutual-exclusion rules in their fixed order.

    Monochrome stroke thinning is not part of this: it consumes a random draw
    and happens once in select_style.
    """
    s = style
    if s.crossed:
        s = replace(s, zigzag=False)
    if s.curl:
        s = replace(s, continuous=True, shape=ShapeKind.NONE)
    if s.filled:
        s = replace(s, zigzag=False, shape=ShapeKind.NONE)
    if not s.continuous:
        s = replace(s, filled=False)
    if s.zigzag:
        s = replace(s, shadowed=False)
    if s.monochrome:
        s = replace(s, shadowed=False)
    if not s.has_shapes:
        s = replace(s, color_per_shape=False)
    return s


def select_style(
    stream: RandomStream,
    res: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> StyleConfiguration:
    """Draw a StyleConfiguration from the random stream.

    Draw order: stroke, gradient/ordered, monochrome, shapes, [shape kind],
    rotated squares, continuous, filled, curl, shadow, crossed, zig-zag,
    per-shape colour, border, [monochrome stroke scale].
    """
    stroke = stream.uniform(config.min_stroke, config.max_stroke) * res

    color_style = ColorStyle.GRADIENT if stream.chance(config.p_gradient) else ColorStyle.ORDERED
    if stream.chance(config.p_monochrome):
        color_style = ColorStyle.MONOCHROME

    shape = ShapeKind.NONE
    if stream.chance(config.p_shapes):
        shape = _SHAPE_CHOICES[stream.index(len(_SHAPE_CHOICES))]

    style = StyleConfiguration(
        stroke_width=stroke,
        color_style=color_style,
        shape=shape,
        rotated_squares=stream.chance(config.p_rotated_squares),
        continuous=stream.chance(config.p_continuous),
        filled=stream.chance(config.p_filled),
        curl=stream.chance(config.p_curl),
        shadowed=stream.chance(config.p_shadow),
        crossed=stream.chance(config.p_crossed),
        zigzag=stream.chance(config.p_zigzag),
        color_per_shape=stream.chance(config.p_color_per_shape),
        bordered=stream.chance(config.p_bordered),
    )

    if style.monochrome:
        style = replace(style, stroke_width=stroke * stream.uniform(*config.mono_stroke_scale))

    style = resolve_style(style)
    logger.debug("Style: %s", style)
    return style
