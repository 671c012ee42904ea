"""Generator orchestrator — setup, one layout pass, then rasterization."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from PIL import Image

from phishmark.engine.config import DEFAULT_CONFIG, EngineConfig
from phishmark.engine.context import GeneratorState, build_state
from phishmark.engine.errors import AlreadyRenderedError
from phishmark.engine.layouts.drawing import DrawContext
from phishmark.engine.palettes import BACKGROUND, PaletteCatalog
from phishmark.engine.registry import LayoutKind, load_layouts
from phishmark.engine.rng import RandomStream, overlay_rng
from phishmark.engine.surface import SurfaceBase

logger = logging.getLogger(__name__)

# Offset added to field angles by every layout: curves run across the field.
ANGLE_OFFSET = math.pi / 2


def choose_layout(stream: RandomStream) -> LayoutKind:
    """The draw right after setup: one of the layouts, uniformly."""
    return LayoutKind(stream.index(len(LayoutKind)))


class ImageGenerator:
    """One instance per (identifier, size). draw() may run exactly once."""

    def __init__(
        self,
        identifier: str,
        size: int,
        config: EngineConfig = DEFAULT_CONFIG,
        catalog: PaletteCatalog | None = None,
    ) -> None:
        self.state, self._stream = build_state(identifier, size, config, catalog)
        self.layout: LayoutKind | None = None
        self.curves_drawn = 0
        self._rendered = False

    @property
    def rendered(self) -> bool:
        return self._rendered

    def draw(self, surface: SurfaceBase) -> LayoutKind:
        """Issue every draw intent for this instance onto the surface."""
        if self._rendered:
            raise AlreadyRenderedError(f"Instance {self.state.seeds.normalized} has already been drawn")
        self._rendered = True

        state = self.state
        start = time.perf_counter()

        surface.background(BACKGROUND)
        surface.set_stroke_width(state.style.stroke_width)
        if not state.style.filled:
            surface.no_fill()

        registry = load_layouts()
        self.layout = choose_layout(self._stream)
        spec = registry.get(self.layout)
        ctx = DrawContext.create(state, self._stream, surface)
        self.curves_drawn = spec.fn(ctx, ANGLE_OFFSET)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Drew %s: layout=%s curves=%d draws=%d in %.0fms",
            state.seeds.normalized,
            spec.name,
            self.curves_drawn,
            self._stream.draws,
            elapsed,
        )
        return self.layout


def inspect(
    identifier: str,
    size: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[GeneratorState, LayoutKind]:
    """Pre-rasterization decisions for an identifier, without tracing any curve."""
    state, stream = build_state(identifier, size, config)
    return state, choose_layout(stream)


@dataclass
class GeneratedImage:
    image: Image.Image
    state: GeneratorState
    layout: LayoutKind
    curves: int
    elapsed_ms: float


def render_svg(
    identifier: str,
    size: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[str, ImageGenerator]:
    """Geometry only: the SVG document for an identifier, no overlay texture."""
    from phishmark.render.svg_surface import SvgSurface

    generator = ImageGenerator(identifier, size, config)
    surface = SvgSurface(size, size)
    generator.draw(surface)
    return surface.to_svg(title=generator.state.seeds.normalized), generator


def generate(
    identifier: str,
    size: int = 800,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
    overlay_seeded: bool = True,
    overlay_amount: float = 50.0,
) -> GeneratedImage:
    """Full image for an identifier: geometry painted on a raster canvas, then the overlay texture.

    No SVG document is built on this path; see render_svg for that.

    With ``overlay_seeded`` the texture is drawn from a generator keyed on the
    random seed, so the same (identifier, size) always yields the same pixels.
    """
    from phishmark.render.rasterizer import RasterSurface, apply_noise_texture

    start = time.perf_counter()
    generator = ImageGenerator(identifier, size, config)
    surface = RasterSurface(size, size)
    generator.draw(surface)
    image = surface.to_image()
    rng = overlay_rng(generator.state.seeds if overlay_seeded else None)
    image = apply_noise_texture(image, overlay_amount, rng)
    elapsed = (time.perf_counter() - start) * 1000

    logger.info("Generated %dpx image for %s in %.0fms", size, generator.state.seeds.normalized, elapsed)
    return GeneratedImage(
        image=image,
        state=generator.state,
        layout=generator.layout,
        curves=generator.curves_drawn,
        elapsed_ms=elapsed,
    )
