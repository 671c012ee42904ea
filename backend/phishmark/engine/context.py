"""GeneratorState — the immutable per-instance value every component reads.

Built once per (identifier, size) by build_state, in the fixed draw order:
style, noise detail, palette, quantization step. The random stream that
produced it continues into the layout phase and is returned alongside.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from phishmark.engine.config import DEFAULT_CONFIG, EngineConfig
from phishmark.engine.errors import ValidationError
from phishmark.engine.field import FieldGeometry, VectorField, build_field
from phishmark.engine.noise import PerlinNoise
from phishmark.engine.palettes import Palette, PaletteCatalog, load_palettes
from phishmark.engine.params import StyleConfiguration, select_style
from phishmark.engine.rng import RandomStream, make_streams
from phishmark.engine.seed import SeedPair, derive_seeds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorState:
    """Everything decided before the first curve is traced."""

    seeds: SeedPair
    size: int
    config: EngineConfig
    style: StyleConfiguration
    palette: Palette
    geometry: FieldGeometry
    field: VectorField
    noise: PerlinNoise
    octaves: int
    falloff: float
    angle_step: float

    @property
    def res(self) -> float:
        """Resolution multiplier relative to the reference canvas."""
        return self.size / self.config.reference_size

    @property
    def width(self) -> float:
        return float(self.size)

    @property
    def height(self) -> float:
        return float(self.size)

    def summary(self) -> dict:
        return {
            "normalized": self.seeds.normalized,
            "noise_seed": self.seeds.noise_seed,
            "random_seed": self.seeds.random_seed,
            "size": self.size,
            "style": self.style.to_dict(),
            "palette": [c.to_hex() for c in self.palette.colors],
            "octaves": self.octaves,
            "falloff": self.falloff,
            "angle_step": self.angle_step,
            "field_shape": list(self.field.shape),
        }


def validate_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValidationError(f"Canvas size must be an integer, got {size!r}")
    if size <= 0:
        raise ValidationError(f"Canvas size must be positive, got {size}")
    return size


def build_state(
    identifier: str,
    size: int,
    config: EngineConfig = DEFAULT_CONFIG,
    catalog: PaletteCatalog | None = None,
) -> tuple[GeneratorState, RandomStream]:
    """Derive seeds and every pre-layout decision for one instance.

    Returns the frozen state and the random stream positioned right after
    the setup draws.
    """
    size = validate_size(size)
    seeds = derive_seeds(identifier)
    streams = make_streams(seeds)
    rnd = streams.random
    res = size / config.reference_size

    style = select_style(rnd, res, config)

    octaves = rnd.floor_uniform(*config.noise_octaves)
    falloff = rnd.uniform(*config.noise_falloff)
    if style.curl and octaves > config.curl_max_octaves:
        octaves = config.curl_max_octaves

    catalog = catalog or load_palettes()
    palette_index = rnd.index(len(catalog))
    style = replace(style, palette_index=palette_index)

    angle_step = math.pi / rnd.floor_uniform(*config.angle_step_divisor)

    noise = PerlinNoise(streams.noise)
    noise.detail(octaves, falloff)

    geometry = FieldGeometry.for_canvas(size, config)
    field = build_field(geometry, noise, style.continuous, angle_step, config)

    logger.debug(
        "State for %s: octaves=%d falloff=%.3f palette=%d field=%dx%d",
        seeds.normalized,
        octaves,
        falloff,
        palette_index,
        geometry.num_columns,
        geometry.num_rows,
    )

    state = GeneratorState(
        seeds=seeds,
        size=size,
        config=config,
        style=style,
        palette=catalog[palette_index],
        geometry=geometry,
        field=field,
        noise=noise,
        octaves=octaves,
        falloff=falloff,
        angle_step=angle_step,
    )
    return state, rnd
