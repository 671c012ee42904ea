"""Palette catalogue — the versioned colour table and HSB colour values.

The catalogue ships as ``data/palettes_v1.json`` and is read once per process.
Colours are HSB: hue in [0, 360], saturation and brightness in [0, 100],
alpha in [0, 1]. Out-of-range channels are clamped on conversion.
"""

from __future__ import annotations

import colorsys
import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

from phishmark.utils.math_helpers import clamp

logger = logging.getLogger(__name__)

PALETTE_RESOURCE = "palettes_v1.json"


@dataclass(frozen=True)
class Color:
    hue: float
    saturation: float
    brightness: float
    alpha: float = 1.0

    def to_rgb(self) -> tuple[int, int, int]:
        h = clamp(self.hue, 0.0, 360.0) / 360.0
        s = clamp(self.saturation, 0.0, 100.0) / 100.0
        v = clamp(self.brightness, 0.0, 100.0) / 100.0
        r, g, b = colorsys.hsv_to_rgb(h % 1.0, s, v)
        return (round(r * 255), round(g * 255), round(b * 255))

    def to_hex(self) -> str:
        r, g, b = self.to_rgb()
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def opacity(self) -> float:
        return clamp(self.alpha, 0.0, 1.0)


BACKGROUND = Color(0, 0, 97)
MONOCHROME = Color(0, 0, 0)
SHADOW = Color(100, 100, 0, 0.3)
SHAPE_BORDER = Color(0, 0, 100, 0.4)


@dataclass(frozen=True)
class Palette:
    index: int
    colors: tuple[Color, ...]

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, i: int) -> Color:
        return self.colors[i]


@dataclass(frozen=True)
class PaletteCatalog:
    version: int
    palettes: tuple[Palette, ...]

    def __len__(self) -> int:
        return len(self.palettes)

    def __getitem__(self, i: int) -> Palette:
        return self.palettes[i]


def parse_catalog(raw: dict) -> PaletteCatalog:
    """Build a catalogue from its JSON form."""
    if raw.get("color_mode", "hsb") != "hsb":
        raise ValueError(f"Unsupported palette color mode: {raw.get('color_mode')}")
    palettes = []
    for i, entries in enumerate(raw["palettes"]):
        if not entries:
            raise ValueError(f"Palette {i} is empty")
        palettes.append(Palette(index=i, colors=tuple(Color(*entry) for entry in entries)))
    return PaletteCatalog(version=int(raw["version"]), palettes=tuple(palettes))


@lru_cache(maxsize=1)
def load_palettes() -> PaletteCatalog:
    """Read the bundled catalogue (cached; never mutated after load)."""
    text = resources.files("phishmark.engine").joinpath("data").joinpath(PALETTE_RESOURCE).read_text("utf-8")
    catalog = parse_catalog(json.loads(text))
    logger.debug("Loaded palette catalogue v%d (%d palettes)", catalog.version, len(catalog))
    return catalog
