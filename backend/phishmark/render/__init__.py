"""Compositor: SVG and raster drawing surfaces, overlay texture, PNG export."""

from phishmark.render.rasterizer import RasterSurface, apply_noise_texture, encode_png, to_base64_png, to_data_url
from phishmark.render.svg_surface import SvgSurface

__all__ = [
    "RasterSurface",
    "SvgSurface",
    "apply_noise_texture",
    "encode_png",
    "to_base64_png",
    "to_data_url",
]
