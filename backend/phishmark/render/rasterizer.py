"""Rasterization — draw intents straight onto a Pillow canvas, overlay texture, PNG/base64 export.

RasterSurface paints every intent as it arrives, so the PNG path never holds
more than the pixel buffer. Drawing happens at ``SUPERSAMPLE`` times the
canvas size and is downsampled once at the end for smooth edges.
"""

from __future__ import annotations

import base64
import io
import logging
import math
from collections.abc import Sequence

import numpy as np
from PIL import Image, ImageDraw

from phishmark.engine.palettes import Color
from phishmark.engine.surface import DrawIntent, Pen, Point, SurfaceBase

logger = logging.getLogger(__name__)

# Overlay colour channel (rgb 100, 100, 100) and the alpha scale it is drawn at
OVERLAY_GRAY = 100 / 255
OVERLAY_ALPHA_SCALE = 400.0
DEFAULT_OVERLAY_AMOUNT = 50.0

SUPERSAMPLE = 2
# Longest straight run (supersampled px) allowed when flattening a spline
MAX_SEGMENT = 3.0


def sample_catmull_rom(points: np.ndarray, max_segment: float = MAX_SEGMENT) -> np.ndarray:
    """Flatten a Catmull-Rom spline through Nx2 points into a denser polyline.

    Uses the same end-duplicated control points as the SVG path, with every
    span cut into equal steps no longer than ``max_segment``.
    """
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 3:
        return pts

    padded = np.vstack([pts[:1], pts, pts[-1:]])
    p0, p1, p2, p3 = padded[:-3], padded[1:-2], padded[2:-1], padded[3:]
    longest = float(np.max(np.hypot(*(p2 - p1).T)))
    steps = max(1, math.ceil(longest / max_segment))
    if steps == 1:
        return pts

    c1 = p1 + (p2 - p0) / 6
    c2 = p2 - (p3 - p1) / 6
    t = (np.arange(steps) / steps)[None, :, None]
    mt = 1.0 - t
    curve = (
        mt**3 * p1[:, None, :]
        + 3 * mt**2 * t * c1[:, None, :]
        + 3 * mt * t**2 * c2[:, None, :]
        + t**3 * p2[:, None, :]
    )
    return np.vstack([curve.reshape(-1, 2), pts[-1:]])


def _rgba(color: Color | None) -> tuple[int, int, int, int] | None:
    if color is None:
        return None
    return (*color.to_rgb(), round(color.opacity * 255))


class RasterSurface(SurfaceBase):
    """Paints draw intents onto an in-memory Pillow image."""

    def __init__(self, width: float, height: float, supersample: int = SUPERSAMPLE) -> None:
        super().__init__(width, height)
        self.scale = supersample
        self.image = Image.new(
            "RGB",
            (math.ceil(width * supersample), math.ceil(height * supersample)),
            (255, 255, 255),
        )
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self.intent_count = 0

    def background(self, color: Color) -> None:
        super().background(color)
        self._draw.rectangle([0, 0, self.image.width, self.image.height], fill=_rgba(color))

    def _place(self, points: Sequence[Point], offset: Point) -> np.ndarray:
        dx, dy = offset
        return (np.asarray(points, dtype=np.float64) + (dx, dy)) * self.scale

    def _line_width(self, pen: Pen) -> int:
        return max(1, round(pen.stroke_width * self.scale))

    def _emit(self, intent: DrawIntent) -> None:
        self.intent_count += 1
        pen = intent.pen
        fill = _rgba(pen.fill)
        stroke = _rgba(pen.stroke)
        pts = self._place(intent.points, intent.offset)

        if intent.kind == "curve":
            flat = sample_catmull_rom(pts).ravel().tolist()
            if fill is not None and len(flat) >= 6:
                self._draw.polygon(flat, fill=fill)
            if stroke is not None:
                self._draw.line(flat, fill=stroke, width=self._line_width(pen), joint="curve")
            return

        (x, y) = pts[0]
        half = intent.size * self.scale / 2
        outline_width = self._line_width(pen) if stroke is not None else 0

        if intent.kind == "circle":
            self._draw.ellipse(
                [x - half, y - half, x + half, y + half],
                fill=fill,
                outline=stroke,
                width=outline_width,
            )
            return

        if intent.kind == "square":
            cos_r = math.cos(intent.rotation)
            sin_r = math.sin(intent.rotation)
            corners = [
                (x + cx * cos_r - cy * sin_r, y + cx * sin_r + cy * cos_r)
                for cx, cy in ((-half, -half), (half, -half), (half, half), (-half, half))
            ]
            self._draw.polygon(corners, fill=fill, outline=stroke, width=outline_width)
            return

        raise ValueError(f"Unknown draw intent: {intent.kind}")

    def to_image(self) -> Image.Image:
        """The finished canvas at its nominal size, as RGBA."""
        size = (round(self.width), round(self.height))
        image = self.image if self.image.size == size else self.image.resize(size, Image.Resampling.LANCZOS)
        return image.convert("RGBA")


def color_burn(base: np.ndarray, blend: float | np.ndarray) -> np.ndarray:
    """Colour-burn blend of normalized channels: 1 - (1 - base) / blend, clipped."""
    with np.errstate(divide="ignore", invalid="ignore"):
        burned = 1.0 - (1.0 - base) / blend
    return np.clip(np.nan_to_num(burned, nan=0.0, neginf=0.0), 0.0, 1.0)


def apply_noise_texture(
    image: Image.Image,
    amount: float = DEFAULT_OVERLAY_AMOUNT,
    rng: np.random.Generator | None = None,
) -> Image.Image:
    """Burn a per-pixel translucent gray layer over the image.

    Each pixel gets alpha ``random() * amount / 400``. Pass a seeded ``rng`` for
    reproducible texture; the default generator is unseeded.
    """
    rng = rng if rng is not None else np.random.default_rng()
    rgba = np.asarray(image.convert("RGBA"), dtype=np.float64) / 255.0
    base = rgba[..., :3]
    height, width = base.shape[:2]

    alpha = rng.random((height, width))[..., None] * amount / OVERLAY_ALPHA_SCALE
    burned = color_burn(base, OVERLAY_GRAY)
    out = base * (1.0 - alpha) + burned * alpha

    rgba[..., :3] = out
    pixels = np.round(rgba * 255.0).astype(np.uint8)
    logger.debug("Overlay texture applied: %dx%d amount=%.1f", width, height, amount)
    return Image.fromarray(pixels)


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def to_base64_png(image: Image.Image) -> str:
    return base64.b64encode(encode_png(image)).decode("ascii")


def to_data_url(image: Image.Image) -> str:
    return f"data:image/png;base64,{to_base64_png(image)}"
