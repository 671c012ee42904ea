"""Tests for rasterization and the overlay texture."""

from __future__ import annotations

import base64
import math

import numpy as np
import pytest
from PIL import Image

from phishmark.engine.palettes import BACKGROUND, Color
from phishmark.engine.surface import DrawIntent, Pen
from phishmark.render.rasterizer import (
    OVERLAY_GRAY,
    RasterSurface,
    apply_noise_texture,
    color_burn,
    encode_png,
    sample_catmull_rom,
    to_base64_png,
    to_data_url,
)

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"

WHITE = Color(0, 0, 100)
BLACK = Color(0, 0, 0)


def _flat(color=(200, 120, 40, 255), size=16) -> Image.Image:
    return Image.new("RGBA", (size, size), color)


def _canvas(size=60) -> RasterSurface:
    surface = RasterSurface(size, size, supersample=1)
    surface.background(WHITE)
    surface.no_stroke()
    surface.no_fill()
    return surface


class TestSampleCatmullRom:
    def test_two_points_unchanged(self):
        pts = np.array([[0.0, 0.0], [50.0, 0.0]])
        assert np.array_equal(sample_catmull_rom(pts), pts)

    def test_short_spans_unchanged(self):
        pts = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 0.0]])
        assert np.array_equal(sample_catmull_rom(pts), pts)

    def test_long_spans_densified(self):
        pts = np.array([[0.0, 0.0], [30.0, 0.0], [60.0, 0.0]])
        out = sample_catmull_rom(pts, max_segment=3.0)
        # 2 spans x 10 steps + the closing point
        assert out.shape == (21, 2)
        assert np.array_equal(out[0], pts[0])
        assert np.array_equal(out[-1], pts[-1])
        assert (np.diff(out[:, 0]) > 0).all()
        assert np.allclose(out[:, 1], 0.0)

    def test_passes_through_inner_points(self):
        pts = np.array([[0.0, 0.0], [30.0, 10.0], [60.0, 0.0]])
        out = sample_catmull_rom(pts, max_segment=3.0)
        assert any(np.allclose(row, pts[1]) for row in out)


class TestRasterSurface:
    def test_nominal_size_after_supersampling(self):
        surface = RasterSurface(30, 30)
        assert surface.image.size == (60, 60)
        image = surface.to_image()
        assert image.size == (30, 30)
        assert image.mode == "RGBA"

    def test_background(self):
        surface = RasterSurface(20, 20, supersample=1)
        surface.background(BACKGROUND)
        assert surface.to_image().getpixel((10, 10)) == (247, 247, 247, 255)

    def test_stroked_curve(self):
        surface = _canvas()
        surface.set_stroke(BLACK, 4)
        surface.curve([(5, 30), (30, 30), (55, 30)])
        image = surface.to_image()
        assert image.getpixel((30, 30)) == (0, 0, 0, 255)
        assert image.getpixel((30, 10)) == (255, 255, 255, 255)

    def test_translated_curve(self):
        surface = _canvas()
        surface.set_stroke(BLACK, 4)
        with surface.translated(0, 20):
            surface.curve([(5, 10), (30, 10), (55, 10)])
        image = surface.to_image()
        assert image.getpixel((30, 30)) == (0, 0, 0, 255)
        assert image.getpixel((30, 10)) == (255, 255, 255, 255)

    def test_translucent_fill_blends(self):
        surface = _canvas()
        surface.set_fill(Color(0, 0, 0, 0.5))
        surface.circle(30, 30, 20)
        r, g, b, a = surface.to_image().getpixel((30, 30))
        assert 100 < r < 160
        assert r == g == b
        assert a == 255

    def test_rotated_square(self):
        surface = _canvas()
        surface.set_fill(BLACK)
        surface.square(30, 30, 20, rotation=math.pi / 4)
        image = surface.to_image()
        assert image.getpixel((30, 30))[:3] == (0, 0, 0)
        # Past the unrotated edge but inside the diamond
        assert image.getpixel((42, 30))[:3] == (0, 0, 0)
        # Inside the unrotated corner but outside the diamond
        assert image.getpixel((38, 22))[:3] == (255, 255, 255)

    def test_counts_intents(self):
        surface = _canvas()
        surface.set_fill(BLACK)
        surface.circle(10, 10, 4)
        surface.square(20, 20, 4)
        assert surface.intent_count == 2

    def test_unknown_intent(self):
        surface = _canvas()
        with pytest.raises(ValueError, match="Unknown draw intent"):
            surface._emit(DrawIntent("hexagon", ((0.0, 0.0),), Pen()))


class TestColorBurn:
    def test_white_unchanged(self):
        assert color_burn(np.array([1.0]), 0.4)[0] == pytest.approx(1.0)

    def test_dark_clipped_to_black(self):
        assert color_burn(np.array([0.2]), 0.4)[0] == 0.0

    def test_zero_blend(self):
        assert color_burn(np.array([0.5, 1.0]), 0.0)[0] == 0.0


class TestNoiseTexture:
    def test_seeded_is_reproducible(self):
        a = apply_noise_texture(_flat(), 50, np.random.default_rng(7))
        b = apply_noise_texture(_flat(), 50, np.random.default_rng(7))
        assert np.array_equal(np.asarray(a), np.asarray(b))

    def test_different_seeds_differ(self):
        a = apply_noise_texture(_flat(), 50, np.random.default_rng(7))
        b = apply_noise_texture(_flat(), 50, np.random.default_rng(8))
        assert not np.array_equal(np.asarray(a), np.asarray(b))

    def test_zero_amount_is_identity(self):
        image = _flat()
        out = apply_noise_texture(image, 0, np.random.default_rng(1))
        assert np.array_equal(np.asarray(out), np.asarray(image))

    def test_only_darkens_and_keeps_alpha(self):
        image = _flat((200, 120, 40, 255))
        out = np.asarray(apply_noise_texture(image, 50, np.random.default_rng(3))).astype(int)
        src = np.asarray(image).astype(int)
        assert (out[..., :3] <= src[..., :3]).all()
        assert (out[..., 3] == 255).all()

    def test_strength_bounded(self):
        # Max alpha is amount / 400; a white pixel burns to white, so test a mid gray
        image = _flat((128, 128, 128, 255))
        out = np.asarray(apply_noise_texture(image, 50, np.random.default_rng(5))).astype(float)
        base = 128 / 255
        burned = max(0.0, 1 - (1 - base) / OVERLAY_GRAY)
        floor = (base * (1 - 50 / 400) + burned * 50 / 400) * 255
        assert out[..., 0].min() >= np.floor(floor)


class TestEncoding:
    def test_png_bytes(self):
        assert encode_png(_flat()).startswith(PNG_MAGIC)

    def test_base64(self):
        raw = base64.b64decode(to_base64_png(_flat()))
        assert raw.startswith(PNG_MAGIC)

    def test_data_url(self):
        assert to_data_url(_flat()).startswith("data:image/png;base64,iVBORw0KGgo")
