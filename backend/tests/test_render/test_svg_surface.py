"""Tests for the SVG surface and serializer."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET

import pytest

from phishmark.engine.palettes import BACKGROUND, SHADOW, Color
from phishmark.engine.surface import DrawIntent, Pen
from phishmark.render.serializer import fmt, serialize_svg
from phishmark.render.svg_surface import SvgSurface, catmull_rom_path, intent_element

SVG_NS = "{http://www.w3.org/2000/svg}"
RED = Color(0, 100, 100)


# ── Serializer ───────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "value,expected",
    [(1.0, "1"), (1.5, "1.5"), (0.12345, "0.123"), (-0.0001, "0"), (-2.25, "-2.25"), (0.0, "0")],
)
def test_fmt(value, expected):
    assert fmt(value) == expected


def test_serialize_nested():
    svg = serialize_svg(
        [{"tag": "g", "transform": "translate(1 1)", "children": [{"tag": "circle", "cx": "1", "cy": "2", "r": "3"}]}],
        10,
        20,
        background="#ffffff",
        title="abc",
    )
    root = ET.fromstring(svg.encode("utf-8"))
    assert root.get("viewBox") == "0 0 10 20"
    assert root.find(f"{SVG_NS}title").text == "abc"
    group = root.find(f"{SVG_NS}g")
    assert group.find(f"{SVG_NS}circle").get("r") == "3"


def test_attribute_values_are_escaped():
    svg = serialize_svg([{"tag": "path", "d": 'M0 0 "x"'}], 1, 1)
    ET.fromstring(svg.encode("utf-8"))


# ── Path construction ────────────────────────────────────────────────


class TestCatmullRom:
    def test_needs_two_points(self):
        assert catmull_rom_path([(1, 1)]) == ""

    def test_one_segment_per_gap(self):
        d = catmull_rom_path([(0, 0), (10, 0), (20, 0), (30, 0)])
        assert d.startswith("M0 0")
        assert d.count("C") == 3

    def test_passes_through_points(self):
        d = catmull_rom_path([(0, 0), (10, 5), (20, 0)])
        segments = d.split("C")[1:]
        ends = [tuple(seg.split()[-2:]) for seg in segments]
        assert ends == [("10", "5"), ("20", "0")]

    def test_straight_line_controls(self):
        d = catmull_rom_path([(0, 0), (6, 0)])
        # Duplicated end points put each control a sixth of the chord inside
        assert d == "M0 0 C1 0 5 0 6 0"


class TestIntentElement:
    def test_curve(self):
        pen = Pen(stroke=RED, fill=None, stroke_width=2.5)
        elem = intent_element(DrawIntent("curve", ((0, 0), (5, 5)), pen))
        assert elem["tag"] == "path"
        assert elem["stroke"] == "#ff0000"
        assert elem["fill"] == "none"
        assert elem["stroke-width"] == "2.5"

    def test_short_curve_skipped(self):
        assert intent_element(DrawIntent("curve", ((0, 0),), Pen(stroke=RED))) is None

    def test_circle_radius(self):
        elem = intent_element(DrawIntent("circle", ((3, 4),), Pen(fill=RED), size=6))
        assert (elem["cx"], elem["cy"], elem["r"]) == ("3", "4", "3")
        assert elem["stroke"] == "none"
        assert "stroke-width" not in elem

    def test_rotated_square(self):
        elem = intent_element(DrawIntent("square", ((10, 20),), Pen(fill=RED), size=4, rotation=math.pi / 4))
        assert elem["tag"] == "rect"
        assert (elem["x"], elem["width"]) == ("-2", "4")
        assert elem["transform"] == "translate(10 20) rotate(45)"

    def test_translucent_fill(self):
        elem = intent_element(DrawIntent("circle", ((0, 0),), Pen(fill=SHADOW), size=2))
        assert elem["fill"] == "#000000"
        assert elem["fill-opacity"] == "0.3"

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            intent_element(DrawIntent("star", ((0, 0),), Pen()))


# ── Surface ──────────────────────────────────────────────────────────


class TestSvgSurface:
    def test_background_rect(self):
        surface = SvgSurface(50, 50)
        surface.background(BACKGROUND)
        root = ET.fromstring(surface.to_svg().encode("utf-8"))
        rect = root.find(f"{SVG_NS}rect")
        assert rect.get("fill") == "#f7f7f7"

    def test_translated_intents_grouped(self):
        surface = SvgSurface(50, 50)
        surface.set_stroke(RED)
        with surface.translated(2, 2):
            surface.curve([(0, 0), (5, 5)])
            surface.curve([(5, 5), (9, 9)])
        surface.curve([(0, 0), (5, 5)])
        assert surface.intent_count == 3
        assert len(surface.elements) == 2
        group = surface.elements[0]
        assert group["tag"] == "g"
        assert group["transform"] == "translate(2 2)"
        assert len(group["children"]) == 2
        assert surface.elements[1]["tag"] == "path"

    def test_new_group_after_untranslated(self):
        surface = SvgSurface(50, 50)
        surface.set_fill(RED)
        for _ in range(2):
            with surface.translated(1, 1):
                surface.circle(1, 1, 2)
            surface.circle(1, 1, 2)
        assert [e["tag"] for e in surface.elements] == ["g", "circle", "g", "circle"]

    def test_document_parses(self):
        surface = SvgSurface(30, 30)
        surface.set_stroke(RED, 2)
        surface.curve([(1, 1), (10, 10), (20, 5)])
        surface.square(5, 5, 3, 0.3)
        root = ET.fromstring(surface.to_svg(title="t").encode("utf-8"))
        assert root.find(f"{SVG_NS}path") is not None
        assert root.find(f"{SVG_NS}rect") is not None
