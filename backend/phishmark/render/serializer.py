"""Write SVG markup from element definitions."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import quoteattr


def fmt(value: float) -> str:
    """Compact decimal: three places, trailing zeros dropped."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _element_lines(elem: dict[str, Any], indent: str) -> list[str]:
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in ("tag", "children")}
    attr_str = " ".join(f"{k}={quoteattr(str(v))}" for k, v in attrs.items())
    opening = f"{indent}<{tag} {attr_str}" if attr_str else f"{indent}<{tag}"

    children = elem.get("children")
    if not children:
        return [f"{opening} />"]

    lines = [f"{opening}>"]
    for child in children:
        lines.extend(_element_lines(child, indent + "  "))
    lines.append(f"{indent}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float,
    canvas_h: float,
    background: str | None = None,
    title: str = "",
) -> str:
    """Generate an SVG document. Elements may nest through a ``children`` list."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {fmt(canvas_w)} {fmt(canvas_h)}" width="{fmt(canvas_w)}"'
        f' height="{fmt(canvas_h)}" xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{title}</title>")

    if background:
        lines.append(f'  <rect x="0" y="0" width="{fmt(canvas_w)}" height="{fmt(canvas_h)}" fill="{background}" />')

    for elem in elements:
        lines.extend(_element_lines(elem, "  "))

    lines.append("</svg>")
    return "\n".join(lines)
