"""Command line: python -m phishmark <uuid> [--size N] [-o out.png|out.svg] [--data-url] [--inspect]"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from phishmark.config import settings
from phishmark.engine.errors import ValidationError
from phishmark.engine.pipeline import generate, inspect, render_svg
from phishmark.render.rasterizer import encode_png, to_base64_png, to_data_url

logger = logging.getLogger("phishmark")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phishmark", description="Deterministic anti-phishing image from a UUID")
    parser.add_argument("identifier", help="UUID (hex digits, dashes and urn:uuid: prefix allowed)")
    parser.add_argument("-s", "--size", type=int, default=settings.default_size, help="Canvas edge in pixels")
    parser.add_argument("-o", "--output", help="Write to a .png or .svg file instead of printing base64")
    parser.add_argument("--data-url", action="store_true", help="Print a data: URL instead of bare base64")
    parser.add_argument("--inspect", action="store_true", help="Print seeds, style and layout as JSON; no rendering")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if args.size > settings.max_size:
        print(f"error: size must be <= {settings.max_size}, got {args.size}", file=sys.stderr)
        return 2

    try:
        if args.inspect:
            state, layout = inspect(args.identifier, args.size)
            print(json.dumps({**state.summary(), "layout": layout.name.lower()}, indent=2))
            return 0

        if args.output and os.path.splitext(args.output)[1].lower() == ".svg":
            svg, _ = render_svg(args.identifier, args.size)
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(svg)
            print(f"Wrote {args.output}", file=sys.stderr)
            return 0

        result = generate(
            args.identifier,
            args.size,
            overlay_seeded=settings.overlay_seeded,
            overlay_amount=settings.overlay_amount,
        )
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.output:
        with open(args.output, "wb") as f:
            f.write(encode_png(result.image))
        print(f"Wrote {args.output} ({result.layout.name.lower()})", file=sys.stderr)
    elif args.data_url:
        print(to_data_url(result.image))
    else:
        print(to_base64_png(result.image))
    return 0


if __name__ == "__main__":
    sys.exit(main())
