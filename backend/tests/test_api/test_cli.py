"""Tests for the command line entry point."""

from __future__ import annotations

import base64
import json

from phishmark.__main__ import build_parser, main

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_parser_defaults(sample_uuid):
    args = build_parser().parse_args([sample_uuid])
    assert args.identifier == sample_uuid
    assert args.output is None
    assert not args.inspect
    assert not args.data_url


def test_inspect(capsys, sample_uuid):
    assert main([sample_uuid, "-s", "64", "--inspect"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["noise_seed"] == 320938587359665
    assert data["size"] == 64
    assert data["layout"] in {"grid", "random", "poisson", "spaced"}


def test_base64_to_stdout(capsys, sample_uuid):
    assert main([sample_uuid, "-s", "48"]) == 0
    out = capsys.readouterr().out.strip()
    assert base64.b64decode(out).startswith(PNG_MAGIC)


def test_data_url(capsys, sample_uuid):
    assert main([sample_uuid, "-s", "48", "--data-url"]) == 0
    assert capsys.readouterr().out.startswith("data:image/png;base64,")


def test_png_file(tmp_path, sample_uuid):
    out = tmp_path / "mark.png"
    assert main([sample_uuid, "-s", "48", "-o", str(out)]) == 0
    assert out.read_bytes().startswith(PNG_MAGIC)


def test_svg_file(tmp_path, sample_uuid):
    out = tmp_path / "mark.svg"
    assert main([sample_uuid, "-s", "48", "-o", str(out)]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<?xml")
    assert "</svg>" in text


def test_invalid_identifier(capsys):
    assert main(["nope", "-s", "48"]) == 2
    assert "error:" in capsys.readouterr().err


def test_size_above_max(capsys, sample_uuid):
    assert main([sample_uuid, "-s", "999999"]) == 2
    assert "size must be" in capsys.readouterr().err
