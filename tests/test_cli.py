"""Tests for the command line helpers."""

import json

import pytest

from connector.cli import build_parser, load_frame
from services.frame import PixelFrame


def test_load_json_frame(tmp_path):
    path = tmp_path / "frame.json"
    path.write_text(json.dumps({"glasses_frame": [[0, 1], [2, 3]]}))

    assert load_frame(str(path)) == PixelFrame([[0, 1], [2, 3]])


def test_load_text_frame(tmp_path):
    path = tmp_path / "frame.txt"
    path.write_text("0123\n3210\n")

    assert load_frame(str(path)) == PixelFrame([[0, 1, 2, 3], [3, 2, 1, 0]])


def test_parser_show_options():
    args = build_parser().parse_args(["show", "heart.txt", "--address", "AA:BB:CC:DD:EE:FF"])

    assert args.command == "show"
    assert args.file == "heart.txt"
    assert args.address == "AA:BB:CC:DD:EE:FF"
    assert args.name is None


def test_parser_encode_json_flag():
    args = build_parser().parse_args(["encode", "heart.txt", "--json"])

    assert args.json is True


def test_parser_rejects_unknown_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["blink"])


def test_parser_clear_options():
    args = build_parser().parse_args(["clear", "--address", "AA:BB:CC:DD:EE:FF"])

    assert args.command == "clear"
    assert args.address == "AA:BB:CC:DD:EE:FF"
    assert not hasattr(args, "file")
