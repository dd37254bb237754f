"""Tests for configuration persistence."""

import json

import pytest

from utils.config import Config
from utils.constants import DISPLAY, SCAN_WINDOW, RebindPolicy


def test_defaults():
    config = Config()

    assert config.scan_window == SCAN_WINDOW == 2.0
    assert config.rebind_policy == RebindPolicy.REBIND.value
    assert config.adapter is None
    assert (config.display_width, config.display_height) == (DISPLAY.WIDTH, DISPLAY.HEIGHT)


def test_save_and_load_round_trip(tmp_path):
    path = str(tmp_path / "chemion_config.json")
    config = Config(log_file=None, adapter="hci1", last_address="AA:BB:CC:DD:EE:FF",
                    last_name="CHEMION", rebind_policy="require_disconnect")

    config.save(path)
    loaded = Config.load(path)

    assert loaded == config


def test_saved_file_has_comments(tmp_path):
    path = tmp_path / "chemion_config.json"
    Config().save(str(path))

    data = json.loads(path.read_text())

    assert data["_comment"] == "Chemion Glasses SDK Configuration"
    assert "_rebind_policy_comment" in data
    assert data["config"]["scan_window"] == 2.0


def test_load_missing_file_creates_default(tmp_path):
    path = tmp_path / "nested" / "chemion_config.json"

    config = Config.load(str(path))

    assert config == Config()
    assert path.exists()


def test_load_corrupt_file_falls_back_to_default(tmp_path):
    path = tmp_path / "chemion_config.json"
    path.write_text("{not json")

    assert Config.load(str(path)) == Config()


def test_load_ignores_unknown_keys(tmp_path):
    path = tmp_path / "chemion_config.json"
    path.write_text(json.dumps({"config": {"scan_window": 3.5, "brightness": 5}}))

    assert Config.load(str(path)).scan_window == 3.5


def test_unknown_rebind_policy_rejected():
    with pytest.raises(ValueError):
        Config(rebind_policy="sometimes")
