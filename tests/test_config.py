"""Tests for `utils.config` and `utils.logging`."""

import logging

import pytest

from utils import config as config_module
from utils.config import (
    DEFAULT_SNAPSHOT_INTERVAL,
    get_snapshot_interval,
    get_value,
    get_value_or_default,
    has_value,
    load_config,
)
from utils.logging import resolve_level


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch):
    for key in config_module.CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_config(tmp_path, text):
    path = tmp_path / "discord_token.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_load_config_missing_file_returns_none(tmp_path):
    assert load_config(str(tmp_path / "missing.txt")) is None


def test_load_config_skips_comments_and_trims_values(tmp_path):
    path = _write_config(tmp_path, "\n".join([
        "# bot settings",
        "",
        "DISCORD_TOKEN=abc.def ",
        "DEV_GUILD_ID=1234",
        "DEMO_CHANNEL_ID=",
    ]))

    config = load_config(path)

    assert get_value(config, "DISCORD_TOKEN") == "abc.def"
    assert get_value(config, "DEV_GUILD_ID") == "1234"
    assert not has_value(config, "DEMO_CHANNEL_ID")
    assert get_value(config, "LOG_LEVEL") is None
    assert get_value_or_default(config, "DEMO_CHANNEL_ID", "none") == "none"


def test_environment_overrides_file_values(tmp_path, monkeypatch: pytest.MonkeyPatch):
    path = _write_config(tmp_path, "DISCORD_TOKEN=from-file\n")
    monkeypatch.setenv("DISCORD_TOKEN", "from-env")

    assert load_config(path)["DISCORD_TOKEN"] == "from-env"


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({}, DEFAULT_SNAPSHOT_INTERVAL),
        ({"AMBIENT_TICK_SECONDS": "15"}, 15),
        ({"AMBIENT_TICK_SECONDS": " 5 "}, 5),
        ({"AMBIENT_TICK_SECONDS": "0"}, DEFAULT_SNAPSHOT_INTERVAL),
        ({"AMBIENT_TICK_SECONDS": "-3"}, DEFAULT_SNAPSHOT_INTERVAL),
        ({"AMBIENT_TICK_SECONDS": "soon"}, DEFAULT_SNAPSHOT_INTERVAL),
    ],
)
def test_get_snapshot_interval(environ, expected):
    assert get_snapshot_interval(environ) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Trace", logging.DEBUG),
        ("Information", logging.INFO),
        ("warn", logging.WARNING),
        ("Fatal", logging.CRITICAL),
        ("loud", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected
