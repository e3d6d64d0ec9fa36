"""Tests for the `main` entry point and `utils.logging` file output."""

import asyncio
import logging
import logging.handlers

import pytest

import main
from utils import config as config_module
from utils.logging import setup_logging


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch):
    for key in config_module.CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def test_main_without_config_file_returns_1(tmp_path):
    assert asyncio.run(main.main(str(tmp_path / "discord_token.txt"))) == 1


def test_main_without_token_returns_1(tmp_path):
    path = tmp_path / "discord_token.txt"
    path.write_text("DEV_GUILD_ID=1234\nDISCORD_TOKEN=\n", encoding="utf-8")

    assert asyncio.run(main.main(str(path))) == 1


def test_setup_logging_writes_rotating_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "bot.log"

    setup_logging(logging.INFO, log_file=str(log_file))
    logging.getLogger("DemoBot.Test").info("written to file")

    file_handlers = [
        handler for handler in restore_root_logger.handlers
        if isinstance(handler, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    file_handlers[0].flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_setup_logging_console_only_by_default(restore_root_logger):
    setup_logging(logging.INFO)

    assert not any(
        isinstance(handler, logging.handlers.RotatingFileHandler)
        for handler in restore_root_logger.handlers
    )
