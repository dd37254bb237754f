"""Tests for user-facing log messages."""

import logging

import pytest

from conftest import GLASSES_A
from services.display import DisplayDispatcher
from services.frame import PixelFrame
from services.encoder import encode
from services.session import DeviceSession
from utils.logger import strip_markup, user_guidance


@pytest.fixture
def file_logger(tmp_path):
    """Logger writing bare messages to a file, like the SDK's file handler"""
    path = tmp_path / "chemion.log"
    logger = logging.getLogger(f"guidance.{tmp_path.name}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = logging.FileHandler(str(path), mode="w")
    logger.addHandler(handler)

    def lines():
        handler.flush()
        return path.read_text().splitlines()

    yield logger, lines
    logger.removeHandler(handler)
    handler.close()


def test_strip_markup():
    assert strip_markup("[green]Connected to [bold]CHEMION[/bold][/green]") == "Connected to CHEMION"
    assert strip_markup("no markup here") == "no markup here"


def test_user_guidance_keeps_plain_copy_for_file(file_logger):
    logger, lines = file_logger

    user_guidance(logger, "[yellow]Put the glasses on[/yellow]")

    assert lines() == ["[yellow]Put the glasses on[/yellow]", "Put the glasses on"]


def test_user_guidance_without_file_handler(caplog):
    logger = logging.getLogger("guidance.console_only")
    logger.setLevel(logging.DEBUG)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        user_guidance(logger, "[green]Ready[/green]")

    assert [r.getMessage() for r in caplog.records] == ["[green]Ready[/green]"]
    assert caplog.records[0].markup is True


@pytest.mark.asyncio
async def test_connect_and_frame_sent_are_reported(file_logger, manager, config):
    logger, lines = file_logger
    session = DeviceSession(manager, config, logger)

    await session.connect(GLASSES_A)
    await DisplayDispatcher(logger).display(session, encode(PixelFrame.blank(4, 4)))

    assert "Connected to CHEMION_A" in lines()
    assert f"Frame sent to {GLASSES_A} (1 packets)" in lines()
