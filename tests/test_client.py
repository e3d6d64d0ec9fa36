"""Tests for `bot.client` and `bot.events`."""

import asyncio
import logging
from types import SimpleNamespace

import pytest
from discord.ext import commands

from bot.client import DemoBotClient
from bot.events import setup_events


class _FakeChannel:
    def __init__(self):
        self.sent = []

    async def send(self, content, embed=None):
        self.sent.append((content, embed))


def test_send_demo_message_to_channel_without_send_is_logged():
    async def scenario():
        client = DemoBotClient()
        # A category channel is cached but cannot receive messages
        client.get_channel = lambda channel_id: SimpleNamespace(id=channel_id)
        return await client.send_demo_message("123")

    assert asyncio.run(scenario()) is False


def test_send_demo_message_with_invalid_id_is_logged():
    async def scenario():
        client = DemoBotClient()
        return await client.send_demo_message("not-a-number")

    assert asyncio.run(scenario()) is False


def test_send_demo_message_success():
    channel = _FakeChannel()

    async def scenario():
        client = DemoBotClient()
        client.get_channel = lambda channel_id: channel
        return await client.send_demo_message("123")

    assert asyncio.run(scenario()) is True
    content, embed = channel.sent[0]
    assert content == "Hello from the testing app!"
    assert embed.title == "Direct Channel Send"


def test_close_cleans_up_after_cancelled_timer(monkeypatch: pytest.MonkeyPatch):
    closed = []

    async def fake_close(self):
        closed.append(self)

    monkeypatch.setattr(commands.Bot, "close", fake_close)

    async def scenario():
        client = DemoBotClient(snapshot_interval=3600)
        client.ratelimit_tracker.attach()
        client.snapshot_timer.start()
        # Shutdown cancelled the tick loop before close() ran
        client.snapshot_timer._loop_task.cancel()
        await client.close()
        return client

    client = asyncio.run(scenario())

    assert closed == [client]
    assert not client.snapshot_timer.running
    assert client.ratelimit_tracker not in logging.getLogger("discord.http").handlers


class _FakeBot:
    def __init__(self):
        self.user = SimpleNamespace(id=1, name="demo")
        self.handlers = {}
        self.processed = []
        self.tree = SimpleNamespace(error=lambda coro: coro)

    def event(self, coro):
        self.handlers[coro.__name__] = coro
        return coro

    async def process_commands(self, message):
        self.processed.append(message)


def test_on_message_forwards_guild_messages_to_commands():
    bot = _FakeBot()
    setup_events(bot)
    author = SimpleNamespace(id=2, name="ada")
    guild_message = SimpleNamespace(author=author, guild=SimpleNamespace(id=5), content="@demo hi")
    direct_message = SimpleNamespace(author=author, guild=None, content="hello")
    own_message = SimpleNamespace(author=bot.user, guild=SimpleNamespace(id=5), content="echo")

    async def scenario():
        for message in (guild_message, direct_message, own_message):
            await bot.handlers["on_message"](message)

    asyncio.run(scenario())

    assert bot.processed == [guild_message]
