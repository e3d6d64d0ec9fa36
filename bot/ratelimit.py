# Demo Bot - Rate Limit Monitoring
# discord.py handles Discord's rate limits on its own (bucket tracking, waiting before a
# bucket runs out, retrying after a 429). It reports that activity through its
# "discord.http" logger. This file listens to those log records, keeps the last few in
# memory, and shows them with the /ratelimit commands.
#
# File Interactions:
# - bot/client.py: Attaches the tracker and registers the commands through setup_ratelimit_commands()
# - utils/logging.py: The tracker is just another logging handler next to the console one

import logging     # The tracker is a logging.Handler
import threading   # Log records can arrive from any thread
from collections import deque
from datetime import datetime
from typing import List

import discord
from discord import app_commands

logger = logging.getLogger("DemoBot.RateLimit")

# Only the most recent events are kept
MAX_EVENTS = 10

# Logger that discord.py uses for REST requests and rate limit handling
HTTP_LOGGER_NAME = "discord.http"


def classify_event(message: str) -> str:
    """Pick a short label for a rate limit log message"""
    lowered = message.lower()
    if "429" in lowered:
        return "**429 HIT**"
    if "global" in lowered:
        return "Global"
    if "exhausted" in lowered or "pre-emptive" in lowered:
        return "PreEmptiveWait"
    return "Bucket"


class RateLimitTracker(logging.Handler):
    """
    Logging handler that remembers recent rate limit messages from discord.py.
    Everything else logged by the HTTP client is ignored.
    """

    def __init__(self, max_events: int = MAX_EVENTS):
        super().__init__(level=logging.DEBUG)
        self._events = deque(maxlen=max_events)
        self._events_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if "rate limit" not in message.lower():
            return

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        with self._events_lock:
            # deque(maxlen=...) drops the oldest entry once full
            self._events.append(f"[{timestamp}] {classify_event(message)}: {message}")

    def snapshot(self) -> List[str]:
        """Copy of the recent events, oldest first"""
        with self._events_lock:
            return list(self._events)

    def attach(self) -> None:
        """Start listening to discord.py's HTTP logger"""
        http_logger = logging.getLogger(HTTP_LOGGER_NAME)
        if self not in http_logger.handlers:
            http_logger.addHandler(self)
        # Bucket messages are logged at DEBUG; console handlers still filter at their own level
        http_logger.setLevel(logging.DEBUG)

    def detach(self) -> None:
        logging.getLogger(HTTP_LOGGER_NAME).removeHandler(self)


def build_status_embed(events: List[str]) -> discord.Embed:
    """Embed listing recent rate limit activity"""
    event_log = "\n".join(events) if events else "No rate limit events recorded yet."

    embed = discord.Embed(
        title="🚦 Rate Limit Activity",
        description=f"```\n{event_log}\n```",
        color=discord.Color.blue()
    )
    embed.add_field(
        name="Info",
        value="Rate limit events are tracked automatically. Use commands to generate activity.",
        inline=False
    )
    return embed


def build_info_embed() -> discord.Embed:
    """Embed explaining how rate limits are handled"""
    embed = discord.Embed(
        title="🚦 Rate Limiting",
        description="discord.py includes automatic rate limit handling to prevent 429 errors.",
        color=discord.Color.green()
    )
    embed.add_field(name="Bucket Updates", value="Tracks remaining requests per endpoint bucket", inline=False)
    embed.add_field(name="Pre-emptive Waits", value="Automatically delays requests to avoid hitting limits", inline=False)
    embed.add_field(name="429 Handling", value="Retries automatically when rate limited", inline=False)
    embed.add_field(name="Request Queuing", value="Queues requests during global rate limits", inline=False)
    embed.add_field(name="Monitoring", value="Use `/ratelimit status` to see recent activity", inline=False)
    return embed


def setup_ratelimit_commands(bot, tracker: RateLimitTracker):
    """Register the /ratelimit command group"""

    ratelimit_group = app_commands.Group(name="ratelimit", description="Rate limit monitoring demo commands")

    @ratelimit_group.command(name="status", description="Show recent rate limit activity")
    async def status(interaction: discord.Interaction):
        await interaction.response.send_message(
            "Recent rate limit activity:", embed=build_status_embed(tracker.snapshot())
        )

    @ratelimit_group.command(name="info", description="Explains the rate limiting system")
    async def info(interaction: discord.Interaction):
        await interaction.response.send_message("Rate limiting information:", embed=build_info_embed())

    bot.tree.add_command(ratelimit_group)
    logger.info("Rate limit commands registered")
