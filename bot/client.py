# Demo Bot - Client Implementation
# This file creates the main bot client that connects to Discord.
# It sets up permissions (intents), asks discord.py to preload members so the cache is
# complete, registers all slash commands, syncs them (instantly to a development guild
# when one is configured), and starts the periodic ambient snapshot once the bot is ready.
#
# File Interactions:
# - main.py: Creates an instance of DemoBotClient and starts it
# - commands.py, components.py, guild_commands.py, ratelimit.py: Registered in setup_hook()
# - events.py: Registered through setup_events()
# - services/ambient_snapshot.py: AmbientSnapshotTimer runs while the bot is connected
# - services/ambient_cache.py: Read-only view over the bot's cache

import asyncio          # For the background startup task
import logging          # For logging information, warnings, and errors
from typing import Optional, Set

import discord          # The main Discord API library
from discord.ext import commands  # Discord's command framework (provides the app command tree)

from bot.ratelimit import RateLimitTracker, setup_ratelimit_commands
from services.ambient_cache import DiscordAmbientCache
from services.ambient_snapshot import AmbientSnapshotService, AmbientSnapshotTimer
from utils.config import DEFAULT_SNAPSHOT_INTERVAL

# Set up logging to track what the bot is doing
logger = logging.getLogger("DemoBot.Client")


def build_intents() -> discord.Intents:
    """Request only what the demo needs. Members are required for the member cache."""
    intents = discord.Intents.none()
    intents.guilds = True           # Guilds, channels, roles and threads
    intents.members = True          # Guild members (privileged: enable it in the developer portal)
    intents.dm_messages = True      # Direct messages to the bot
    intents.guild_messages = True   # Messages in guild channels
    return intents


def build_demo_embed() -> discord.Embed:
    return discord.Embed(
        title="Direct Channel Send",
        description="This message was sent via channel.send after startup.",
        color=discord.Color.teal()
    )


class DemoBotClient(commands.Bot):
    """
    The demo bot client.
    Extends Discord's Bot class with command registration, development guild syncing,
    and the ambient snapshot timer.
    """
    def __init__(self, dev_guild_id: Optional[str] = None, demo_channel_id: Optional[str] = None,
                 snapshot_interval: int = DEFAULT_SNAPSHOT_INTERVAL):
        # Slash commands do all the work; mentioning the bot is the only text prefix
        # (events.on_message hands guild messages to process_commands)
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=build_intents(),
            # Preload every guild's members on start so the cache is populated
            chunk_guilds_at_startup=True
        )

        self.dev_guild_id = dev_guild_id
        self.demo_channel_id = demo_channel_id

        # Read-only view of what the library has cached, shared by /ambient and the snapshot timer
        self.ambient_cache = DiscordAmbientCache(self)
        self.snapshot_service = AmbientSnapshotService(self.ambient_cache)
        self.snapshot_timer = AmbientSnapshotTimer(self.snapshot_service, snapshot_interval)

        # Keeps the rate limit commands supplied with recent events
        self.ratelimit_tracker = RateLimitTracker()

        # Background tasks started from setup_hook (kept so they are not garbage collected)
        self._background_tasks: Set[asyncio.Task] = set()

        # Import and set up event handlers
        # We import these here to avoid circular imports
        from bot.events import setup_events
        setup_events(self)

        logger.info("Demo bot client initialized")

    async def setup_hook(self) -> None:
        """Called by discord.py after login and before connecting to the gateway"""
        from bot.commands import setup_commands
        from bot.components import setup_component_commands
        from bot.guild_commands import setup_guild_commands

        setup_commands(self, self.ambient_cache)
        setup_component_commands(self)
        setup_guild_commands(self)
        setup_ratelimit_commands(self, self.ratelimit_tracker)
        self.ratelimit_tracker.attach()

        await self.sync_commands()

        task = asyncio.create_task(self._after_ready())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def sync_commands(self) -> None:
        """Push slash commands to Discord

        Development mode: with a development guild configured, commands are copied
        to that guild and show up instantly. Otherwise they are synced globally,
        which can take a while to appear.
        """
        if self.dev_guild_id:
            guild = discord.Object(id=int(self.dev_guild_id))
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info(f"Synced {len(synced)} commands to development guild {self.dev_guild_id}")
        else:
            synced = await self.tree.sync()
            logger.info(f"Synced {len(synced)} global commands")

    async def _after_ready(self) -> None:
        await self.wait_until_ready()

        # Timer-driven ambient snapshot logger (diagnostic/demo)
        self.snapshot_timer.start()

        # Optional: demonstrate sending directly to a channel when DEMO_CHANNEL_ID is set
        if self.demo_channel_id:
            await self.send_demo_message(self.demo_channel_id)

    async def send_demo_message(self, channel_id: str) -> bool:
        """Send a greeting and an embed to a channel; failures are logged, not raised

        Returns:
            bool: True if the message was sent
        """
        try:
            channel = self.get_channel(int(channel_id)) or await self.fetch_channel(int(channel_id))
            await channel.send("Hello from the testing app!", embed=build_demo_embed())
            logger.info(f"Sent a demo message to channel {channel_id}.")
            return True
        except Exception as e:
            logger.error(f"Failed to send demo message to channel {channel_id}: {e}", exc_info=True)
            return False

    async def close(self) -> None:
        # Stop the timer before the connection goes away
        try:
            await self.snapshot_timer.stop()
        finally:
            self.ratelimit_tracker.detach()
            for task in list(self._background_tasks):
                task.cancel()
            await super().close()
