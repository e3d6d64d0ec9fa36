# Demo Bot - Event Handlers
# This file manages Discord event listeners for the demo bot.
# Gateway events (connecting, joining a guild, a guild's data becoming available,
# direct messages, errors) are written to the console log so you can follow what the
# library is doing while you try the commands.
#
# File Interactions:
# - client.py: Events are registered here through setup_events()
# - utils/logging.py: Uses logging configuration for event tracking

import logging  # Library for recording what the bot is doing
import sys

import discord
from discord import app_commands

# Set up a logger to keep track of what happens in the bot
logger = logging.getLogger("DemoBot.Events")


def describe_guild_ready(guild) -> str:
    return (
        f"GUILD_READY event fired for guild: {guild.id} ({guild.name}). All data loaded - "
        f"Members: {len(guild.members)}, Channels: {len(guild.channels)}, Roles: {len(guild.roles)}"
    )


def describe_guild_added(guild) -> str:
    return (
        f"GUILD_ADDED event fired for guild: {guild.id} ({guild.name}). "
        f"Members in cache: {len(guild.members)}"
    )


def setup_events(bot):
    """Set up all the event handlers for the bot"""

    @bot.event
    async def on_ready():
        """Runs when the bot has connected and the initial cache is filled"""
        logger.info("Connected to Discord Gateway.")
        logger.info(f'Logged in as {bot.user} (ID: {bot.user.id})')
        logger.info(f'Connected to {len(bot.guilds)} guilds')  # A guild is Discord's term for a server

    @bot.event
    async def on_guild_join(guild: discord.Guild):
        """The bot was added to a new guild"""
        logger.info(describe_guild_added(guild))

    @bot.event
    async def on_guild_available(guild: discord.Guild):
        """A guild's data is now in the cache (at startup or after an outage)"""
        logger.info(describe_guild_ready(guild))

    @bot.event
    async def on_message(message: discord.Message):
        # Ignore messages that the bot itself sent
        if message.author == bot.user:
            return

        # DMs to the bot can be handled many ways; here we just log them
        if message.guild is None:
            logger.info(f"Received From: {message.author.name}\nMessage: {message.content}")
            return

        # Replacing on_message disables the Bot's default command handling, so hand it on
        await bot.process_commands(message)

    @bot.event
    async def on_error(event_method: str, *args, **kwargs):
        logger.error(f"discord.py reported an error in {event_method}", exc_info=sys.exc_info())

    @bot.tree.error
    async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
        command_name = interaction.command.qualified_name if interaction.command else "unknown"
        logger.error(f"Error in /{command_name}: {error}", exc_info=error)

        message = "❌ Something went wrong while running this command."
        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)

    # Log that all the event handlers have been set up successfully
    logger.info("Event handlers registered")
