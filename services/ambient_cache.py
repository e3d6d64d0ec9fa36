# Demo Bot - Ambient Cache View
# This file exposes the entities discord.py already keeps in memory (guilds, channels,
# members and users) as four plain read-only sequences, so other code can count or list
# them without knowing how the library stores them.
#
# File Interactions:
# - services/ambient_snapshot.py: Counts the sequences exposed here
# - bot/client.py: Builds a DiscordAmbientCache around the running bot
# - bot/commands.py: /ambient info reads the same view

from dataclasses import dataclass, field
from typing import Any, Sequence, Tuple

import discord


class DiscordAmbientCache:
    """
    Read-only view over a discord.py client's cache.

    Every property builds a fresh tuple from the client's current state, so callers
    get a consistent snapshot and cannot modify what the library holds.
    """

    def __init__(self, client: discord.Client):
        self.client = client

    @property
    def guilds(self) -> Sequence[discord.Guild]:
        return tuple(self.client.guilds)

    @property
    def channels(self) -> Sequence[Tuple[discord.Guild, discord.abc.GuildChannel]]:
        """Every (guild, channel) pair, threads included"""
        pairs = []
        for guild in self.client.guilds:
            for channel in guild.channels:
                pairs.append((guild, channel))
            for thread in guild.threads:
                pairs.append((guild, thread))
        return tuple(pairs)

    @property
    def members(self) -> Sequence[Tuple[discord.Guild, discord.Member]]:
        pairs = []
        for guild in self.client.guilds:
            for member in guild.members:
                pairs.append((guild, member))
        return tuple(pairs)

    @property
    def users(self) -> Sequence[Tuple[discord.Guild, discord.User]]:
        """(guild, user) pairs for every member whose profile is in the user cache"""
        pairs = []
        for guild in self.client.guilds:
            for member in guild.members:
                user = self.client.get_user(member.id)
                if user is not None:
                    pairs.append((guild, user))
        return tuple(pairs)


@dataclass(frozen=True)
class StaticAmbientCache:
    """Fixed collections with the same shape as DiscordAmbientCache (used in tests and tooling)"""
    guilds: Sequence[Any] = field(default_factory=tuple)
    channels: Sequence[Tuple[Any, Any]] = field(default_factory=tuple)
    members: Sequence[Tuple[Any, Any]] = field(default_factory=tuple)
    users: Sequence[Tuple[Any, Any]] = field(default_factory=tuple)

