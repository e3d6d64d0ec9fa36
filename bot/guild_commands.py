# Demo Bot - Guild Commands (permissions, roles, channels)
# This file holds the commands that look at the current server: which permissions the
# caller's roles grant, which roles exist, and which channels are cached.
# All data comes from discord.py's cache; nothing is fetched from the API.
#
# File Interactions:
# - client.py: Registered through setup_guild_commands()
# - commands.py: Same response style as the other demo commands

import logging
from typing import List, Sequence

import discord
from discord import app_commands

logger = logging.getLogger("DemoBot.GuildCommands")

GUILD_ONLY_MESSAGE = "❌ This command can only be used in a guild (server)."

# Show at most this many roles / channels in one embed
MAX_ROLES_SHOWN = 10
MAX_CHANNELS_SHOWN = 15

# Discord channel type numbers -> icon and description
CHANNEL_ICONS = {
    0: "💬",   # Text
    2: "🔊",   # Voice
    4: "📁",   # Category
    5: "📢",   # Announcement
    13: "🎙️",  # Stage
}

CHANNEL_TYPE_NAMES = {
    0: "Text Channel",
    2: "Voice Channel",
    4: "Category",
    5: "Announcement Channel",
    10: "Announcement Thread",
    11: "Public Thread",
    12: "Private Thread",
    13: "Stage Channel",
}


def yes_no(flag: bool) -> str:
    return "✅ Yes" if flag else "❌ No"


def channel_type_value(channel) -> int:
    # discord.ChannelType is an enum; plain ints are accepted too
    return getattr(channel.type, "value", channel.type)


def channel_icon(channel) -> str:
    return CHANNEL_ICONS.get(channel_type_value(channel), "❓")


def describe_channel_type(channel) -> str:
    type_value = channel_type_value(channel)
    return CHANNEL_TYPE_NAMES.get(type_value, f"Unknown ({type_value})")


def member_roles(member) -> List[discord.Role]:
    """The member's roles without @everyone"""
    return [role for role in member.roles if not role.is_default()]


def build_permissions_embed(display_name: str, roles: Sequence[discord.Role]) -> discord.Embed:
    """Summarize what the given roles allow (a permission counts if any role grants it)"""
    is_admin = any(role.permissions.administrator for role in roles)
    can_manage_channels = any(role.permissions.manage_channels for role in roles)
    can_manage_roles = any(role.permissions.manage_roles for role in roles)
    can_kick = any(role.permissions.kick_members for role in roles)
    can_ban = any(role.permissions.ban_members for role in roles)

    embed = discord.Embed(
        title=f"🔐 Permissions for {display_name}",
        description="Checking permissions based on your roles:",
        color=discord.Color.yellow() if is_admin else discord.Color.blue()
    )
    embed.add_field(name="Administrator", value=yes_no(is_admin), inline=True)
    embed.add_field(name="Manage Channels", value=yes_no(can_manage_channels), inline=True)
    embed.add_field(name="Manage Roles", value=yes_no(can_manage_roles), inline=True)
    embed.add_field(name="Kick Members", value=yes_no(can_kick), inline=True)
    embed.add_field(name="Ban Members", value=yes_no(can_ban), inline=True)
    embed.add_field(name="Role Count", value=str(len(roles)), inline=True)
    return embed


def build_role_list_embed(roles: Sequence[discord.Role]) -> discord.Embed:
    """Top roles by position, highest first"""
    top_roles = sorted(roles, key=lambda role: role.position, reverse=True)[:MAX_ROLES_SHOWN]

    embed = discord.Embed(title=f"🎭 Roles in this Guild (Top {MAX_ROLES_SHOWN})", color=discord.Color.purple())
    for role in top_roles:
        perm_info = "👑 Administrator" if role.permissions.administrator else f"Perms: {role.permissions.value}"
        embed.add_field(name=role.name, value=f"ID: {role.id}\n{perm_info}", inline=True)
    return embed


def build_member_roles_embed(display_name: str, roles: Sequence[discord.Role], debug_info: str) -> discord.Embed:
    embed = discord.Embed(
        title=f"🎭 Roles for {display_name}",
        description=f"You have {len(roles)} role(s) in this guild:",
        color=discord.Color.green()
    )
    embed.add_field(name="Debug Info", value=f"```\n{debug_info}\n```", inline=False)

    if roles:
        for role in roles[:MAX_ROLES_SHOWN]:
            embed.add_field(name=role.name, value=f"ID: {role.id}\nPosition: {role.position}", inline=True)
        if len(roles) > MAX_ROLES_SHOWN:
            embed.add_field(name="...", value=f"And {len(roles) - MAX_ROLES_SHOWN} more roles", inline=False)
    else:
        embed.add_field(name="No Roles", value="No roles found for this member (besides @everyone)", inline=False)
    return embed


def build_channel_list_embed(guild_name: str, channels: Sequence) -> discord.Embed:
    embed = discord.Embed(
        title=f"📺 Channels in {guild_name} (First {MAX_CHANNELS_SHOWN})",
        color=discord.Color.blue()
    )
    for channel in channels[:MAX_CHANNELS_SHOWN]:
        embed.add_field(
            name=f"{channel_icon(channel)} {channel.name}",
            value=f"Type: {channel_type_value(channel)} | ID: {channel.id}",
            inline=True
        )
    return embed


def build_channel_info_embed(channel) -> discord.Embed:
    embed = discord.Embed(title="📺 Channel Information", color=discord.Color.teal())
    embed.add_field(name="Name", value=channel.name, inline=True)
    embed.add_field(name="Type", value=describe_channel_type(channel), inline=True)
    embed.add_field(name="ID", value=str(channel.id), inline=True)
    embed.add_field(name="Guild", value=channel.guild.name, inline=True)
    embed.add_field(name="Guild ID", value=str(channel.guild.id), inline=True)
    return embed


def build_channel_types_embed(guild) -> discord.Embed:
    embed = discord.Embed(title="📊 Channel Type Breakdown", color=discord.Color.green())
    embed.add_field(name="📁 Categories", value=str(len(guild.categories)), inline=True)
    embed.add_field(name="💬 Text Channels", value=str(len(guild.text_channels)), inline=True)
    embed.add_field(name="🔊 Voice Channels", value=str(len(guild.voice_channels)), inline=True)
    embed.add_field(name="🧵 Threads", value=str(len(guild.threads)), inline=True)
    embed.add_field(name="📺 Total Channels", value=str(len(guild.channels)), inline=True)
    return embed


async def report_error(interaction: discord.Interaction, action: str, error: Exception, ephemeral: bool = False):
    """Tell the user what failed and keep the traceback in the log"""
    logger.error(f"Error {action}: {error}", exc_info=error)
    message = f"❌ Error {action}: {error}"
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=ephemeral)
    else:
        await interaction.response.send_message(message, ephemeral=ephemeral)


def setup_guild_commands(bot):
    """Register /permissions, /roles and /channels"""

    @bot.tree.command(name="permissions", description="Check permissions for the current user")
    async def permissions(interaction: discord.Interaction):
        guild = interaction.guild
        if guild is None:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE)
            return

        try:
            member = guild.get_member(interaction.user.id)
            if member is None:
                await interaction.response.send_message("❌ Could not find member data.")
                return

            embed = build_permissions_embed(member.display_name, member_roles(member))
            await interaction.response.send_message("Here are your permissions:", embed=embed)
        except Exception as e:
            await report_error(interaction, "checking permissions", e)

    roles_group = app_commands.Group(name="roles", description="Role management demo commands")

    @roles_group.command(name="list", description="List all roles in this guild")
    async def roles_list(interaction: discord.Interaction):
        guild = interaction.guild
        if guild is None:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE)
            return

        try:
            if not guild.roles:
                await interaction.response.send_message("❌ No roles found in this guild.")
                return

            await interaction.response.send_message(
                "Here are the roles in this guild:", embed=build_role_list_embed(guild.roles)
            )
        except Exception as e:
            await report_error(interaction, "listing roles", e)

    @roles_group.command(name="demo", description="Check your roles in this guild")
    async def roles_demo(interaction: discord.Interaction):
        guild = interaction.guild
        if guild is None:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE)
            return

        try:
            user_id = interaction.user.id
            member = guild.get_member(user_id)
            if member is None:
                await interaction.response.send_message(
                    f"❌ Could not find member data for user {user_id} in guild {guild.id}.\n"
                    f"Total members in cache: {len(guild.members)}"
                )
                return

            roles = member_roles(member)
            debug_info = (
                f"Member: {member.display_name}\n"
                f"User ID: {user_id}\n"
                f"Member Role IDs: [{', '.join(str(role.id) for role in roles)}]\n"
                f"Roles in guild cache: {len(guild.roles)}"
            )
            embed = build_member_roles_embed(member.display_name, roles, debug_info)
            await interaction.response.send_message("Here are your roles:", embed=embed)
        except Exception as e:
            await report_error(interaction, "checking roles", e)

    channels_group = app_commands.Group(name="channels", description="Channel management demo commands")

    @channels_group.command(name="list", description="List all channels in this guild")
    async def channels_list(interaction: discord.Interaction):
        guild = interaction.guild
        if guild is None:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE, ephemeral=True)
            return

        try:
            channels = list(guild.channels)
            if not channels:
                await interaction.response.send_message("❌ No channels found in this guild.", ephemeral=True)
                return

            await interaction.response.send_message(
                "Here are the channels:", embed=build_channel_list_embed(guild.name, channels), ephemeral=True
            )
        except Exception as e:
            await report_error(interaction, "listing channels", e, ephemeral=True)

    @channels_group.command(name="info", description="Show information about the current channel")
    async def channels_info(interaction: discord.Interaction):
        channel = interaction.channel
        if channel is None:
            await interaction.response.send_message("❌ Could not determine channel ID.", ephemeral=True)
            return

        try:
            if getattr(channel, "guild", None) is None:
                await interaction.response.send_message("❌ Could not find channel information.", ephemeral=True)
                return

            await interaction.response.send_message(
                "Here is the channel:", embed=build_channel_info_embed(channel), ephemeral=True
            )
        except Exception as e:
            await report_error(interaction, "getting channel info", e, ephemeral=True)

    @channels_group.command(name="types", description="Show channel type breakdown for this guild")
    async def channels_types(interaction: discord.Interaction):
        guild = interaction.guild
        if guild is None:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE, ephemeral=True)
            return

        try:
            await interaction.response.send_message(
                "Here is the channel breakdown:", embed=build_channel_types_embed(guild), ephemeral=True
            )
        except Exception as e:
            await report_error(interaction, "analyzing channel types", e, ephemeral=True)

    bot.tree.add_command(roles_group)
    bot.tree.add_command(channels_group)
    logger.info("Guild commands registered")
