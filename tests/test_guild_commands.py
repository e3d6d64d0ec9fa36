"""Tests for the embed builders in `bot.guild_commands`."""

from types import SimpleNamespace

import discord

from bot.guild_commands import (
    build_channel_list_embed,
    build_member_roles_embed,
    build_permissions_embed,
    build_role_list_embed,
    describe_channel_type,
    member_roles,
)


def _role(role_id, name, position=1, default=False, **permissions):
    return SimpleNamespace(
        id=role_id,
        name=name,
        position=position,
        permissions=discord.Permissions(**permissions),
        is_default=lambda: default,
    )


def test_member_roles_drop_everyone():
    everyone = _role(1, "@everyone", position=0, default=True)
    mod = _role(2, "Mod", kick_members=True)
    member = SimpleNamespace(roles=[everyone, mod])

    assert member_roles(member) == [mod]


def test_permissions_embed_combines_roles():
    roles = [_role(2, "Mod", kick_members=True), _role(3, "Admin", administrator=True)]

    embed = build_permissions_embed("ada", roles)

    values = {field.name: field.value for field in embed.fields}
    assert values["Administrator"] == "✅ Yes"
    assert values["Kick Members"] == "✅ Yes"
    assert values["Ban Members"] == "❌ No"
    assert values["Role Count"] == "2"
    assert embed.color == discord.Color.yellow()


def test_permissions_embed_without_admin_is_blue():
    embed = build_permissions_embed("ada", [])

    assert embed.color == discord.Color.blue()


def test_role_list_is_sorted_and_capped():
    roles = [_role(i, f"role-{i}", position=i) for i in range(15)]

    embed = build_role_list_embed(roles)

    assert len(embed.fields) == 10
    assert embed.fields[0].name == "role-14"
    assert embed.fields[-1].name == "role-5"


def test_member_roles_embed_summarizes_overflow():
    roles = [_role(i, f"role-{i}") for i in range(12)]

    embed = build_member_roles_embed("ada", roles, "debug")

    assert embed.description == "You have 12 role(s) in this guild:"
    assert embed.fields[0].value == "```\ndebug\n```"
    assert embed.fields[-1].value == "And 2 more roles"


def test_member_roles_embed_without_roles():
    embed = build_member_roles_embed("ada", [], "debug")

    assert embed.fields[-1].name == "No Roles"


def test_channel_list_uses_icons_and_limit():
    channels = [SimpleNamespace(id=i, name=f"c{i}", type=discord.ChannelType.text) for i in range(20)]
    channels[0].type = discord.ChannelType.voice

    embed = build_channel_list_embed("Guild", channels)

    assert len(embed.fields) == 15
    assert embed.fields[0].name == "🔊 c0"
    assert embed.fields[1].value == "Type: 0 | ID: 1"


def test_describe_channel_type():
    assert describe_channel_type(SimpleNamespace(type=discord.ChannelType.public_thread)) == "Public Thread"
    assert describe_channel_type(SimpleNamespace(type=99)) == "Unknown (99)"
