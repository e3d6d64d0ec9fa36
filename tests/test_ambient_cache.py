"""Tests for `services.ambient_cache`."""

import io
from types import SimpleNamespace

from services.ambient_cache import DiscordAmbientCache
from services.ambient_snapshot import AmbientSnapshotService


class FakeClient:
    """Stands in for discord.Client: guilds plus a user cache."""

    def __init__(self, guilds, users):
        self.guilds = guilds
        self._users = {user.id: user for user in users}

    def get_user(self, user_id):
        return self._users.get(user_id)


def _build_client():
    alice = SimpleNamespace(id=10, name="alice")
    bob = SimpleNamespace(id=11, name="bob")
    guild_a = SimpleNamespace(
        id=1,
        channels=[SimpleNamespace(id=100), SimpleNamespace(id=101)],
        threads=[SimpleNamespace(id=102)],
        members=[SimpleNamespace(id=10), SimpleNamespace(id=11)],
    )
    guild_b = SimpleNamespace(
        id=2,
        channels=[SimpleNamespace(id=200)],
        threads=[],
        # id 12 has no cached user profile
        members=[SimpleNamespace(id=10), SimpleNamespace(id=12)],
    )
    return FakeClient([guild_a, guild_b], [alice, bob])


def test_collections_are_flattened_per_guild():
    cache = DiscordAmbientCache(_build_client())

    assert [guild.id for guild in cache.guilds] == [1, 2]
    assert [(guild.id, channel.id) for guild, channel in cache.channels] == [
        (1, 100), (1, 101), (1, 102), (2, 200)
    ]
    assert [(guild.id, member.id) for guild, member in cache.members] == [
        (1, 10), (1, 11), (2, 10), (2, 12)
    ]


def test_users_skip_members_without_cached_profile():
    cache = DiscordAmbientCache(_build_client())

    assert [(guild.id, user.name) for guild, user in cache.users] == [
        (1, "alice"), (1, "bob"), (2, "alice")
    ]


def test_collections_are_read_only_snapshots():
    client = _build_client()
    cache = DiscordAmbientCache(client)

    guilds = cache.guilds
    client.guilds.append(SimpleNamespace(id=3, channels=[], threads=[], members=[]))

    assert isinstance(guilds, tuple)
    assert len(guilds) == 2
    assert len(cache.guilds) == 3


def test_snapshot_over_discord_cache():
    sink = io.StringIO()
    service = AmbientSnapshotService(DiscordAmbientCache(_build_client()), sink=sink, color=False)

    assert service.report_once() == "[AmbientSnapshot] Guilds=2 | Channels=4 | Members=4 | Users=3"
