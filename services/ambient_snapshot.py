# Demo Bot - Ambient Snapshot Reporter
# This file prints a one-line summary of what the Discord library currently has cached.
# For each cached collection (guilds, channels, members, users) it counts the raw number
# of entries and the number of distinct entries (by ID), and shows "raw→distinct" when a
# collection contains duplicates. A small timer runs the report periodically.
#
# File Interactions:
# - services/ambient_cache.py: Provides the four cached collections that get counted
# - bot/client.py: Creates the service and starts AmbientSnapshotTimer once the bot is ready
# - bot/commands.py: /ambient info shows the same raw counts inside Discord
# - utils/config.py: get_snapshot_interval() supplies the timer interval

import asyncio    # For the periodic timer and fire-and-forget report tasks
import logging    # For recording timer start/stop
import sys        # Default output sink is the console (stdout)
import threading  # Lock that keeps each report line in one piece
from typing import Any, Callable, Hashable, Optional, Sequence, Set, TextIO

from colorama import Fore, Style  # Console colors for the [AmbientSnapshot] tag

logger = logging.getLogger("DemoBot.AmbientSnapshot")

SNAPSHOT_TAG = "[AmbientSnapshot]"

# Green is the color used for Information-level console lines
TAG_COLOR = Fore.GREEN

# One lock per process: all reporters share the console
_sink_lock = threading.Lock()


def count_distinct(source: Sequence[Any], key: Callable[[Any], Hashable]) -> int:
    """Count the number of unique keys in a collection

    Args:
        source: Collection to scan (never modified)
        key: Function that picks a stable, hashable key for each item

    Returns:
        int: Number of distinct keys (0 for an empty collection)
    """
    if len(source) == 0:
        return 0

    seen: Set[Hashable] = set()
    for item in source:
        seen.add(key(item))
    return len(seen)


def format_pair(raw: int, distinct: int) -> str:
    """Render a count as "raw" or "raw→distinct" when duplicates were found"""
    if raw == distinct:
        return str(raw)
    return f"{raw}→{distinct}"


# Keys used to decide whether two cache entries describe the same thing.
# Guilds are identified by their own ID, everything else by "guild_id:inner_id".
def guild_key(guild) -> Hashable:
    return guild.id


def channel_key(pair) -> Hashable:
    guild, channel = pair
    return f"{guild.id}:{channel.id}"


def member_key(pair) -> Hashable:
    guild, member = pair
    return f"{guild.id}:{member.id}"


def user_key(pair) -> Hashable:
    guild, user = pair
    return f"{guild.id}:{user.id}"


def build_snapshot_body(cache) -> str:
    """Build everything that follows the tag, starting with a space

    Args:
        cache: Object exposing guilds, channels, members and users sequences

    Returns:
        str: " Guilds=.. | Channels=.. | Members=.. | Users=.."
    """
    # Distinct counts (deduplicated by ID)
    distinct_guilds = count_distinct(cache.guilds, guild_key)
    distinct_channels = count_distinct(cache.channels, channel_key)
    distinct_members = count_distinct(cache.members, member_key)
    distinct_users = count_distinct(cache.users, user_key)

    # Raw counts (whatever the cache holds, duplicates included)
    raw_guilds = len(cache.guilds)
    raw_channels = len(cache.channels)
    raw_members = len(cache.members)
    raw_users = len(cache.users)

    return (
        f" Guilds={format_pair(raw_guilds, distinct_guilds)} | "
        f"Channels={format_pair(raw_channels, distinct_channels)} | "
        f"Members={format_pair(raw_members, distinct_members)} | "
        f"Users={format_pair(raw_users, distinct_users)}"
    )


class AmbientSnapshotService:
    """
    Writes one summary line about the ambient cache to an output sink.
    The cache is handed in by the caller; the service never changes it and keeps no state
    between reports.
    """

    def __init__(self, cache=None, sink: Optional[TextIO] = None, color: bool = True):
        # The cache can also be passed to report_once() directly
        self.cache = cache
        # Default to the console; tests pass an io.StringIO
        self.sink = sink if sink is not None else sys.stdout
        # Plain-text sinks (files, StringIO) can turn coloring off
        self.color = color

    def report_once(self, cache=None) -> str:
        """Count the cached collections and write a single snapshot line

        Args:
            cache: Collections to report on (defaults to the one given at construction)

        Returns:
            str: The uncolored line that was written (without the newline)

        Raises:
            ValueError: If no cache was given here or at construction
        """
        cache = cache if cache is not None else self.cache
        if cache is None:
            raise ValueError("AmbientSnapshotService needs a cache to report on")
        body = build_snapshot_body(cache)

        if self.color:
            # Highlight the tag like an INFO log level, then reset to the normal color
            text = f"{TAG_COLOR}{SNAPSHOT_TAG}{Style.RESET_ALL}{body}\n"
        else:
            text = f"{SNAPSHOT_TAG}{body}\n"

        # Tag and body go out in one write so overlapping reports never mix their output
        with _sink_lock:
            self.sink.write(text)
            self.sink.flush()

        return f"{SNAPSHOT_TAG}{body}"

    async def run_once_async(self, cancel_event: Optional[asyncio.Event] = None) -> str:
        """Async entry point used by the timer

        The report is quick and synchronous, so cancel_event is accepted only to
        match the timer's signature; a report that has started always completes.
        """
        return self.report_once()


class AmbientSnapshotTimer:
    """
    Runs AmbientSnapshotService.run_once_async on a fixed interval.

    Each tick starts the report as its own task and goes straight back to sleeping,
    so a slow report never delays the next tick. Overlapping reports are not prevented;
    the console lock only keeps their lines from interleaving.
    """

    def __init__(self, service: AmbientSnapshotService, interval: float = 60):
        self.service = service
        self.interval = interval
        self.cancel_event = asyncio.Event()
        self._loop_task: Optional[asyncio.Task] = None
        # Keep references to running reports so they are not garbage collected mid-run
        self._pending: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def start(self) -> None:
        """Start ticking (first report fires immediately). Must be called inside an event loop."""
        if self.running:
            return
        self.cancel_event = asyncio.Event()
        self._loop_task = asyncio.get_running_loop().create_task(self._tick_loop())
        logger.info(f"Ambient snapshot timer started (every {self.interval}s)")

    async def _tick_loop(self) -> None:
        while not self.cancel_event.is_set():
            # Fire-and-forget: the work is small and purely logging
            task = asyncio.create_task(self.service.run_once_async(self.cancel_event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

            try:
                await asyncio.wait_for(self.cancel_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue

    async def stop(self) -> None:
        """Stop scheduling new reports. Reports already running are left to finish."""
        self.cancel_event.set()
        loop_task, self._loop_task = self._loop_task, None
        if loop_task is None:
            return

        try:
            await loop_task
        except asyncio.CancelledError:
            # Shutdown may have cancelled the tick loop already; only our own cancellation propagates
            if not loop_task.cancelled():
                raise
        logger.info("Ambient snapshot timer stopped")
