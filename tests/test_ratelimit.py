"""Tests for `bot.ratelimit`."""

import logging

from bot.ratelimit import RateLimitTracker, build_status_embed, classify_event


def test_tracker_records_only_rate_limit_messages():
    tracker = RateLimitTracker()
    tracker.attach()
    http_logger = logging.getLogger("discord.http")
    try:
        http_logger.debug("GET /users/@me with None has returned 200")
        http_logger.warning(
            "We are being rate limited. %s %s responded with 429. Retrying in %.2f seconds.",
            "POST", "/channels/1/messages", 1.5,
        )
    finally:
        tracker.detach()

    events = tracker.snapshot()
    assert len(events) == 1
    assert "**429 HIT**" in events[0]
    assert "Retrying in 1.50 seconds" in events[0]


def test_tracker_keeps_only_recent_events():
    tracker = RateLimitTracker(max_events=3)
    for index in range(5):
        record = logging.LogRecord(
            "discord.http", logging.DEBUG, __file__, 1,
            "A rate limit bucket (%s) has been exhausted.", (index,), None,
        )
        tracker.emit(record)

    events = tracker.snapshot()
    assert len(events) == 3
    assert "(2)" in events[0]
    assert "(4)" in events[-1]


def test_classify_event():
    assert classify_event("Global rate limit has been hit.") == "Global"
    assert classify_event("A rate limit bucket (x) has been exhausted.") == "PreEmptiveWait"
    assert classify_event("rate limit bucket updated") == "Bucket"


def test_status_embed_without_events():
    embed = build_status_embed([])

    assert embed.description == "```\nNo rate limit events recorded yet.\n```"
