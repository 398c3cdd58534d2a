"""Tests for forum delivery retry and backoff."""

import asyncio
import time

import httpx
import pytest

from issuerelay.exceptions import DeliveryError, DiscordAPIError
from issuerelay.models import AUTO_ARCHIVE_DURATION
from issuerelay.relay import ForumDelivery, RetryPolicy

from conftest import CHANNEL_ID, FakeForumClient, RecordingSleep, make_event


def _deliver(delivery, event):
    return asyncio.run(delivery.deliver(event))


def test_retry_policy_delays():
    policy = RetryPolicy()

    assert [policy.delay_ms(n) for n in (1, 2, 3, 4)] == [1000, 2000, 4000, 8000]


def test_first_attempt_success(recording_sleep):
    client = FakeForumClient([{"id": "555", "name": "[#42] Bug", "type": 11, "parent_id": CHANNEL_ID, "guild_id": "9"}])
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=recording_sleep)

    thread = _deliver(delivery, make_event(title="Bug"))

    assert thread.id == "555"
    assert thread.guild_id == "9"
    assert len(client.calls) == 1
    assert recording_sleep.delays == []


def test_request_shape():
    client = FakeForumClient()
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=RecordingSleep())

    _deliver(delivery, make_event(title="Bug", number=3))

    channel_id, request = client.calls[0]
    assert channel_id == CHANNEL_ID
    assert request.name == "[#3] Bug"
    assert request.message.content.startswith("## New Issue in widgets")
    assert request.auto_archive_duration == AUTO_ARCHIVE_DURATION == 1440


def test_missing_fields_default_to_local_values():
    client = FakeForumClient([{"id": 77, "type": 11}])
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=RecordingSleep())

    thread = _deliver(delivery, make_event(title="Bug", number=3))

    assert thread.id == "77"
    assert thread.name == "[#3] Bug"
    assert thread.parent_id == CHANNEL_ID
    assert thread.guild_id is None


def test_succeeds_on_third_attempt_after_backoff(recording_sleep):
    client = FakeForumClient([
        DiscordAPIError(502, "Bad Gateway"),
        httpx.ConnectError("connection refused"),
        {"id": "1", "type": 11},
    ])
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=recording_sleep)

    thread = _deliver(delivery, make_event())

    assert thread.id == "1"
    assert len(client.calls) == 3
    assert recording_sleep.delays == [1.0, 2.0]


def test_exhaustion_raises_after_three_attempts_without_final_wait(recording_sleep):
    client = FakeForumClient([DiscordAPIError(500, "boom")] * 3)
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=recording_sleep)

    with pytest.raises(DeliveryError) as exc_info:
        _deliver(delivery, make_event())

    assert len(client.calls) == 3
    assert recording_sleep.delays == [1.0, 2.0]
    assert exc_info.value.attempts == 3
    assert isinstance(exc_info.value.last_error, DiscordAPIError)
    assert "after 3 attempts" in str(exc_info.value)
    assert "boom" in str(exc_info.value)


def test_backoff_really_waits():
    """A 20ms base delay stands in for the default 1000ms, so the waits are 20ms then 40ms."""
    client = FakeForumClient([RuntimeError("one"), RuntimeError("two"), {"id": "1", "type": 11}])
    delivery = ForumDelivery(CHANNEL_ID, client, RetryPolicy(base_delay_ms=20))

    started = time.monotonic()
    _deliver(delivery, make_event())
    elapsed_ms = (time.monotonic() - started) * 1000

    assert elapsed_ms >= 20 + 40 - 5


def test_backoff_does_not_block_other_requests():
    slow = ForumDelivery(
        CHANNEL_ID,
        FakeForumClient([RuntimeError("down"), {"id": "slow", "type": 11}]),
        RetryPolicy(base_delay_ms=200),
    )
    fast = ForumDelivery(CHANNEL_ID, FakeForumClient([{"id": "fast", "type": 11}]))
    finished = []

    async def run(delivery):
        thread = await delivery.deliver(make_event())
        finished.append(thread.id)

    async def main():
        await asyncio.gather(run(slow), run(fast))

    asyncio.run(main())

    assert finished == ["fast", "slow"]


def test_response_without_id_is_not_retried(recording_sleep):
    client = FakeForumClient([{"message": "weird"}])
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=recording_sleep)

    with pytest.raises(DeliveryError):
        _deliver(delivery, make_event())

    assert len(client.calls) == 1
    assert recording_sleep.delays == []


def test_numeric_ids_in_response_are_coerced(recording_sleep):
    client = FakeForumClient([{"id": 1, "type": 11, "guild_id": 123, "parent_id": 456}])
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=recording_sleep)

    thread = _deliver(delivery, make_event())

    assert (thread.id, thread.parent_id, thread.guild_id) == ("1", "456", "123")
    assert len(client.calls) == 1


def test_unreadable_thread_response_is_a_delivery_error(recording_sleep):
    client = FakeForumClient([{"id": "1", "type": "forum thread"}])
    delivery = ForumDelivery(CHANNEL_ID, client, sleep=recording_sleep)

    with pytest.raises(DeliveryError) as exc_info:
        _deliver(delivery, make_event())

    assert exc_info.value.attempts == 1
    assert len(client.calls) == 1
    assert recording_sleep.delays == []
