"""
Test cases for the subscriber persistence layer.
"""

import pytest

from database.models import Subscriber


@pytest.mark.asyncio
async def test_add_subscriber_is_insert_or_ignore(repo):
    assert await repo.add_subscriber(100) is True
    assert await repo.add_subscriber(100) is False

    subs = await repo.list_subscribers()
    assert [(s.chat_id, s.last_image_hash) for s in subs] == [(100, "")]


@pytest.mark.asyncio
async def test_remove_subscriber(repo):
    await repo.add_subscriber(100)

    assert await repo.remove_subscriber(100) is True
    assert await repo.remove_subscriber(100) is False
    assert await repo.list_subscribers() == []


@pytest.mark.asyncio
async def test_update_fingerprint(repo):
    await repo.add_subscriber(100)

    assert await repo.update_fingerprint(100, "abc123") is True
    assert await repo.update_fingerprint(999, "abc123") is False

    sub = await repo.get_subscriber(100)
    assert sub.last_image_hash == "abc123"


@pytest.mark.asyncio
async def test_batch_update_only_touches_given_rows(repo):
    for chat_id in (1, 2, 3):
        await repo.add_subscriber(chat_id)

    await repo.batch_update_fingerprints([
        Subscriber(chat_id=1, last_image_hash="new"),
        Subscriber(chat_id=3, last_image_hash="new"),
    ])

    hashes = {s.chat_id: s.last_image_hash for s in await repo.list_subscribers()}
    assert hashes == {1: "new", 2: "", 3: "new"}


@pytest.mark.asyncio
async def test_batch_update_skips_removed_subscribers(repo):
    await repo.add_subscriber(1)

    await repo.batch_update_fingerprints([
        Subscriber(chat_id=1, last_image_hash="new"),
        Subscriber(chat_id=42, last_image_hash="new"),
    ])

    subs = await repo.list_subscribers()
    assert [(s.chat_id, s.last_image_hash) for s in subs] == [(1, "new")]


@pytest.mark.asyncio
async def test_batch_update_with_nothing_is_noop(repo):
    await repo.add_subscriber(1)
    await repo.batch_update_fingerprints([])

    assert (await repo.get_subscriber(1)).last_image_hash == ""


@pytest.mark.asyncio
async def test_count_subscribers(repo):
    assert await repo.count_subscribers() == 0
    await repo.add_subscriber(1)
    await repo.add_subscriber(2)
    assert await repo.count_subscribers() == 2
