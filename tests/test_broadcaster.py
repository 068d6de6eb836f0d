"""
Test cases for concurrent image fan-out.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from delivery.broadcaster import DeliveryResult, broadcast_image


@pytest.mark.asyncio
async def test_every_outcome_is_reported(failing_sender, sample_image):
    sender = failing_sender(2)

    results = await broadcast_image(sender, [1, 2, 3], sample_image, caption="hi")

    assert results == [
        DeliveryResult(chat_id=1, delivered=True),
        DeliveryResult(chat_id=2, delivered=False),
        DeliveryResult(chat_id=3, delivered=True),
    ]


@pytest.mark.asyncio
async def test_unexpected_exception_is_isolated(sample_image):
    sender = AsyncMock()

    async def send_image(chat_id, payload, caption=None):
        if chat_id == 1:
            raise ValueError("unexpected")
        return True

    sender.send_image.side_effect = send_image

    results = await broadcast_image(sender, [1, 2], sample_image)

    assert [r.delivered for r in results] == [False, True]


@pytest.mark.asyncio
async def test_concurrency_is_bounded(sample_image):
    in_flight = 0
    peak = 0

    class SlowSender:
        async def send_image(self, chat_id, payload, caption=None):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return True

    results = await broadcast_image(SlowSender(), range(10), sample_image, max_concurrency=3)

    assert len(results) == 10
    assert all(r.delivered for r in results)
    assert 1 < peak <= 3
