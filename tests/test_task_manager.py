"""
Test cases for supervised background tasks.
"""

import asyncio

import pytest

from core.task_manager import supervised_task


@pytest.mark.asyncio
async def test_restarts_after_crash():
    attempts = 0

    async def flaky():
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise RuntimeError("crash")

    await asyncio.wait_for(supervised_task("FLAKY", flaky, restart_delay=0), timeout=1)

    assert attempts == 3


@pytest.mark.asyncio
async def test_cancellation_propagates():
    async def forever():
        await asyncio.sleep(3600)

    task = asyncio.create_task(supervised_task("FOREVER", forever))
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
