import asyncio
import logging

logger = logging.getLogger("TASK_MANAGER")


async def supervised_task(name, coro_fn, restart_delay: float = 5):
    """Keep a long-running coroutine alive; restart it if it crashes."""
    while True:
        try:
            await coro_fn()
            logger.info(f"Task '{name}' finished.")
            return
        except asyncio.CancelledError:
            logger.info(f"Task '{name}' cancelled.")
            raise
        except Exception as e:
            logger.error(f"💥 Task '{name}' crashed: {e}. Restarting in {restart_delay}s.", exc_info=True)
            await asyncio.sleep(restart_delay)
