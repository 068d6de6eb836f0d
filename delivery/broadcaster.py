import asyncio
from dataclasses import dataclass
from typing import Iterable, List

from core.config import MAX_CONCURRENT_SENDS
from core.logger import setup_logger
from scraper.image_fetcher import FetchedImage

logger = setup_logger("BROADCASTER")


@dataclass(frozen=True)
class DeliveryResult:
    chat_id: int
    delivered: bool


async def _deliver(sender, semaphore: asyncio.Semaphore, chat_id: int, image: FetchedImage, caption: str) -> DeliveryResult:
    async with semaphore:
        try:
            ok = await sender.send_image(chat_id, image.payload, caption=caption)
        except Exception as e:
            # one bad chat must not take the rest of the fan-out down with it
            logger.error(f"Unexpected error delivering {image.source_url} to {chat_id}: {e}", exc_info=True)
            ok = False
    return DeliveryResult(chat_id=chat_id, delivered=ok)


async def broadcast_image(
    sender,
    chat_ids: Iterable[int],
    image: FetchedImage,
    caption: str = None,
    max_concurrency: int = MAX_CONCURRENT_SENDS,
) -> List[DeliveryResult]:
    """Send `image` to every chat concurrently and report each outcome."""
    semaphore = asyncio.Semaphore(max_concurrency)
    results = await asyncio.gather(
        *(_deliver(sender, semaphore, chat_id, image, caption) for chat_id in chat_ids)
    )

    failed = [r.chat_id for r in results if not r.delivered]
    if failed:
        logger.warning(f"Delivery failed for {len(failed)}/{len(results)} chat(s): {failed}")
    return list(results)
