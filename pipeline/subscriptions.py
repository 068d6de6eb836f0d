import enum
from typing import Awaitable, Callable, Optional

from core.constants import (
    ALREADY_SUBSCRIBED_TEXT,
    NO_IMAGE_YET_TEXT,
    NOT_SUBSCRIBED_TEXT,
    SUBSCRIBED_TEXT,
    UNSUBSCRIBED_TEXT,
)
from core.logger import setup_logger
from pipeline.fetch_cache import LastFetchCache
from pipeline.message_formatter import format_caption
from scraper.image_fetcher import FetchedImage

logger = setup_logger("SUBSCRIPTIONS")


class SubscribeOutcome(enum.Enum):
    SUBSCRIBED = "subscribed"
    ALREADY_SUBSCRIBED = "already_subscribed"


class UnsubscribeOutcome(enum.Enum):
    UNSUBSCRIBED = "unsubscribed"
    NOT_SUBSCRIBED = "not_subscribed"


class SubscriptionService:

    def __init__(
        self,
        repo,
        sender,
        cache: LastFetchCache,
        fetch: Callable[[], Awaitable[Optional[FetchedImage]]],
    ):
        self.repo = repo
        self.sender = sender
        self.cache = cache
        self.fetch = fetch

    async def subscribe(self, chat_id: int) -> SubscribeOutcome:
        if not await self.repo.add_subscriber(chat_id):
            await self.sender.send_text(chat_id, ALREADY_SUBSCRIBED_TEXT)
            logger.info(f"User already subscribed: {chat_id}")
            return SubscribeOutcome.ALREADY_SUBSCRIBED

        await self.sender.send_text(chat_id, SUBSCRIBED_TEXT)
        logger.info(f"User subscribed: {chat_id}")

        await self._send_current_image(chat_id)
        return SubscribeOutcome.SUBSCRIBED

    async def _send_current_image(self, chat_id: int):
        image = await self.cache.get_or_fetch(self.fetch)
        if image is None:
            await self.sender.send_text(chat_id, NO_IMAGE_YET_TEXT)
            return

        if await self.sender.send_image(chat_id, image.payload, caption=format_caption(image)):
            # mark as delivered so the next scheduled cycle does not resend it
            await self.repo.update_fingerprint(chat_id, image.fingerprint)
        else:
            logger.warning(f"Welcome image for {chat_id} not delivered, next cycle will retry.")

    async def unsubscribe(self, chat_id: int) -> UnsubscribeOutcome:
        if await self.repo.remove_subscriber(chat_id):
            await self.sender.send_text(chat_id, UNSUBSCRIBED_TEXT)
            logger.info(f"User unsubscribed: {chat_id}")
            return UnsubscribeOutcome.UNSUBSCRIBED

        await self.sender.send_text(chat_id, NOT_SUBSCRIBED_TEXT)
        logger.info(f"User not subscribed: {chat_id}")
        return UnsubscribeOutcome.NOT_SUBSCRIBED

    async def status_text(self, chat_id: int, last_check=None) -> str:
        sub = await self.repo.get_subscriber(chat_id)
        image = self.cache.get_fresh()

        lines = ["SYSTEM STATUS: ACTIVE", ""]
        lines.append("SUBSCRIPTION: ACTIVE" if sub else "SUBSCRIPTION: NONE")
        if last_check:
            lines.append(f"LAST CHECK: {last_check.strftime('%d %b %Y %H:%M UTC')}")
        if image:
            lines.append(f"LATEST IMAGE: {image.day.strftime('%d.%m.%Y') if image.day else 'unknown date'}")
            if sub:
                lines.append("UP TO DATE: YES" if sub.last_image_hash == image.fingerprint else "UP TO DATE: PENDING")
        else:
            lines.append("LATEST IMAGE: not published yet")
        return "\n".join(lines)
