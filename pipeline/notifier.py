from dataclasses import dataclass, field
from typing import List

from core.logger import setup_logger
from database.models import Subscriber
from delivery.broadcaster import broadcast_image
from pipeline.message_formatter import format_caption
from scraper.image_fetcher import FetchedImage

logger = setup_logger("NOTIFIER")


@dataclass
class NotifyReport:
    fingerprint: str
    pending: List[int] = field(default_factory=list)
    delivered: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)


class ImageNotifier:
    """Sends a fresh image to every subscriber that is behind and records who got it."""

    def __init__(self, repo, sender):
        self.repo = repo
        self.sender = sender

    async def notify_subscribers(self, image: FetchedImage) -> NotifyReport:
        report = NotifyReport(fingerprint=image.fingerprint)

        subscribers = await self.repo.list_subscribers()
        # a chat that already holds this image (e.g. got it on /subscribe) is skipped
        behind = [s for s in subscribers if s.last_image_hash != image.fingerprint]
        if not behind:
            logger.info(f"All {len(subscribers)} subscriber(s) already have {image.fingerprint}, nothing to send.")
            return report

        report.pending = [s.chat_id for s in behind]
        logger.info(f"📡 Sending {image.fingerprint} to {len(behind)}/{len(subscribers)} subscriber(s).")

        results = await broadcast_image(
            self.sender, report.pending, image, caption=format_caption(image)
        )
        report.delivered = [r.chat_id for r in results if r.delivered]
        report.failed = [r.chat_id for r in results if not r.delivered]

        if report.delivered:
            await self.repo.batch_update_fingerprints(
                Subscriber(chat_id=chat_id, last_image_hash=image.fingerprint)
                for chat_id in report.delivered
            )

        logger.info(
            f"DELIVERY SYNC COMPLETE: {len(report.delivered)} delivered, "
            f"{len(report.failed)} left for the next cycle."
        )
        return report
