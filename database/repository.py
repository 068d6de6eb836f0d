import asyncio
from typing import Iterable, List, Optional

from sqlalchemy import select, delete, update, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncEngine

from core.logger import setup_logger
from database.db import build_session_factory
from database.models import Subscriber

logger = setup_logger("DB_REPO")


class SubscriberRepo:
    """
    Sole owner of the subscribers table. Other components read snapshots and
    submit updates through these methods; nothing else touches the rows.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = build_session_factory(engine)
        # subscribe/unsubscribe and cycle reconciliation may interleave
        self._write_lock = asyncio.Lock()

    def _insert(self):
        if self.engine.dialect.name == "postgresql":
            return pg_insert(Subscriber)
        return sqlite_insert(Subscriber)

    async def list_subscribers(self) -> List[Subscriber]:
        async with self.session_factory() as session:
            stmt = select(Subscriber).order_by(Subscriber.chat_id)
            return list((await session.execute(stmt)).scalars().all())

    async def get_subscriber(self, chat_id: int) -> Optional[Subscriber]:
        async with self.session_factory() as session:
            stmt = select(Subscriber).where(Subscriber.chat_id == chat_id)
            return (await session.execute(stmt)).scalar_one_or_none()

    async def count_subscribers(self) -> int:
        async with self.session_factory() as session:
            stmt = select(func.count()).select_from(Subscriber)
            return (await session.execute(stmt)).scalar() or 0

    async def add_subscriber(self, chat_id: int) -> bool:
        """Insert-or-ignore. True only when a new row was created."""
        async with self._write_lock:
            async with self.session_factory() as session:
                stmt = self._insert().values(chat_id=chat_id, last_image_hash="").on_conflict_do_nothing()
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount > 0

    async def remove_subscriber(self, chat_id: int) -> bool:
        async with self._write_lock:
            async with self.session_factory() as session:
                stmt = delete(Subscriber).where(Subscriber.chat_id == chat_id)
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount > 0

    async def update_fingerprint(self, chat_id: int, fingerprint: str) -> bool:
        async with self._write_lock:
            async with self.session_factory() as session:
                stmt = (
                    update(Subscriber)
                    .where(Subscriber.chat_id == chat_id)
                    .values(last_image_hash=fingerprint)
                )
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount > 0

    async def batch_update_fingerprints(self, subscribers: Iterable[Subscriber]):
        """
        Persist last_image_hash for every given subscriber in one transaction.
        Rows deleted in the meantime are skipped silently; any database error
        rolls back the whole batch and propagates.
        """
        rows = [
            {"chat_id": s.chat_id, "last_image_hash": s.last_image_hash}
            for s in subscribers
        ]
        if not rows:
            return

        chat_ids = [r["chat_id"] for r in rows]
        async with self._write_lock:
            async with self.session_factory() as session:
                async with session.begin():
                    present = set(
                        (await session.execute(
                            select(Subscriber.chat_id).where(Subscriber.chat_id.in_(chat_ids))
                        )).scalars().all()
                    )
                    rows = [r for r in rows if r["chat_id"] in present]
                    if rows:
                        await session.execute(update(Subscriber), rows)

        logger.info(f"Fingerprint batch committed for {len(rows)} subscriber(s).")
