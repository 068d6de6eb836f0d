from datetime import datetime, timezone
from sqlalchemy import Column, BigInteger, String, DateTime
from database.db import Base


class Subscriber(Base):
    __tablename__ = "subscribers"

    chat_id = Column(BigInteger, primary_key=True, autoincrement=False)
    # MD5 of the last image delivered to this chat, "" if none yet
    last_image_hash = Column(String(64), nullable=False, default="")
    subscribed_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Subscriber chat_id={self.chat_id} last_image_hash={self.last_image_hash!r}>"
