"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from database.db import build_engine, dispose_engine, init_db
from database.repository import SubscriberRepo
from scraper.image_fetcher import FetchedImage
from utils.hash_util import generate_hash


class FakeSender:
    """Records every send; chats listed in `failing` report a failed delivery."""

    def __init__(self, failing=None):
        self.failing = set(failing or [])
        self.texts = []
        self.images = []

    async def send_text(self, chat_id, text):
        self.texts.append((chat_id, text))
        return chat_id not in self.failing

    async def send_image(self, chat_id, payload, caption=None):
        if chat_id in self.failing:
            return False
        self.images.append((chat_id, payload))
        return True


@pytest.fixture
async def repo(tmp_path):
    """Subscriber repository backed by a throwaway SQLite file."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'subscribers.db'}")
    await init_db(engine)
    yield SubscriberRepo(engine)
    await dispose_engine(engine)


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def failing_sender():
    """Build a FakeSender whose deliveries to the given chats fail."""
    return lambda *chat_ids: FakeSender(failing=chat_ids)


@pytest.fixture
def sample_image():
    payload = b"\x89PNG fake forecast bytes"
    return FetchedImage(
        source_url="https://example.com/weather-2024/03-05-yerevan.jpg",
        payload=payload,
        fingerprint=generate_hash(payload),
        day=date(2024, 3, 5),
    )


@pytest.fixture
def make_image():
    def _make(payload: bytes, day=date(2024, 3, 5)):
        return FetchedImage(
            source_url=f"https://example.com/weather-{day.year}/{day:%m-%d}-yerevan.jpg",
            payload=payload,
            fingerprint=generate_hash(payload),
            day=day,
        )
    return _make
