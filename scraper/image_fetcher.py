import random
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import httpx

from core.config import DEFAULT_IMAGE_BASE_URL, REQUEST_TIMEOUT
from core.constants import USER_AGENTS
from core.logger import setup_logger
from scraper.url_resolver import resolve_candidate_urls
from utils.hash_util import generate_hash

logger = setup_logger("FETCHER")


@dataclass(frozen=True)
class FetchedImage:
    source_url: str
    payload: bytes = field(repr=False)
    fingerprint: str
    day: Optional[date] = None


async def _try_candidate(client: httpx.AsyncClient, url: str) -> Optional[bytes]:
    headers = {"User-Agent": random.choice(USER_AGENTS)}
    try:
        r = await client.get(url, headers=headers)
    except httpx.HTTPError as e:
        logger.warning(f"⚠️ Fetch glitch for {url}: {e!r}")
        return None

    if r.status_code == 404:
        logger.info(f"🔎 Not found: {url}")
        return None
    if not r.is_success:
        logger.warning(f"⚠️ {url} answered HTTP {r.status_code}")
        return None
    if not r.content:
        logger.warning(f"⚠️ {url} answered with an empty body")
        return None
    return r.content


async def fetch_current_image(
    day: date,
    client: httpx.AsyncClient = None,
    base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> Optional[FetchedImage]:
    """
    Walk the candidate URLs for `day` and return the first image that downloads.
    None means nothing is published yet, which is a normal outcome.
    """
    own_client = client is None
    if own_client:
        client = httpx.AsyncClient(timeout=REQUEST_TIMEOUT, follow_redirects=True)

    try:
        for url in resolve_candidate_urls(day, base_url):
            payload = await _try_candidate(client, url)
            if payload is None:
                continue

            image = FetchedImage(source_url=url, payload=payload, fingerprint=generate_hash(payload), day=day)
            logger.info(f"✅ Image found at {url} ({len(payload)} bytes, hash {image.fingerprint})")
            return image
    finally:
        if own_client:
            await client.aclose()

    logger.info(f"No forecast image published yet for {day.isoformat()}.")
    return None
