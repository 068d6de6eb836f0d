from datetime import date, datetime
from typing import List
from urllib.parse import quote
from zoneinfo import ZoneInfo

from core.config import DEFAULT_IMAGE_BASE_URL
from core.constants import CITY_SLUG, CITY_SLUG_LOCAL

# The site has renamed its daily files more than once. Older schemes stay in the
# list because late or re-uploaded images still appear under them.
# Append new schemes at the end.
URL_SCHEMES = [
    "{base}{yyyy}/{mm}-{dd}-{city}.jpg",
    "{base}{yyyy}/{mm}-{dd}-{yy}-{city}.jpg",
    "{base}{yyyy}/{mm}-{dd}-{city_local}.jpg",
]


def resolve_candidate_urls(day: date, base_url: str = DEFAULT_IMAGE_BASE_URL) -> List[str]:
    """Every URL the image for `day` may live under, in the order to try them."""
    parts = {
        "base": base_url,
        "yyyy": f"{day.year:04d}",
        "yy": f"{day.year % 100:02d}",
        "mm": f"{day.month:02d}",
        "dd": f"{day.day:02d}",
        "city": CITY_SLUG,
        "city_local": quote(CITY_SLUG_LOCAL),
    }
    return [scheme.format(**parts) for scheme in URL_SCHEMES]


def today_in(tz_name: str) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()
