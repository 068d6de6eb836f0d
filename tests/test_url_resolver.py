"""
Test cases for candidate URL resolution.
"""

from datetime import date, timedelta

from scraper.url_resolver import resolve_candidate_urls, today_in

BASE = "https://meteomonitoring.am/public/admin/ckfinder/userfiles/files/weather-"


class TestResolveCandidateUrls:

    def test_three_schemes_for_known_date(self):
        urls = resolve_candidate_urls(date(2024, 3, 5), BASE)

        assert len(urls) == 3
        assert urls[0] == f"{BASE}2024/03-05-yerevan.jpg"
        assert urls[1] == f"{BASE}2024/03-05-24-yerevan.jpg"
        assert any("03-05-24" in u for u in urls)
        assert all("2024/03-05" in u for u in urls)

    def test_localized_scheme_is_percent_encoded(self):
        url = resolve_candidate_urls(date(2024, 3, 5), BASE)[2]

        assert url.startswith(f"{BASE}2024/03-05-%")
        assert url.endswith(".jpg")
        assert url.isascii()

    def test_two_digit_year_is_zero_padded(self):
        urls = resolve_candidate_urls(date(2005, 11, 9), BASE)

        assert urls[1] == f"{BASE}2005/11-09-05-yerevan.jpg"

    def test_pure_and_order_stable(self):
        start = date(2023, 12, 25)
        for offset in range(0, 400, 7):
            day = start + timedelta(days=offset)
            first = resolve_candidate_urls(day, BASE)
            second = resolve_candidate_urls(day, BASE)

            assert first
            assert first == second

    def test_default_base_url(self):
        urls = resolve_candidate_urls(date(2024, 1, 1))

        assert urls[0] == f"{BASE}2024/01-01-yerevan.jpg"


def test_today_in_returns_date():
    assert isinstance(today_in("Asia/Yerevan"), date)
