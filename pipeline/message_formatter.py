import html

from scraper.image_fetcher import FetchedImage


def format_caption(image: FetchedImage) -> str:
    title = "🌤 <b>Yerevan forecast</b>"
    if image.day:
        title = f"🌤 <b>Yerevan forecast, {image.day.strftime('%d.%m.%Y')}</b>"
    return f"{title}\n<a href='{html.escape(image.source_url, quote=True)}'>Source</a>"
