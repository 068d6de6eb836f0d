# MeteoWatch Constants Registry
# Network Identities (Centralized)
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
]

# Armenian spelling of the city, used by the newest file naming scheme
CITY_SLUG = "yerevan"
CITY_SLUG_LOCAL = "երևան"

# UI Strings
START_TEXT = (
    "🌤 <b>Yerevan Forecast Bot</b>\n\n"
    "You can subscribe to image updates with /subscribe command.\n"
    "You can unsubscribe from image updates with /unsubscribe command."
)
HELP_TEXT = (
    "/start - welcome message\n"
    "/subscribe - receive the forecast image whenever it changes\n"
    "/unsubscribe - stop receiving updates\n"
    "/status - show your subscription status\n"
    "/help - this message"
)
SUBSCRIBED_TEXT = "✅ You have subscribed to image updates."
ALREADY_SUBSCRIBED_TEXT = (
    "You are already subscribed to image updates. "
    "You can unsubscribe with /unsubscribe command."
)
UNSUBSCRIBED_TEXT = "👋 You have unsubscribed from image updates."
NOT_SUBSCRIBED_TEXT = (
    "You are not subscribed to image updates. "
    "You can subscribe with /subscribe command."
)
NO_IMAGE_YET_TEXT = "⏳ Today's forecast image is not published yet. You will get it as soon as it appears."
