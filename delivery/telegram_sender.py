from telegram.error import Forbidden, TelegramError

from core.logger import setup_logger

logger = setup_logger("SENDER")


class TelegramSender:
    """
    Thin wrapper over the Bot API send primitives.
    Every call reports success as a bool; transport errors are logged, never raised.
    """

    def __init__(self, bot):
        self.bot = bot

    async def send_text(self, chat_id: int, text: str) -> bool:
        try:
            await self.bot.send_message(
                chat_id=chat_id, text=text, parse_mode="HTML", disable_web_page_preview=True
            )
            return True
        except Forbidden as e:
            logger.warning(f"Chat {chat_id} blocked the bot, text not sent: {e}")
        except TelegramError as e:
            logger.error(f"Failed to send text to {chat_id}: {e}")
        return False

    async def send_image(self, chat_id: int, payload: bytes, caption: str = None) -> bool:
        try:
            await self.bot.send_photo(chat_id=chat_id, photo=payload, caption=caption, parse_mode="HTML")
            return True
        except Forbidden as e:
            logger.warning(f"Chat {chat_id} blocked the bot, image not sent: {e}")
        except TelegramError as e:
            logger.error(f"Failed to send image to {chat_id}: {e}")
        return False
