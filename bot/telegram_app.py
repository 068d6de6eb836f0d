from telegram import Update
from telegram.ext import Application, ApplicationBuilder

from bot.user_handlers import register_user_handlers
from core.logger import setup_logger

logger = setup_logger("TELEGRAM")


def build_application(token: str) -> Application:
    app = ApplicationBuilder().token(token).build()
    register_user_handlers(app)
    logger.info("ALL HANDLERS REGISTERED")
    return app


async def start_telegram(app: Application):
    await app.initialize()
    await app.start()
    await app.updater.start_polling(allowed_updates=[Update.MESSAGE])
    logger.info("✅ Telegram polling online.")


async def stop_telegram(app: Application):
    if app.updater and app.updater.running:
        await app.updater.stop()
    if app.running:
        await app.stop()
    await app.shutdown()
