from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from core.constants import HELP_TEXT, START_TEXT
from core.logger import setup_logger

logger = setup_logger("USER_HANDLERS")


def _service(context: ContextTypes.DEFAULT_TYPE):
    return context.bot_data["subscriptions"]


# ================= START =================
async def start_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _service(context).sender.send_text(update.effective_chat.id, START_TEXT)


# ================= SUBSCRIBE =================
async def subscribe_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _service(context).subscribe(update.effective_chat.id)


# ================= UNSUBSCRIBE =================
async def unsubscribe_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _service(context).unsubscribe(update.effective_chat.id)


# ================= STATUS =================
async def status_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    service = _service(context)
    pipeline = context.bot_data.get("pipeline")
    last_check = pipeline.last_cycle_at if pipeline else None

    text = await service.status_text(update.effective_chat.id, last_check=last_check)
    await service.sender.send_text(update.effective_chat.id, text)


# ================= HELP =================
async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _service(context).sender.send_text(update.effective_chat.id, HELP_TEXT)


# ================= ERRORS =================
async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    chat_id = None
    if isinstance(update, Update) and update.effective_chat:
        chat_id = update.effective_chat.id
    logger.error(f"Command failed for chat {chat_id}: {context.error}", exc_info=context.error)


# ================= REGISTER =================
def register_user_handlers(app):

    app.add_handler(CommandHandler("start", start_cmd))
    app.add_handler(CommandHandler("subscribe", subscribe_cmd))
    app.add_handler(CommandHandler("unsubscribe", unsubscribe_cmd))
    app.add_handler(CommandHandler("status", status_cmd))
    app.add_handler(CommandHandler("help", help_cmd))
    app.add_error_handler(error_handler)
