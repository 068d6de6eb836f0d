from core.logger import setup_logger
from database.db import ping_db

logger = setup_logger("HEALTH_CHECK")


async def verify_system(engine, bot) -> bool:
    logger.info("🔍 === METEOWATCH HEALTH CHECK ===")
    healthy = True

    # 1. Test Database
    try:
        await ping_db(engine)
        logger.info("✅ DATABASE: Connection Successful")
    except Exception as e:
        logger.error(f"❌ DATABASE: Connection Failed | {e}")
        healthy = False

    # 2. Test Bot Token
    try:
        me = await bot.get_me()
        logger.info(f"✅ BOT: @{me.username} is Online")
    except Exception as e:
        logger.error(f"❌ BOT: Token Invalid | {e}")
        healthy = False

    logger.info("🚀 === CHECK COMPLETE ===" if healthy else "⚠️ === CHECK COMPLETE WITH ERRORS ===")
    return healthy
