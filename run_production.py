import asyncio
import signal
import sys
from functools import partial

import httpx

from bot.telegram_app import build_application, start_telegram, stop_telegram
from core.config import REQUEST_TIMEOUT, load_config
from core.logger import setup_logger
from core.task_manager import supervised_task
from database.db import build_engine, dispose_engine, init_db
from database.repository import SubscriberRepo
from delivery.telegram_sender import TelegramSender
from health_check import verify_system
from pipeline.fetch_cache import LastFetchCache
from pipeline.notifier import ImageNotifier
from pipeline.subscriptions import SubscriptionService
from pipeline.watch_pipeline import WatchPipeline
from scraper.image_fetcher import fetch_current_image
from scraper.url_resolver import today_in

logger = setup_logger("ORCHESTRATOR")


async def production_sequence():
    logger.info("🚀 METEOWATCH: BOOT SEQUENCE INITIALIZED")

    # PHASE 1: CONFIG & INFRASTRUCTURE
    try:
        config = load_config()
        engine = build_engine(config.database_url)
        await init_db(engine)
    except Exception as e:
        logger.critical(f"💀 FATAL BOOT FAILURE: {e}")
        sys.exit(1)

    http_client = httpx.AsyncClient(timeout=REQUEST_TIMEOUT, follow_redirects=True)

    async def fetch():
        return await fetch_current_image(
            today_in(config.timezone), client=http_client, base_url=config.image_base_url
        )

    # PHASE 2: WIRING
    app = build_application(config.token)
    repo = SubscriberRepo(engine)
    sender = TelegramSender(app.bot)
    cache = LastFetchCache(ttl_seconds=config.check_interval_seconds)
    pipeline = WatchPipeline(
        fetch=fetch,
        notifier=ImageNotifier(repo, sender),
        cache=cache,
        interval_seconds=config.check_interval_seconds,
    )
    app.bot_data["subscriptions"] = SubscriptionService(repo, sender, cache, fetch)
    app.bot_data["pipeline"] = pipeline

    # PHASE 3: NETWORK CORE
    try:
        await verify_system(engine, app.bot)
        await start_telegram(app)
    except Exception as e:
        logger.critical(f"💀 TELEGRAM START FAILURE: {e}")
        await http_client.aclose()
        await dispose_engine(engine)
        sys.exit(1)

    # PHASE 4: PIPELINE LAUNCH
    pipeline_task = asyncio.create_task(supervised_task("PIPELINE", pipeline.run_forever))

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, partial(_on_signal, sig, stop_event))
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt
            pass

    logger.info("✅ ALL SYSTEMS OPERATIONAL. MONITORING ACTIVE.")
    await stop_event.wait()

    # PHASE 5: SHUTDOWN
    try:
        await asyncio.wait_for(pipeline.wait_idle(), timeout=10.0)
    except asyncio.TimeoutError:
        logger.error("⚠️ Force closing: check cycle did not finish in time.")
    pipeline_task.cancel()
    await asyncio.gather(pipeline_task, return_exceptions=True)
    await stop_telegram(app)
    await http_client.aclose()
    await dispose_engine(engine)
    logger.info("👋 System Shutdown Complete.")


def _on_signal(sig, stop_event: asyncio.Event):
    logger.info(f"🛑 Received exit signal {sig.name}...")
    stop_event.set()


if __name__ == "__main__":
    try:
        asyncio.run(production_sequence())
    except KeyboardInterrupt:
        pass
