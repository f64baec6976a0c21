import asyncio
import sys
from telegram.ext import Application
from config import Config
from utils.logger import logger
from handlers.bot_handlers import register_bot_handlers, manager

_background_tasks = set()

async def on_startup(application: Application):
    """Start idle-game cleanup once the loop is running"""
    task = asyncio.create_task(manager.cleanup_stale_sessions())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)

async def graceful_shutdown(application: Application):
    """Cancel every game timer before the loop goes away"""
    for task in list(_background_tasks):
        task.cancel()
    closed = manager.close_all()
    logger.info(f"Shutdown complete ({closed} games closed)")

def main():
    # Validate config
    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    application = (
        Application.builder()
        .token(Config.BOT_TOKEN)
        .post_init(on_startup)
        .post_shutdown(graceful_shutdown)
        .build()
    )

    # Register handlers
    register_bot_handlers(application)

    logger.info("🚀 Word Scramble bot starting...")
    logger.info(f"Force join: {Config.FORCE_JOIN_CHAT or 'disabled'}")
    logger.info(f"Vocabulary: {len(Config.WORDS)} words, {Config.SCORE_PER_LETTER} points per letter")

    application.run_polling(drop_pending_updates=True)

if __name__ == "__main__":
    main()
