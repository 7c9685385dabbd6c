import asyncio
import logging
import sys

from config.logging_config import setup_logging
from config.settings import settings
from database.db import build_engine, build_session_factory, init_db
from services.curriculum import load_default_curriculum
from services.errors import NotificationError
from services.telegram_notifier import TelegramNotifier, send_daily_stats

logger = logging.getLogger(__name__)


def main() -> int:
    setup_logging(settings.LOG_LEVEL)
    if not settings.telegram_enabled:
        logger.error("TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID 가 설정되지 않았습니다")
        return 1

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    notifier = TelegramNotifier(
        bot_token=settings.TELEGRAM_BOT_TOKEN,
        chat_id=settings.TELEGRAM_CHAT_ID,
        base_url=settings.TELEGRAM_API_BASE_URL,
        timeout=settings.TELEGRAM_TIMEOUT,
    )
    try:
        stats = asyncio.run(send_daily_stats(notifier, build_session_factory(engine), load_default_curriculum()))
    except NotificationError as e:
        logger.error("Telegram notification error: %s", e)
        return 1

    print(f"✅ 일일 통계 전송 완료 (new={stats.new_sessions}, active={stats.active_sessions})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
