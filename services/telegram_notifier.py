"""
services/telegram_notifier.py

- 일일 사용 통계를 Telegram Bot API(sendMessage)로 전송
- 주기 실행 루프는 main.py 의 startup 이벤트에서 백그라운드 태스크로 띄움
- 전송 실패는 로그만 남기고 루프는 계속 돈다
"""

import asyncio
import logging
from typing import Callable, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError

from services.analytics_service import DailyStats, collect_daily_stats
from services.curriculum import CurriculumTable
from services.errors import NotificationError

logger = logging.getLogger(__name__)

NO_TOP_LEVEL = "لا يوجد"


def build_daily_stats_message(stats: DailyStats, curriculum: CurriculumTable) -> str:
    top_level = curriculum.level_title(stats.top_level) if stats.top_level else NO_TOP_LEVEL
    return (
        "📊 إحصائيات يومية - معدلي\n"
        "\n"
        f"👥 مستخدمون جدد: {stats.new_sessions}\n"
        f"🔥 مستخدمون نشطون: {stats.active_sessions}\n"
        f"📚 أكثر المستويات استخداماً: {top_level}\n"
        "\n"
        f"📅 {stats.generated_at.strftime('%Y-%m-%d')}"
    )


class TelegramNotifier:
    def __init__(self, bot_token: str, chat_id: str, base_url: str = "https://api.telegram.org",
                 timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base = f"{base_url.rstrip('/')}/bot{bot_token}"
        self.chat_id = chat_id
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=5.0), transport=self._transport)

    async def send_message(self, text: str) -> dict:
        async with self._client() as client:
            try:
                r = await client.post(f"{self.base}/sendMessage", json={"chat_id": self.chat_id, "text": text})
                r.raise_for_status()
                data = r.json()
            except httpx.HTTPError as e:
                raise NotificationError(f"Telegram request failed: {e}") from e
            except ValueError as e:
                # 200 이지만 JSON 이 아닌 응답 (프록시 에러 페이지 등)
                raise NotificationError(f"Telegram returned a non-JSON response: {e}") from e

        if not isinstance(data, dict):
            raise NotificationError("Telegram returned an unexpected response")
        if not data.get("ok", False):
            raise NotificationError(f"Telegram API error: {data.get('description', 'unknown')}")
        return data


async def send_daily_stats(notifier: TelegramNotifier, session_factory: Callable,
                           curriculum: CurriculumTable) -> DailyStats:
    db = session_factory()
    try:
        stats = collect_daily_stats(db)
    finally:
        db.close()
    await notifier.send_message(build_daily_stats_message(stats, curriculum))
    logger.info("Daily stats sent: new=%d active=%d", stats.new_sessions, stats.active_sessions)
    return stats


async def run_daily_stats_loop(notifier: TelegramNotifier, session_factory: Callable,
                               curriculum: CurriculumTable, interval_hours: float = 24.0) -> None:
    interval = interval_hours * 60 * 60
    while True:
        await asyncio.sleep(interval)
        try:
            await send_daily_stats(notifier, session_factory, curriculum)
        except (NotificationError, SQLAlchemyError) as e:
            logger.error("Telegram notification error: %s", e)
        except Exception:
            logger.exception("Unexpected error while sending daily stats")
