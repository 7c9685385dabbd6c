import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.logging_config import setup_logging
from config.settings import Settings, settings
from database.db import build_engine, build_session_factory, init_db

# ✅ 미들웨어 임포트
from middlewares.error_handler import add_error_handlers
from middlewares.rate_limit import RateLimitMiddleware, RateLimitRule
from middlewares.timing import TimingMiddleware

# ✅ 라우터 임포트
from routers import admin, ai, curriculum, feedback, grades, health, sessions

from services.advisor import GradeAdvisor
from services.curriculum import CurriculumTable, load_default_curriculum
from services.telegram_notifier import TelegramNotifier, run_daily_stats_loop

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, curriculum_table: Optional[CurriculumTable] = None) -> FastAPI:
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.APP_TITLE,
        description=app_settings.APP_DESCRIPTION,
        version=app_settings.APP_VERSION,
    )

    # ✅ 앱 상태: 설정 / 커리큘럼(읽기 전용) / DB 세션 팩토리 / AI 조언 서비스
    engine = build_engine(app_settings.DATABASE_URL)
    init_db(engine)
    app.state.settings = app_settings
    app.state.curriculum = curriculum_table or load_default_curriculum()
    app.state.session_factory = build_session_factory(engine)
    app.state.advisor = GradeAdvisor(
        api_key=app_settings.GEMINI_API_KEY,
        model=app_settings.GEMINI_MODEL,
        temperature=app_settings.LLM_TEMPERATURE,
        max_tokens=app_settings.LLM_MAX_TOKENS,
    )

    prefix = app_settings.API_PREFIX

    # ✅ IP 기준 요청 제한 (일반 API / AI API)
    app.add_middleware(
        RateLimitMiddleware,
        rules=[
            RateLimitRule(f"{prefix}/", app_settings.RATE_LIMIT),
            RateLimitRule(f"{prefix}/ai/", app_settings.AI_RATE_LIMIT,
                          message="AI request limit exceeded. Please wait."),
        ],
    )

    # ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
    app.add_middleware(TimingMiddleware)

    # ✅ CORS 설정 (프론트엔드 연동)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
    add_error_handlers(app)

    # ✅ /api 프리픽스 라우터 등록
    app.include_router(health.router)
    app.include_router(health.router,           prefix=prefix)
    app.include_router(curriculum.router,       prefix=prefix)
    app.include_router(sessions.router,         prefix=prefix)
    app.include_router(grades.router,           prefix=prefix)
    app.include_router(grades.results_router,   prefix=prefix)
    app.include_router(ai.router,               prefix=prefix)
    app.include_router(feedback.router,         prefix=prefix)
    app.include_router(admin.router,            prefix=prefix)

    # ✅ Telegram 일일 통계 (토큰/채팅 ID가 있을 때만)
    @app.on_event("startup")
    async def _start_daily_stats():
        if not app_settings.telegram_enabled:
            logger.info("Telegram notifications disabled")
            return
        notifier = TelegramNotifier(
            bot_token=app_settings.TELEGRAM_BOT_TOKEN,
            chat_id=app_settings.TELEGRAM_CHAT_ID,
            base_url=app_settings.TELEGRAM_API_BASE_URL,
            timeout=app_settings.TELEGRAM_TIMEOUT,
        )
        app.state.daily_stats_task = asyncio.create_task(run_daily_stats_loop(
            notifier, app.state.session_factory, app.state.curriculum,
            interval_hours=app_settings.DAILY_STATS_INTERVAL_HOURS,
        ))

    @app.on_event("shutdown")
    async def _stop_daily_stats():
        task = getattr(app.state, "daily_stats_task", None)
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    # ✅ 루트 엔드포인트
    @app.get("/")
    def root():
        return {"message": f"{app_settings.APP_TITLE} - {app_settings.APP_DESCRIPTION}"}

    logger.info("Environment: %s", app_settings.ENV)
    return app


app = create_app()
