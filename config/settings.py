"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- 모든 값에 개발용 기본값이 있어 비밀값 없이도 서버가 부팅됩니다.
  (Gemini / Telegram / 관리자 토큰이 비어 있으면 해당 기능만 비활성화)
"""

from typing import List, Optional, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Mo3adali Grades API"
    APP_DESCRIPTION: str = "معدلي - حساب المعدل المرجح حسب الشعبة / Calcul de moyenne pondérée"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Database
    # =========================
    # 예: sqlite:///./grading_app.db, mysql+pymysql://user:pw@host:3306/db
    DATABASE_URL: str = "sqlite:///./grading_app.db"

    # =========================
    # LLM (Gemini only)
    # =========================
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_KEY: Optional[str] = None
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 500

    # =========================
    # Telegram 알림
    # =========================
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT: float = 10.0
    DAILY_STATS_INTERVAL_HOURS: float = 24.0

    # =========================
    # Rate limit (IP 기준 고정 윈도우)
    # =========================
    # limits 표기법 ("횟수/기간")
    RATE_LIMIT: str = "100/15 minutes"
    AI_RATE_LIMIT: str = "5/minute"

    # =========================
    # 관리자
    # =========================
    ADMIN_TOKEN: Optional[str] = None

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.TELEGRAM_BOT_TOKEN and self.TELEGRAM_CHAT_ID)


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
