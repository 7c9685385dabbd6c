"""
테스트 공용 fixture

- 테스트마다 tmp_path 의 SQLite 파일 DB 사용
- 커리큘럼은 계산하기 쉬운 fixture 표를 주입
- Gemini 는 FakeAdvisor 로 대체 (외부 호출 없음)
"""

import os

# main.py 의 모듈 레벨 app 이 실제 DB 파일을 만들지 않도록 import 전에 설정
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from services.curriculum import build_curriculum

ADMIN_TOKEN = "test-admin-token"

FIXTURE_LEVELS = {
    "test_level": {
        "name_ar": "مستوى تجريبي",
        "name_fr": "Niveau test",
        "tracks": {
            "sci": {
                "name_ar": "علوم",
                "name_fr": "Sciences",
                "subjects": [("math", 3), ("physics", 2), ("french", 1)],
            },
            "lit": {
                "name_ar": "آداب",
                "name_fr": "Lettres",
                "subjects": [("arabic", 4), ("history", 2)],
            },
        },
    },
}

FIXTURE_EXAM_TYPES = {
    "national": {"name_ar": "الامتحان الوطني", "name_fr": "Examen national"},
}


class FakeAdvisor:
    configured = True

    def __init__(self, reply="نصيحة تجريبية"):
        self.reply = reply
        self.calls = []

    async def suggest(self, level_title, entry, grades, average):
        self.calls.append(("suggest", level_title, entry.track_id, dict(grades), average))
        return self.reply

    async def chat(self, question, entry=None, grades=None, average=None):
        self.calls.append(("chat", question, entry.track_id if entry else None, grades, average))
        return self.reply


@pytest.fixture
def curriculum():
    return build_curriculum(FIXTURE_LEVELS, FIXTURE_EXAM_TYPES, version="test")


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        ADMIN_TOKEN=ADMIN_TOKEN,
        GEMINI_API_KEY=None,
        TELEGRAM_BOT_TOKEN=None,
        TELEGRAM_CHAT_ID=None,
        RATE_LIMIT="1000/minute",
        AI_RATE_LIMIT="1000/minute",
    )


@pytest.fixture
def app(app_settings, curriculum):
    from main import create_app
    return create_app(app_settings, curriculum)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def fake_advisor(app):
    advisor = FakeAdvisor()
    app.state.advisor = advisor
    return advisor


@pytest.fixture
def db_session(app):
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def session_id(client):
    resp = client.post("/api/session/init", json={"level": "test_level", "track": "sci"})
    assert resp.status_code == 200
    return resp.json()["data"]["session_id"]
