import asyncio

import pytest

from models.analytics import AnalyticsEvent
from services.advisor import GradeAdvisor, build_chat_prompt, build_suggestions_prompt
from services.errors import AdvisorError, AdvisorNotConfiguredError


def _save(client, session_id, grades):
    resp = client.post("/api/grades/save", headers={"X-Session-Id": session_id},
                       json={"level": "test_level", "track": "sci", "grades": grades})
    assert resp.status_code == 200


# ==========================================================
# /api/ai/suggestions
# ==========================================================
def test_suggestions(client, session_id, fake_advisor, db_session):
    _save(client, session_id, {"math": 12, "physics": 9, "french": 15})

    resp = client.post("/api/ai/suggestions", headers={"X-Session-Id": session_id})
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"
    assert resp.json()["data"] == {"suggestions": "نصيحة تجريبية", "average": 11.5, "level": "مستوى تجريبي"}

    kind, level_title, track_id, grades, average = fake_advisor.calls[0]
    assert (kind, level_title, track_id, average) == ("suggest", "مستوى تجريبي", "sci", 11.5)
    assert grades == {"math": 12.0, "physics": 9.0, "french": 15.0}
    assert db_session.query(AnalyticsEvent).filter_by(event="ai_suggestions_requested").count() == 1


def test_suggestions_with_session_in_body(client, session_id, fake_advisor):
    _save(client, session_id, {"math": 10})
    resp = client.post("/api/ai/suggestions", json={"session_id": session_id})
    assert resp.status_code == 200


def test_suggestions_require_session(client, fake_advisor):
    resp = client.post("/api/ai/suggestions")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "SESSION_REQUIRED"


def test_suggestions_without_grades(client, session_id, fake_advisor):
    resp = client.post("/api/ai/suggestions", headers={"X-Session-Id": session_id})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "NO_GRADES"
    assert fake_advisor.calls == []


def test_suggestions_unknown_session(client, fake_advisor):
    resp = client.post("/api/ai/suggestions", headers={"X-Session-Id": "ghost"})
    assert resp.status_code == 404


def test_suggestions_when_ai_not_configured(client, session_id):
    _save(client, session_id, {"math": 12})
    resp = client.post("/api/ai/suggestions", headers={"X-Session-Id": session_id})
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "AI_NOT_CONFIGURED"


# ==========================================================
# /api/ai/chat
# ==========================================================
def test_chat_without_session(client, fake_advisor):
    resp = client.post("/api/ai/chat", json={"question": "كيف أرفع معدلي؟"})
    assert resp.status_code == 200
    assert resp.json()["data"] == {"answer": "نصيحة تجريبية"}
    assert fake_advisor.calls == [("chat", "كيف أرفع معدلي؟", None, None, None)]


def test_chat_uses_saved_grades_as_context(client, session_id, fake_advisor):
    _save(client, session_id, {"math": 14})
    resp = client.post("/api/ai/chat", json={"question": "ok?", "session_id": session_id})
    assert resp.status_code == 200
    _, _, track_id, grades, average = fake_advisor.calls[0]
    assert track_id == "sci"
    assert grades == {"math": 14.0}
    assert average == 14.0


def test_chat_rejects_empty_question(client, fake_advisor):
    resp = client.post("/api/ai/chat", json={"question": ""})
    assert resp.status_code == 422


# ==========================================================
# 프롬프트 / GradeAdvisor
# ==========================================================
def test_suggestions_prompt_lists_grades_with_coefficients(curriculum):
    entry = curriculum.lookup("test_level", "sci")
    prompt = build_suggestions_prompt("مستوى تجريبي", entry, {"math": 12.5, "french": 8}, 10.83)
    assert "math: 12.5/20 (معامل 3)" in prompt
    assert "french: 8/20 (معامل 1)" in prompt
    assert "المعدل العام: 10.83/20" in prompt
    assert "مستوى تجريبي" in prompt


def test_chat_prompt_without_context_is_question(curriculum):
    assert build_chat_prompt("سؤال") == "سؤال"
    entry = curriculum.lookup("test_level", "sci")
    prompt = build_chat_prompt("سؤال", entry, {"math": 14.0}, 14.0)
    assert prompt.endswith("سؤال الطالب: سؤال")
    assert "math: 14/20 (معامل 3)" in prompt


def test_advisor_without_key_is_not_configured():
    advisor = GradeAdvisor(api_key=None, model="gemini-2.5-flash")
    assert not advisor.configured
    with pytest.raises(AdvisorNotConfiguredError):
        asyncio.run(advisor.ask("system", "user"))


class _FakeResponse:
    def __init__(self, content):
        self.content = content


class _FakeLLM:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.messages = None

    async def ainvoke(self, messages):
        self.messages = messages
        if self.error:
            raise self.error
        return _FakeResponse(self.content)


def test_advisor_ask_sends_system_and_human_messages():
    advisor = GradeAdvisor(api_key="key", model="gemini-2.5-flash")
    llm = _FakeLLM(content="  جواب  ")
    advisor._llm = llm
    assert asyncio.run(advisor.ask("system", "user")) == "جواب"
    assert [m.content for m in llm.messages] == ["system", "user"]


def test_advisor_ask_joins_multipart_content():
    advisor = GradeAdvisor(api_key="key", model="gemini-2.5-flash")
    advisor._llm = _FakeLLM(content=[{"type": "text", "text": "a"}, {"type": "text", "text": "b"}])
    assert asyncio.run(advisor.ask("s", "u")) == "ab"


@pytest.mark.parametrize("llm", [_FakeLLM(error=RuntimeError("boom")), _FakeLLM(content="")])
def test_advisor_ask_wraps_failures(llm):
    advisor = GradeAdvisor(api_key="key", model="gemini-2.5-flash")
    advisor._llm = llm
    with pytest.raises(AdvisorError):
        asyncio.run(advisor.ask("s", "u"))


def test_advisor_upstream_error_is_502(client, session_id, app):
    _save(client, session_id, {"math": 12})
    advisor = GradeAdvisor(api_key="key", model="gemini-2.5-flash")
    advisor._llm = _FakeLLM(error=RuntimeError("boom"))
    app.state.advisor = advisor
    resp = client.post("/api/ai/suggestions", headers={"X-Session-Id": session_id})
    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "AI_UPSTREAM_ERROR"
