"""
AI 조언 라우터
- /ai/suggestions : 세션에 저장된 성적으로 Gemini 조언 생성
- /ai/chat        : 자유 질문 (세션이 있으면 성적을 문맥으로 첨부)
- 레이트 리밋: /api/ai/ 는 1분당 5회 (middlewares/rate_limit.py)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.app_state import get_advisor, get_client_info, get_curriculum
from dependencies.session import resolve_session_id
from schemas.ai_schemas import ChatOut, ChatRequest, SuggestionsOut, SuggestionsRequest
from services import analytics_service, session_service
from services.advisor import GradeAdvisor
from services.curriculum import CurriculumTable
from services.errors import NoGradesError
from services.grade_calculator import compute_average

router = APIRouter(prefix="/ai", tags=["AI"])


# ✅ [SUGGESTIONS] 저장된 성적 기반 조언
@router.post("/suggestions")
async def post_suggestions(
    response: Response,
    body: Optional[SuggestionsRequest] = None,
    x_session_id: Optional[str] = Header(default=None, alias="X-Session-Id"),
    db: Session = Depends(get_db),
    curriculum: CurriculumTable = Depends(get_curriculum),
    advisor: GradeAdvisor = Depends(get_advisor),
    client: dict = Depends(get_client_info),
):
    session_id = resolve_session_id(x_session_id, body.session_id if body else None)
    record = session_service.get_session(db, session_id)
    analytics_service.track_event(
        db, "ai_suggestions_requested", session_id=session_id, level=record.level,
        ip_address=client["ip_address"],
    )
    if not record.grades:
        raise NoGradesError()

    entry = curriculum.lookup(record.level, record.track)
    average = compute_average(record.grades, entry.subjects).average
    level_title = curriculum.level_title(record.level)

    suggestions = await advisor.suggest(level_title, entry, record.grades, average)

    # ✅ 민감 데이터 캐싱 방지
    response.headers["Cache-Control"] = "no-store"
    out = SuggestionsOut(suggestions=suggestions, average=average, level=level_title)
    return {"success": True, "data": out.model_dump()}


# ✅ [CHAT] 자유 질문
@router.post("/chat")
async def post_chat(
    body: ChatRequest,
    response: Response,
    x_session_id: Optional[str] = Header(default=None, alias="X-Session-Id"),
    db: Session = Depends(get_db),
    curriculum: CurriculumTable = Depends(get_curriculum),
    advisor: GradeAdvisor = Depends(get_advisor),
):
    entry, grades, average = None, None, None
    session_id = x_session_id or body.session_id
    if session_id:
        record = session_service.find_session(db, session_id)
        if record is not None and record.grades:
            entry = curriculum.lookup(record.level, record.track)
            grades = record.grades
            average = compute_average(grades, entry.subjects).average

    answer = await advisor.chat(body.question.strip(), entry, grades, average)

    response.headers["Cache-Control"] = "no-store"
    return {"success": True, "data": ChatOut(answer=answer).model_dump()}
