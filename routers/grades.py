from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.app_state import get_client_info, get_curriculum
from dependencies.session import resolve_session_id
from schemas.grades import GradesIn, GradesSave, ResultsOut, average_out
from services import analytics_service, session_service
from services.curriculum import CurriculumTable
from services.grade_calculator import evaluate

router = APIRouter(prefix="/grades", tags=["성적"])
results_router = APIRouter(prefix="/results", tags=["성적"])


# ==========================================================
# [1단계] 계산 전용 (저장 없음)
# ==========================================================

# ✅ [PREVIEW] 입력 중인 성적으로 평균/판정 즉시 계산
@router.post("/preview")
def preview_average(body: GradesIn, curriculum: CurriculumTable = Depends(get_curriculum)):
    entry = curriculum.lookup(body.level, body.track)
    result = evaluate(body.grades, entry.subjects)
    return {"success": True, "data": average_out(result).model_dump(mode="json")}


# ==========================================================
# [2단계] 세션 단위 저장/조회
# ==========================================================

# ✅ [SAVE] 성적 저장 (잘못된 값은 조용히 제외)
@router.post("/save")
def save_grades(
    body: GradesSave,
    x_session_id: Optional[str] = Header(default=None, alias="X-Session-Id"),
    db: Session = Depends(get_db),
    curriculum: CurriculumTable = Depends(get_curriculum),
    client: dict = Depends(get_client_info),
):
    session_id = resolve_session_id(x_session_id, body.session_id)
    entry = curriculum.lookup(body.level, body.track)

    analytics_service.track_event(
        db, "grades_saved", session_id=session_id, level=entry.level_id,
        data=body.model_dump(), ip_address=client["ip_address"],
    )
    result = session_service.save_grades(db, session_id, entry, body.grades,
                                         ip_address=client["ip_address"])
    return {
        "success": True,
        "data": {
            "average": result.average,
            "status": result.status.value,
            "total_subjects": result.total_subjects,
        },
        "message": "Grades saved",
    }


# ✅ [READ] 세션 결과: 저장된 성적을 커리큘럼 기준으로 다시 평가
@results_router.get("/{session_id}")
def read_results(
    session_id: str,
    db: Session = Depends(get_db),
    curriculum: CurriculumTable = Depends(get_curriculum),
):
    record = session_service.get_session(db, session_id)
    entry = curriculum.lookup(record.level, record.track)
    result = evaluate(record.grades or {}, entry.subjects)

    out = ResultsOut(
        **average_out(result).model_dump(),
        session_id=record.session_id,
        level=curriculum.level_title(record.level),
        track=entry.display_name,
        exam_type=record.exam_type,
        grades=result.grades,
        last_updated=record.updated_at,
    )
    return {"success": True, "data": out.model_dump(mode="json")}
