from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.app_state import get_client_info, get_curriculum
from schemas.curriculum import track_detail
from schemas.grades import SessionInit
from services import analytics_service, session_service
from services.curriculum import CurriculumTable

router = APIRouter(prefix="/session", tags=["세션"])


# ✅ [CREATE] 세션 시작: 레벨/트랙 확정 후 세션 ID 발급
@router.post("/init")
def init_session(
    body: SessionInit,
    db: Session = Depends(get_db),
    curriculum: CurriculumTable = Depends(get_curriculum),
    client: dict = Depends(get_client_info),
):
    entry = curriculum.lookup(body.level, body.track)
    exam_type = curriculum.check_exam_type(body.exam_type)

    record = session_service.create_session(db, entry, exam_type=exam_type, **client)
    analytics_service.track_event(
        db, "session_created", session_id=record.session_id, level=entry.level_id,
        data=body.model_dump(), ip_address=client["ip_address"],
    )

    detail = track_detail(entry)
    return {
        "success": True,
        "data": {
            "session_id": record.session_id,
            "level": entry.level_id,
            "track": entry.track_id,
            "exam_type": exam_type,
            "subjects": [s.model_dump() for s in detail.subjects],
            "total_coefficient": detail.total_coefficient,
        },
        "message": "Session initialized",
    }
