"""
services/session_service.py

- 학생 세션(GradeSession) 생성/조회/성적 저장
- 세션마다 레코드 1개, 서로 독립적으로 갱신 (세션 간 잠금 없음)
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from models.grade_sessions import GradeSession
from services.curriculum import CurriculumEntry
from services.errors import SessionNotFoundError
from services.grade_calculator import AverageResult, evaluate

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return secrets.token_urlsafe(16)


def create_session(db: Session, entry: CurriculumEntry, exam_type: Optional[str] = None,
                   ip_address: Optional[str] = None, user_agent: Optional[str] = None) -> GradeSession:
    record = GradeSession(
        session_id=generate_session_id(),
        level=entry.level_id,
        track=entry.track_id,
        exam_type=exam_type,
        grades={},
        ip_address=ip_address,
        user_agent=(user_agent or "")[:255] or None,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Session created: %s (%s/%s)", record.session_id, entry.level_id, entry.track_id)
    return record


def find_session(db: Session, session_id: str) -> Optional[GradeSession]:
    return db.query(GradeSession).filter(GradeSession.session_id == session_id).first()


def get_session(db: Session, session_id: str) -> GradeSession:
    record = find_session(db, session_id)
    if record is None:
        raise SessionNotFoundError(session_id)
    return record


def save_grades(db: Session, session_id: str, entry: CurriculumEntry, raw_grades: Mapping[str, Any],
                ip_address: Optional[str] = None) -> AverageResult:
    """잘못된 성적은 조용히 제외하고 저장 (세션이 없으면 새로 만든다)"""
    result = evaluate(raw_grades, entry.subjects)

    record = find_session(db, session_id)
    if record is None:
        record = GradeSession(session_id=session_id, ip_address=ip_address)
        db.add(record)

    record.level = entry.level_id
    record.track = entry.track_id
    record.grades = dict(result.grades)
    record.average = result.average
    record.updated_at = datetime.now(timezone.utc)
    db.commit()

    logger.info("Grades saved: %s average=%.2f subjects=%d",
                session_id, result.average, result.total_subjects)
    return result
