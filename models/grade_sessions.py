from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, JSON, String
from database.db import Base


SESSION_ID_MAX_LENGTH = 64


def _utcnow():
    return datetime.now(timezone.utc)


class GradeSession(Base):
    __tablename__ = "grade_sessions"  # 학생 세션별 성적 기록 테이블

    id = Column(Integer, primary_key=True, index=True)                       # 내부 PK
    session_id = Column(String(SESSION_ID_MAX_LENGTH), unique=True, nullable=False, index=True)  # 클라이언트 세션 ID
    level = Column(String(32), nullable=False)                               # 레벨 ID (예: bac2)
    track = Column(String(32), nullable=False)                               # 트랙 ID (예: svt)
    exam_type = Column(String(32))                                           # 시험 종류 (선택)
    grades = Column(JSON, nullable=False, default=dict)                      # {과목: 점수} (검증 통과분만)
    average = Column(Float)                                                  # 마지막 저장 시 평균 (소수 2자리)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    ip_address = Column(String(64))
    user_agent = Column(String(255))
