from sqlalchemy import Column, DateTime, Integer, JSON, String
from database.db import Base
from models.grade_sessions import _utcnow


class AnalyticsEvent(Base):
    __tablename__ = "analytics_events"  # 사용 통계 이벤트 테이블

    id = Column(Integer, primary_key=True, index=True)
    event = Column(String(64), nullable=False, index=True)      # 이벤트명 (예: grades_saved)
    level = Column(String(32))                                  # 레벨 ID
    session_id = Column(String(64), index=True)                 # 세션 ID
    data = Column(JSON)                                         # 요청 본문 요약
    timestamp = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    ip_address = Column(String(64))
