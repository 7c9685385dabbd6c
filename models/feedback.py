from sqlalchemy import Column, DateTime, Integer, String, Text
from database.db import Base
from models.grade_sessions import _utcnow


class Feedback(Base):
    __tablename__ = "feedback"  # 사용자 피드백 테이블

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(64))                             # 세션 ID (선택)
    rating = Column(Integer, nullable=False)                    # 평점 1~5
    feedback = Column(Text)                                     # 자유 의견 (최대 500자)
    timestamp = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
