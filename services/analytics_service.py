"""
services/analytics_service.py

- 사용 통계 이벤트 기록 / 관리자용·일일 통계 집계
- 이벤트 기록 실패는 요청을 깨뜨리지 않음 (로그만 남김)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.analytics import AnalyticsEvent
from models.grade_sessions import GradeSession

logger = logging.getLogger(__name__)

# 분석 데이터에 성적 원본을 통째로 남기지 않도록 키만 저장
_TRACKED_KEYS = ("level", "track", "exam_type")


def track_event(db: Session, event: str, session_id: Optional[str] = None,
                level: Optional[str] = None, data: Optional[dict[str, Any]] = None,
                ip_address: Optional[str] = None) -> None:
    payload = {k: v for k, v in (data or {}).items() if k in _TRACKED_KEYS}
    if data and "grades" in data and isinstance(data["grades"], dict):
        payload["grade_count"] = len(data["grades"])
    try:
        db.add(AnalyticsEvent(event=event, level=level, session_id=session_id,
                              data=payload, ip_address=ip_address))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Analytics tracking error (event=%s)", event)


# ==========================================================
# [집계] 관리자 대시보드
# ==========================================================
def collect_admin_analytics(db: Session, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    last_week = now - timedelta(days=7)

    total_sessions = db.query(func.count(GradeSession.id)).scalar() or 0
    active_sessions = (
        db.query(func.count(GradeSession.id))
        .filter(GradeSession.updated_at >= last_week)
        .scalar() or 0
    )
    level_rows = (
        db.query(GradeSession.level, func.count(GradeSession.id).label("count"))
        .group_by(GradeSession.level)
        .order_by(func.count(GradeSession.id).desc(), GradeSession.level)
        .all()
    )
    recent_activity = (
        db.query(func.count(AnalyticsEvent.id))
        .filter(AnalyticsEvent.timestamp >= last_week)
        .scalar() or 0
    )
    return {
        "total_sessions": total_sessions,
        "active_sessions": active_sessions,
        "level_stats": [{"level": row.level, "count": row.count} for row in level_rows],
        "recent_activity": recent_activity,
    }


# ==========================================================
# [집계] 일일 통계 (Telegram 알림용)
# ==========================================================
@dataclass(frozen=True)
class DailyStats:
    new_sessions: int
    active_sessions: int
    top_level: Optional[str]
    generated_at: datetime


def collect_daily_stats(db: Session, now: Optional[datetime] = None) -> DailyStats:
    now = now or datetime.now(timezone.utc)
    yesterday = now - timedelta(days=1)

    new_sessions = (
        db.query(func.count(GradeSession.id))
        .filter(GradeSession.created_at >= yesterday)
        .scalar() or 0
    )
    active_sessions = (
        db.query(func.count(GradeSession.id))
        .filter(GradeSession.updated_at >= yesterday)
        .scalar() or 0
    )
    top = (
        db.query(GradeSession.level, func.count(GradeSession.id).label("count"))
        .filter(GradeSession.created_at >= yesterday)
        .group_by(GradeSession.level)
        .order_by(func.count(GradeSession.id).desc(), GradeSession.level)
        .first()
    )
    return DailyStats(new_sessions=new_sessions, active_sessions=active_sessions,
                      top_level=top.level if top else None, generated_at=now)
