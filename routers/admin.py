from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin_token
from schemas.analytics import AdminAnalyticsOut
from services.analytics_service import collect_admin_analytics

router = APIRouter(prefix="/admin", tags=["관리자"], dependencies=[Depends(require_admin_token)])


# ✅ [READ] 사용 통계 대시보드 (최근 7일 기준)
@router.get("/analytics")
def get_analytics(db: Session = Depends(get_db)):
    stats = AdminAnalyticsOut(**collect_admin_analytics(db))
    return {"success": True, "data": stats.model_dump()}
