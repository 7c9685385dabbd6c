from pydantic import BaseModel
from typing import List


class LevelCount(BaseModel):
    level: str                               # 레벨 ID
    count: int                               # 세션 수


# ✅ 출력용: 관리자 통계 대시보드
class AdminAnalyticsOut(BaseModel):
    total_sessions: int
    active_sessions: int                     # 최근 7일 내 갱신
    level_stats: List[LevelCount]            # 세션 수 내림차순
    recent_activity: int                     # 최근 7일 이벤트 수
