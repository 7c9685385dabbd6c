from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from services.grade_calculator import AverageResult, Status


# ✅ 입력용: 세션 시작
class SessionInit(BaseModel):
    level: str = Field(..., description="레벨 ID (예: bac2)")
    track: str = Field(..., description="트랙 ID (예: svt)")
    exam_type: Optional[str] = Field(default=None, description="시험 종류 (continuous/regional/national)")


# ✅ 입력용: 성적 저장 / 미리보기
# - grades 값은 자유 입력(숫자/문자열) → 서비스에서 엄격하게 파싱
class GradesIn(BaseModel):
    level: str
    track: str
    grades: Dict[str, Any] = Field(..., description='{"الرياضيات": 14.5, ...}')


class GradesSave(GradesIn):
    session_id: Optional[str] = Field(default=None, description="X-Session-Id 헤더 대신 본문으로 전달 가능")


class WeakSubjectOut(BaseModel):
    subject: str
    grade: float
    coefficient: int


# ✅ 출력용: 평균 계산 결과
class AverageOut(BaseModel):
    average: float                           # 소수 2자리
    total_coefficient: int
    status: Status                           # pass / conditional / fail
    status_label: str                        # ناجح / مقبول بشروط / راسب
    weak_subjects: List[WeakSubjectOut]
    total_subjects: int


class ResultsOut(AverageOut):
    session_id: str
    level: str                               # 레벨 제목 (아랍어)
    track: str                               # 트랙 표시명
    exam_type: Optional[str] = None
    grades: Dict[str, float]
    last_updated: Optional[datetime] = None


def average_out(result: AverageResult) -> AverageOut:
    return AverageOut(
        average=result.average,
        total_coefficient=result.total_coefficient,
        status=result.status,
        status_label=result.status.label_ar,
        weak_subjects=[WeakSubjectOut(**w.to_dict()) for w in result.weak_subjects],
        total_subjects=result.total_subjects,
    )
