"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마
- Pydantic v2 기준
- 에러 응답 표준: ErrorDetail, ErrorResponse
  (middlewares/error_handler.py 에서 이 스키마로 직렬화)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class ErrorDetail(BaseModel):
    """에러 코드/메시지를 담는 최소 단위"""
    code: str = Field(..., description="에러 식별 코드 (예: UNKNOWN_TRACK, RATE_LIMITED)")
    message: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")
    details: Optional[list] = Field(default=None, description="요청 검증 실패 시 필드별 사유")


class ErrorResponse(BaseModel):
    """전역 에러 핸들러에서 내려주는 표준 에러 응답"""
    success: bool = False
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )

    model_config = ConfigDict(extra="ignore")
