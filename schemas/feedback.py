from pydantic import BaseModel, Field
from typing import Optional


# ✅ 입력용: 피드백 제출
class FeedbackCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="평점 1~5")
    feedback: Optional[str] = Field(default=None, max_length=500, description="자유 의견")
    session_id: Optional[str] = Field(default=None, max_length=64)
