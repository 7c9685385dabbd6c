from pydantic import BaseModel, Field
from typing import Optional


class SuggestionsRequest(BaseModel):
    session_id: Optional[str] = None         # X-Session-Id 헤더가 없을 때 사용


class SuggestionsOut(BaseModel):
    suggestions: str                         # AI 조언 (아랍어)
    average: float
    level: str                               # 레벨 제목


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=1000, description="학생 질문")
    session_id: Optional[str] = None         # 있으면 저장된 성적을 문맥으로 사용


class ChatOut(BaseModel):
    answer: str
