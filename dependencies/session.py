from typing import Optional

from models.grade_sessions import SESSION_ID_MAX_LENGTH
from services.errors import InvalidSessionIdError, SessionRequiredError


def resolve_session_id(header_value: Optional[str], body_value: Optional[str] = None) -> str:
    """X-Session-Id 헤더 우선, 없으면 본문의 session_id"""
    session_id = (header_value or body_value or "").strip()
    if not session_id:
        raise SessionRequiredError()
    # DB 컬럼 길이(String(64))를 넘는 ID 는 저장 전에 거부
    if len(session_id) > SESSION_ID_MAX_LENGTH:
        raise InvalidSessionIdError(SESSION_ID_MAX_LENGTH)
    return session_id
