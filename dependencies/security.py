import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException

from config.settings import Settings
from dependencies.app_state import get_settings

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def require_admin_token(authorization: AuthHeader = None, app_settings: Settings = Depends(get_settings)):
    """관리자 API 보호: Authorization: Bearer <ADMIN_TOKEN>"""
    # 토큰이 설정되지 않은 환경에서는 관리자 API 자체를 막는다
    if not app_settings.ADMIN_TOKEN:
        raise HTTPException(status_code=503, detail="Admin token not configured")
    if not authorization:
        raise _unauthorized("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if not token:
        raise _unauthorized("Invalid Authorization header format")
    if scheme.lower() != "bearer":
        raise _unauthorized("Invalid auth scheme")

    # 타이밍 안전 비교
    if not hmac.compare_digest(token.strip().encode(), app_settings.ADMIN_TOKEN.encode()):
        raise _unauthorized("Invalid token")
    return {"client": "admin"}
