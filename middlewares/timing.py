import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("grades.access")


class TimingMiddleware(BaseHTTPMiddleware):
    """응답 헤더에 X-Latency-Ms / X-Request-Id 를 붙이고 접근 로그를 남긴다"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)

        response.headers["X-Latency-Ms"] = str(latency_ms)
        response.headers["X-Request-Id"] = request_id
        logger.info("[%s] %s %s -> %d (%dms)", request_id, request.method,
                    request.url.path, response.status_code, latency_ms)
        return response
