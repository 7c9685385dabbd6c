"""
Rate Limiting 미들웨어
IP 기준 고정 윈도우 제한 (limits 라이브러리, 프로세스 메모리 보관)
- /api/     : "100/15 minutes"
- /api/ai/  : "5/minute" (AI 기능 보호)
경로가 여러 규칙에 걸리면 모든 규칙을 순서대로 적용한다.
"""
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from limits import RateLimitItem, parse
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from middlewares.error_handler import error_response
from utils.network import get_client_ip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitRule:
    prefix: str
    limit: str                      # 예: "100/15 minutes", "5/minute"
    message: str = "Too many requests, please try again later."
    item: RateLimitItem = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "item", parse(self.limit))


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, rules: Sequence[RateLimitRule], storage: Optional[Storage] = None):
        super().__init__(app)
        self.rules = list(rules)
        self.limiter = FixedWindowRateLimiter(storage or MemoryStorage())

    def _retry_after(self, rule: RateLimitRule, ip: str) -> int:
        stats = self.limiter.get_window_stats(rule.item, rule.prefix, ip)
        return max(1, math.ceil(stats.reset_time - time.time()))

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        matching = [r for r in self.rules if path.startswith(r.prefix)]
        if not matching:
            return await call_next(request)

        ip = get_client_ip(request)
        for rule in matching:
            if not self.limiter.hit(rule.item, rule.prefix, ip):
                logger.warning("❌ Rate Limit 초과 (ip=%s, prefix=%s, limit=%s)", ip, rule.prefix, rule.limit)
                return error_response(429, "RATE_LIMITED", rule.message,
                                      headers={"Retry-After": str(self._retry_after(rule, ip))})
        return await call_next(request)
