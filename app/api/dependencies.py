"""
라우터 공통 의존성입니다.

- 클라이언트 식별 (rate limit 키)
- 고정 윈도우 rate limit 확인 (/api 전체 + 쓰기 API 추가 제한)
- 요청 크기 확인
"""

from fastapi import Request, Response

from app.config import get_settings
from app.exceptions import RateLimitExceededError
from app.services.rate_limiter import FixedWindowRateLimiter, get_rate_limiter
from app.utils import validate_request_size


def get_client_id(request: Request) -> str:
    """
    rate limit 키로 쓸 클라이언트 식별자.

    trust_proxy가 켜져 있으면 X-Forwarded-For의 첫 주소를 사용합니다.
    """
    if get_settings().trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def _enforce(limiter: FixedWindowRateLimiter, request: Request, response: Response) -> None:
    client_id = get_client_id(request)
    decision = limiter.hit(client_id)

    headers = {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
    }

    if not decision.allowed:
        # 예외 응답은 주입된 response를 쓰지 않으므로 헤더를 예외에 실어 보냄
        raise RateLimitExceededError(
            retry_after=decision.retry_after,
            details={
                "maxRequests": decision.limit,
                "windowSeconds": limiter.window_seconds,
                "retryAfter": decision.retry_after,
            },
            headers=headers,
        )

    response.headers.update(headers)


async def enforce_api_rate_limit(request: Request, response: Response) -> None:
    """/api 전체에 적용되는 rate limit (기본 분당 100회)."""
    _enforce(get_rate_limiter("api"), request, response)


async def enforce_strict_rate_limit(request: Request, response: Response) -> None:
    """생성/수정 API에 추가로 적용되는 rate limit (기본 분당 60회)."""
    _enforce(get_rate_limiter("strict"), request, response)


async def check_request_size(request: Request) -> None:
    """Content-Length가 설정된 최대 크기를 넘으면 413."""
    validate_request_size(request.headers.get("content-length"))
