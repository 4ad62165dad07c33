"""Fixed-window rate limiting service.

클라이언트(IP)별 요청 수를 고정된 시간 윈도우 단위로 셉니다.

동작 방식:
- 기록이 없거나 윈도우가 끝났으면 {count: 1, reset_at: now + window}로 초기화하고 허용
- 그 외에는 count를 1 증가시키고, 최대치를 넘으면 거부 (남은 윈도우 시간을 retry_after로 안내)
- 백그라운드 작업이 5분마다 만료된 엔트리를 정리하여 메모리를 제한

슬라이딩 윈도우가 아니므로 윈도우 경계에서 순간적으로 최대 2배까지 허용될 수 있습니다.

사용 예시:
    limiter = get_rate_limiter("api")
    decision = limiter.hit(client_id)
    if not decision.allowed:
        raise RateLimitExceededError(decision.retry_after)
"""

import asyncio
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from app.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    """클라이언트 하나의 윈도우 상태."""
    count: int
    reset_at: float


@dataclass
class RateLimitStats:
    """rate limit 통계."""
    allowed: int = 0
    rejected: int = 0
    purged: int = 0

    @property
    def rejection_rate(self) -> float:
        total = self.allowed + self.rejected
        return self.rejected / total if total > 0 else 0.0


@dataclass(frozen=True)
class RateLimitDecision:
    """hit() 한 번의 판정 결과."""
    allowed: bool
    count: int
    limit: int
    reset_at: float
    retry_after: int = 0

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class InMemoryRateLimitStore:
    """
    프로세스 내부 dict 기반 저장소.

    키 단위 갱신은 하나의 Lock 아래에서 직렬화됩니다.
    여러 인스턴스가 공유해야 하면 같은 인터페이스로 외부 캐시 구현을 주입하면 됩니다.
    """

    def __init__(self):
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def increment(self, key: str, now: float, window_seconds: float) -> RateLimitEntry:
        """윈도우가 유효하면 count+1, 아니면 새 윈도우로 초기화한 엔트리를 반환."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_at:
                entry = RateLimitEntry(count=1, reset_at=now + window_seconds)
                self._entries[key] = entry
            else:
                entry.count += 1
            return RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def get(self, key: str) -> Optional[RateLimitEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def purge_expired(self, now: float) -> int:
        """윈도우가 끝난 엔트리 삭제. 삭제된 수를 반환."""
        with self._lock:
            expired_keys = [key for key, entry in self._entries.items() if now > entry.reset_at]
            for key in expired_keys:
                del self._entries[key]
            return len(expired_keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class FixedWindowRateLimiter:
    """
    고정 윈도우 카운터.

    Attributes:
        name: 로그 구분용 이름 (예: "api", "strict")
        max_requests: 윈도우당 허용 요청 수
        window_seconds: 윈도우 길이(초)
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60,
        store: Optional[InMemoryRateLimitStore] = None,
        clock: Callable[[], float] = time.monotonic,
        name: str = "default",
    ):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.store = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock
        self._stats = RateLimitStats()

    def hit(self, key: str) -> RateLimitDecision:
        """
        요청 한 건을 기록하고 허용 여부를 판정합니다.

        Args:
            key: 클라이언트 식별자 (IP 등)

        Returns:
            RateLimitDecision. 거부 시 retry_after는 1 이상, 윈도우 길이 이하.
        """
        now = self._clock()
        entry = self.store.increment(key, now, self.window_seconds)

        if entry.count <= self.max_requests:
            self._stats.allowed += 1
            return RateLimitDecision(
                allowed=True,
                count=entry.count,
                limit=self.max_requests,
                reset_at=entry.reset_at,
            )

        remaining_window = max(0.0, entry.reset_at - now)
        retry_after = min(
            max(1, math.ceil(remaining_window)),
            max(1, math.ceil(self.window_seconds)),
        )
        self._stats.rejected += 1

        logger.warning(
            f"[RateLimit:{self.name}] 한도 초과: client={key}, count={entry.count}, "
            f"max={self.max_requests}, retry_after={retry_after}s"
        )

        return RateLimitDecision(
            allowed=False,
            count=entry.count,
            limit=self.max_requests,
            reset_at=entry.reset_at,
            retry_after=retry_after,
        )

    def cleanup_expired(self) -> int:
        """만료된 윈도우 정리."""
        count = self.store.purge_expired(self._clock())
        self._stats.purged += count
        if count > 0:
            logger.debug(f"[RateLimit:{self.name}] 만료 엔트리 정리: {count}개")
        return count

    def reset(self) -> None:
        self.store.clear()
        self._stats = RateLimitStats()

    @property
    def stats(self) -> RateLimitStats:
        return self._stats


async def run_periodic_cleanup(
    limiters: Iterable[FixedWindowRateLimiter],
    interval_seconds: float,
) -> None:
    """
    만료 엔트리를 주기적으로 정리하는 백그라운드 루프.
    lifespan에서 Task로 띄우고 종료 시 cancel 합니다.
    """
    limiters = list(limiters)
    while True:
        await asyncio.sleep(interval_seconds)
        for limiter in limiters:
            limiter.cleanup_expired()


# 이름별 싱글톤 인스턴스
_rate_limiters: Dict[str, FixedWindowRateLimiter] = {}


def get_rate_limiter(name: str = "api") -> FixedWindowRateLimiter:
    """
    이름별 FixedWindowRateLimiter 인스턴스 반환.

    - "api": /api 전체 (기본 분당 100회)
    - "strict": 쓰기 API (기본 분당 60회)
    """
    if name not in _rate_limiters:
        settings = get_settings()
        max_requests = (
            settings.strict_rate_limit_max_requests
            if name == "strict"
            else settings.rate_limit_max_requests
        )
        _rate_limiters[name] = FixedWindowRateLimiter(
            max_requests=max_requests,
            window_seconds=settings.rate_limit_window_seconds,
            name=name,
        )
    return _rate_limiters[name]


def all_rate_limiters() -> list[FixedWindowRateLimiter]:
    return [get_rate_limiter("api"), get_rate_limiter("strict")]


def reset_rate_limiters() -> None:
    """모든 rate limiter 상태 초기화 (테스트용)."""
    for limiter in _rate_limiters.values():
        limiter.reset()
