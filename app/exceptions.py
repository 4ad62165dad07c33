"""
SmartThread 커스텀 예외 계층입니다.
각 예외는 에러 코드, HTTP 상태 코드, 사용자 메시지와 상세 정보를 가집니다.
글로벌 예외 핸들러(app.main)가 이 정보를 그대로 에러 응답 봉투로 변환합니다.
"""

from enum import Enum
from typing import Optional, Any


class UpstreamErrorKind(str, Enum):
    """외부 LLM 호출 실패 유형."""

    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


class SmartThreadError(Exception):
    """SmartThread 기본 예외 클래스."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ConfigurationError(SmartThreadError):
    """필수 설정 누락 (서버 시작 단계)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details)


# ==================== 요청 검증 단계 (400번대) ====================


class ThreadValidationError(SmartThreadError):
    """요청 본문 구조 검증 실패 (400 응답)."""

    status_code = 400

    def __init__(self, message: str = "Request validation failed", details: Optional[Any] = None):
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)


class EmptyThreadError(ThreadValidationError):
    """메시지가 하나도 없는 스레드."""

    def __init__(self, message: str = "Thread cannot be empty", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.error_code = "EMPTY_THREAD"


class SuspiciousContentError(SmartThreadError):
    """스크립트 삽입 등 의심스러운 내용 감지."""

    status_code = 400

    def __init__(
        self,
        message: str = "Thread contains potentially harmful content",
        details: Optional[Any] = None,
    ):
        super().__init__(message, error_code="SUSPICIOUS_CONTENT", details=details)


class RequestTooLargeError(SmartThreadError):
    """요청 크기 제한 초과."""

    status_code = 413

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="REQUEST_TOO_LARGE", details=details)


class RateLimitExceededError(SmartThreadError):
    """로컬 rate limit 초과 (429 응답)."""

    status_code = 429

    def __init__(
        self,
        retry_after: int,
        details: Optional[Any] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        self.retry_after = retry_after
        self.headers = headers or {}
        super().__init__(
            f"Too many requests. Try again in {retry_after} seconds.",
            error_code="RATE_LIMIT_EXCEEDED",
            details=details,
        )


class RequestTimeoutError(SmartThreadError):
    """전체 요청 처리 시간 초과."""

    status_code = 408

    def __init__(self, message: str = "Request timeout", details: Optional[Any] = None):
        super().__init__(message, error_code="REQUEST_TIMEOUT", details=details)


# ==================== 외부 LLM 서비스 단계 ====================


class UpstreamServiceError(SmartThreadError):
    """외부 LLM 호출 실패의 공통 부모. kind로 실패 유형을 구분합니다."""

    kind: UpstreamErrorKind = UpstreamErrorKind.UNKNOWN


class UpstreamRateLimitError(UpstreamServiceError):
    """외부 서비스의 rate limit."""

    status_code = 429
    kind = UpstreamErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str = "Claude rate limit exceeded",
        details: Optional[Any] = None,
        retry_after: Optional[int] = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, error_code="RATE_LIMIT_ERROR", details=details)


class UpstreamAuthError(UpstreamServiceError):
    """외부 서비스 인증 실패."""

    status_code = 401
    kind = UpstreamErrorKind.AUTH_FAILED

    def __init__(self, message: str = "Claude authentication failed", details: Optional[Any] = None):
        super().__init__(message, error_code="AUTH_ERROR", details=details)


class UpstreamQuotaError(UpstreamServiceError):
    """외부 서비스 사용량(크레딧) 초과."""

    status_code = 402
    kind = UpstreamErrorKind.QUOTA_EXCEEDED

    def __init__(self, message: str = "Claude quota exceeded", details: Optional[Any] = None):
        super().__init__(message, error_code="QUOTA_ERROR", details=details)


class ProcessingError(UpstreamServiceError):
    """외부 호출 또는 응답 해석 실패 (500 응답)."""

    status_code = 500

    def __init__(
        self,
        message: str = "Failed to process thread",
        details: Optional[Any] = None,
        kind: UpstreamErrorKind = UpstreamErrorKind.UNKNOWN,
    ):
        super().__init__(message, error_code="PROCESSING_ERROR", details=details)
        self.kind = kind


class UnsupportedModeError(SmartThreadError):
    """라우터에 도달한 알 수 없는 처리 모드."""

    status_code = 500

    def __init__(self, mode: Any):
        super().__init__(
            f"Unsupported processing mode: {mode}",
            error_code="UNSUPPORTED_MODE",
            details={"mode": str(mode)},
        )


class InternalError(SmartThreadError):
    """예상하지 못한 내부 오류."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(message, error_code="INTERNAL_ERROR", details=details)


# ==================== 대시보드 / 연동 ====================


class NotFoundError(SmartThreadError):
    """요청한 리소스 없음."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="NOT_FOUND", details=details)


class ConflictError(SmartThreadError):
    """중복 리소스 생성 시도."""

    status_code = 409

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="CONFLICT", details=details)


class IntegrationNotConfiguredError(SmartThreadError):
    """설정되지 않은 외부 연동 호출."""

    status_code = 503

    def __init__(self, integration: str):
        super().__init__(
            f"{integration} integration not configured",
            error_code="INTEGRATION_NOT_CONFIGURED",
            details={"integration": integration},
        )
