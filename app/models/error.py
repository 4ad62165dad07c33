"""응답 봉투(envelope) 모델.

스레드 처리 요청은 성공이든 실패든 항상 아래 두 형태 중 하나로 응답합니다.
한 번 만들어진 봉투는 수정하지 않습니다 (frozen).
"""

from datetime import datetime, timezone
from typing import Optional, Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.thread import CamelModel, ProcessingMode
from app.models.results import ProcessingResult


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ErrorDetail(FrozenCamelModel):
    """구조화된 API 에러 정보."""

    code: str = Field(description="에러 코드 (예: VALIDATION_ERROR)")
    message: str = Field(description="사용자에게 보여줄 에러 메시지")
    details: Optional[Any] = Field(default=None, description="추가 에러 상세 정보")
    timestamp: str = Field(default_factory=_utc_now_iso, description="에러 발생 시각")


class ErrorResponse(FrozenCamelModel):
    """실패 응답 봉투."""

    success: bool = False
    error: ErrorDetail


class ResponseMetadata(FrozenCamelModel):
    processed_at: str = Field(default_factory=_utc_now_iso)
    thread_length: int
    processing_time_ms: int
    model: str


class ProcessThreadResponse(FrozenCamelModel):
    """성공 응답 봉투."""

    mode: ProcessingMode
    success: bool = True
    data: ProcessingResult
    metadata: ResponseMetadata
