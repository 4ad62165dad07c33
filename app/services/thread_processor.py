"""
스레드 처리 요청 하나의 전체 흐름을 관리하는 오케스트레이터입니다.

처리 단계:
1. 검증 (Validation): 요청 본문 구조 확인
2. 선별 (Screening): 스크립트 삽입 등 의심 내용 차단
3. 라우팅 (Routing): 모드별 시스템 프롬프트와 출력 스키마 선택
4. 외부 처리 (External): Claude에 구조화 응답 요청
5. 응답 (Respond): 결과 검증 후 성공 봉투 생성

rate limit 확인은 라우터 의존성(app.api.dependencies)에서 이 흐름보다 먼저 수행됩니다.
어느 단계에서 실패하든 경과 시간을 포함한 SmartThreadError로 정리되어 나가며,
그 외의 예외가 그대로 빠져나가는 일은 없습니다.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from app.config import Settings, get_settings
from app.exceptions import (
    EmptyThreadError,
    InternalError,
    ProcessingError,
    RequestTimeoutError,
    SmartThreadError,
    UpstreamErrorKind,
)
from app.models import ProcessThreadRequest, ProcessThreadResponse, ResponseMetadata
from app.prompts import USER_PROMPT_TEMPLATE
from app.services.claude_client import ClaudeClient, get_claude_client
from app.services.mode_router import route_mode
from app.utils import (
    extract_participants,
    format_thread_for_prompt,
    screen_thread,
    validate_process_request,
)

logger = logging.getLogger(__name__)


class ProcessingStage(str, Enum):
    """요청이 지나온 단계. 실패 로그에 마지막 단계를 남깁니다."""

    RECEIVED = "received"
    VALIDATED = "validated"
    SCREENED = "screened"
    ROUTED = "routed"
    EXTERNALLY_PROCESSED = "externally_processed"
    RESPONDED = "responded"
    REJECTED = "rejected"


@dataclass
class _RequestContext:
    started_at: float
    stage: ProcessingStage = ProcessingStage.RECEIVED
    mode: Optional[str] = None
    thread_length: Optional[int] = None
    participants: list[str] = field(default_factory=list)

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started_at) * 1000)


class ThreadProcessor:
    """
    스레드 처리 오케스트레이터.

    요청 하나에 대해 정확히 하나의 응답 봉투(성공) 또는 하나의 SmartThreadError(실패)를 만듭니다.
    """

    def __init__(
        self,
        claude_client: Optional[ClaudeClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.claude_client = claude_client or get_claude_client()

    async def process(self, payload: Any) -> ProcessThreadResponse:
        """
        원시 요청 본문을 처리하여 성공 봉투를 반환합니다.

        Args:
            payload: 파싱된 JSON 본문 (dict) 또는 이미 검증된 ProcessThreadRequest

        Returns:
            ProcessThreadResponse

        Raises:
            SmartThreadError: 모든 실패는 details에 processingTimeMs가 포함된 형태로 나갑니다
        """
        ctx = _RequestContext(started_at=time.perf_counter())
        timeout = self.settings.request_timeout_seconds

        try:
            # 타임아웃 시 진행 중인 외부 호출까지 취소됩니다 (늦게 온 결과는 버려짐)
            return await asyncio.wait_for(self._run(payload, ctx), timeout=timeout)

        except asyncio.TimeoutError:
            logger.error(
                f"[Processor] 시간 초과: {timeout}s (stage={ctx.stage.value}, mode={ctx.mode})"
            )
            error = RequestTimeoutError(details={"timeoutMs": int(timeout * 1000)})
            raise self._with_context(error, ctx) from None

        except SmartThreadError as e:
            logger.warning(
                f"[Processor] 요청 거부: {e.error_code} - {e.message} "
                f"(stage={ctx.stage.value}, {ctx.elapsed_ms()}ms)"
            )
            raise self._with_context(e, ctx)

        except Exception as e:
            logger.exception(f"[Processor] 예상하지 못한 오류 (stage={ctx.stage.value})")
            error = InternalError()
            raise self._with_context(error, ctx) from e

    async def _run(self, payload: Any, ctx: _RequestContext) -> ProcessThreadResponse:
        # ========== 1단계: 검증 ==========
        if isinstance(payload, ProcessThreadRequest):
            request = payload
        else:
            request = validate_process_request(payload)
        ctx.mode = request.mode.value
        ctx.thread_length = len(request.thread)

        if not request.thread:
            raise EmptyThreadError()
        ctx.stage = ProcessingStage.VALIDATED

        # ========== 2단계: 선별 ==========
        screen_thread(request.thread)
        ctx.stage = ProcessingStage.SCREENED

        ctx.participants = extract_participants(request.thread)
        logger.info(
            f"[Processor] 처리 시작: mode={ctx.mode}, messages={ctx.thread_length}, "
            f"participants={len(ctx.participants)}"
        )
        logger.debug(f"[Processor] 참여자: {', '.join(ctx.participants)}")

        # ========== 3단계: 라우팅 ==========
        route = route_mode(request.mode, request.options)
        ctx.stage = ProcessingStage.ROUTED

        # ========== 4단계: 외부 처리 ==========
        user_prompt = USER_PROMPT_TEMPLATE.format(
            thread_text=format_thread_for_prompt(request.thread)
        )
        raw_result = await self.claude_client.generate_structured(
            system_prompt=route.system_prompt,
            user_prompt=user_prompt,
            tool=route.tool,
        )
        ctx.stage = ProcessingStage.EXTERNALLY_PROCESSED

        # ========== 5단계: 응답 ==========
        result = self._parse_result(route.result_model, raw_result)
        response = ProcessThreadResponse(
            mode=request.mode,
            data=result,
            metadata=ResponseMetadata(
                thread_length=ctx.thread_length,
                processing_time_ms=ctx.elapsed_ms(),
                model=self.claude_client.model,
            ),
        )
        ctx.stage = ProcessingStage.RESPONDED

        logger.info(f"[Processor] 처리 완료: mode={ctx.mode}, {ctx.elapsed_ms()}ms")
        return response

    def _parse_result(self, result_model: Any, raw_result: dict[str, Any]) -> Any:
        """외부 응답을 모드별 결과 모델로 검증합니다."""
        reported_total = raw_result.get("totalTasks")
        tasks = raw_result.get("tasks")
        if reported_total is not None and isinstance(tasks, list) and reported_total != len(tasks):
            logger.warning(
                f"[Processor] totalTasks 불일치: reported={reported_total}, actual={len(tasks)}"
            )

        try:
            return result_model.model_validate(raw_result)
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            logger.error(f"[Processor] 결과 형식 오류: {e.error_count()}개 필드 ({fields})")
            raise ProcessingError(
                "Structured response did not match the expected format",
                kind=UpstreamErrorKind.MALFORMED,
            ) from e

    def _with_context(self, error: SmartThreadError, ctx: _RequestContext) -> SmartThreadError:
        """실패 응답 details에 경과 시간, 모드, 스레드 길이를 추가합니다."""
        ctx.stage = ProcessingStage.REJECTED

        details = error.details if isinstance(error.details, dict) else (
            {} if error.details is None else {"info": error.details}
        )
        details = {
            **details,
            "processingTimeMs": ctx.elapsed_ms(),
            "mode": ctx.mode,
            "threadLength": ctx.thread_length,
        }
        error.details = details
        return error


# Singleton instance for dependency injection
_thread_processor: Optional[ThreadProcessor] = None


def get_thread_processor() -> ThreadProcessor:
    """Get or create thread processor singleton."""
    global _thread_processor
    if _thread_processor is None:
        _thread_processor = ThreadProcessor()
    return _thread_processor
