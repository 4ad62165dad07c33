"""Claude API client service for thread processing.

Anthropic Messages API를 비동기로 호출하여 구조화된(tool 호출) 응답을 받습니다.

주요 기능:
- generate_structured(): 지정한 도구를 강제로 호출하게 하고 그 입력(JSON)을 결과로 반환
- health_check(): 외부 서비스 도달 가능 여부 확인

호출 정책:
- 호출 1회당 외부 요청은 정확히 1번 (SDK 자동 재시도 비활성화)
- 재시도가 필요하면 호출자가 결정합니다
- 시간 제한은 오케스트레이터의 전체 요청 타임아웃이 담당하며,
  타임아웃 시 이 코루틴이 취소되면서 진행 중인 HTTP 요청도 함께 취소됩니다

실패 분류 (SDK 예외 타입 우선, 그 다음 메시지 문자열):
┌──────────────────────────────┬──────────────────────────┬──────┐
│ 조건                          │ 예외                      │ HTTP │
├──────────────────────────────┼──────────────────────────┼──────┤
│ RateLimitError / "rate limit" │ UpstreamRateLimitError    │ 429  │
│ AuthenticationError /         │ UpstreamAuthError         │ 401  │
│   "authentication"            │                           │      │
│ 402 / "quota" / "credit ..."  │ UpstreamQuotaError        │ 402  │
│ tool_use 블록 없음             │ ProcessingError(malformed)│ 500  │
│ 그 외                          │ ProcessingError(unknown)  │ 500  │
└──────────────────────────────┴──────────────────────────┴──────┘
"""

import json
import logging
import time
from typing import Any, Optional

import anthropic
from anthropic import AsyncAnthropic

from app.config import get_settings
from app.exceptions import (
    ProcessingError,
    UpstreamAuthError,
    UpstreamErrorKind,
    UpstreamQuotaError,
    UpstreamRateLimitError,
    UpstreamServiceError,
)

logger = logging.getLogger(__name__)


def _retry_after_from(error: Exception) -> Optional[int]:
    """rate limit 응답의 retry-after 헤더 값 (초)."""
    response = getattr(error, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    value = headers.get("retry-after")
    try:
        return int(float(value)) if value is not None else None
    except (TypeError, ValueError):
        return None


def classify_upstream_error(error: Exception) -> UpstreamServiceError:
    """
    외부 호출 예외를 타입이 있는 업스트림 에러로 변환합니다.

    1. SDK 예외 타입/상태 코드를 먼저 확인
    2. 그 다음 메시지에 "rate limit", "authentication", "quota"가 있는지 확인
    3. 어느 것에도 해당하지 않으면 일반 처리 에러
    """
    if isinstance(error, anthropic.RateLimitError):
        return UpstreamRateLimitError(retry_after=_retry_after_from(error))
    if isinstance(error, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return UpstreamAuthError()
    if isinstance(error, anthropic.APIStatusError) and error.status_code == 402:
        return UpstreamQuotaError()

    message = str(error).lower()
    if "rate limit" in message:
        return UpstreamRateLimitError()
    if "authentication" in message:
        return UpstreamAuthError()
    if "quota" in message or "credit balance" in message:
        return UpstreamQuotaError()

    return ProcessingError(kind=UpstreamErrorKind.UNKNOWN)


class ClaudeClient:
    """
    Anthropic SDK 래퍼 클래스.

    Attributes:
        model: 사용할 Claude 모델 ID
        temperature: 샘플링 온도
        max_tokens: 최대 출력 토큰 수
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        client: Optional[Any] = None,
    ):
        """
        ClaudeClient 초기화.

        Args:
            api_key: Anthropic API 키 (None이면 설정값 사용)
            model / temperature / max_tokens: None이면 설정값 사용
            client: 미리 만들어 둔 AsyncAnthropic 호환 객체 (테스트 주입용)
        """
        settings = get_settings()
        self.model = model or settings.claude_model
        self.temperature = settings.claude_temperature if temperature is None else temperature
        self.max_tokens = max_tokens or settings.claude_max_tokens

        if client is None:
            client = AsyncAnthropic(
                api_key=api_key or settings.anthropic_api_key or None,
                max_retries=0,
            )
        self._client = client

        logger.info(f"[Claude] 클라이언트 초기화 완료 (model={self.model})")

    async def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        tool: dict[str, Any],
    ) -> dict[str, Any]:
        """
        도구 호출을 강제한 요청을 한 번 보내고, 도구 입력을 결과로 반환합니다.

        Args:
            system_prompt: 모드별 시스템 지침
            user_prompt: 대화 기록이 포함된 사용자 메시지
            tool: {"name", "description", "input_schema"} 형태의 도구 정의

        Returns:
            도구 입력(JSON 객체)

        Raises:
            UpstreamRateLimitError / UpstreamAuthError / UpstreamQuotaError
            ProcessingError: 응답에 도구 호출이 없거나 그 외 실패
        """
        tool_name = tool["name"]
        start_time = time.perf_counter()
        logger.info(
            f"[Claude] 요청: model={self.model}, tool={tool_name}, prompt_length={len(user_prompt)}"
        )

        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                tools=[tool],
                tool_choice={"type": "tool", "name": tool_name},
            )
        except Exception as e:
            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            classified = classify_upstream_error(e)
            logger.error(
                f"[Claude] 호출 실패: {type(e).__name__}: {e} "
                f"(kind={classified.kind.value}, {elapsed_ms}ms)"
            )
            raise classified from e

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        usage = getattr(response, "usage", None)
        logger.info(
            f"[Claude] 응답: {elapsed_ms}ms, stop_reason={getattr(response, 'stop_reason', None)}, "
            f"tokens={getattr(usage, 'input_tokens', 0)} in + {getattr(usage, 'output_tokens', 0)} out"
        )

        return self._extract_tool_input(response, tool_name)

    async def health_check(self) -> bool:
        """
        외부 서비스 상태 확인.

        짧은 요청을 한 번 보내 응답 내용이 있으면 True. 예외는 밖으로 내보내지 않습니다.
        """
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=5,
                messages=[{"role": "user", "content": "Health check"}],
            )
            return bool(getattr(response, "content", None))
        except Exception as e:
            logger.warning(f"[Claude] 헬스 체크 실패: {type(e).__name__}: {e}")
            return False

    def _extract_tool_input(self, response: Any, tool_name: str) -> dict[str, Any]:
        """
        응답에서 지정한 도구의 tool_use 블록을 찾아 입력을 꺼냅니다.

        입력이 문자열로 온 경우 JSON으로 파싱합니다.
        """
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) != "tool_use" or getattr(block, "name", None) != tool_name:
                continue

            arguments = block.input
            if isinstance(arguments, str):
                arguments = self._parse_json_arguments(arguments)
            if not isinstance(arguments, dict):
                raise ProcessingError(
                    "Structured response from Claude was not a JSON object",
                    details={"tool": tool_name},
                    kind=UpstreamErrorKind.MALFORMED,
                )
            return arguments

        logger.error(f"[Claude] 구조화 응답 없음: tool={tool_name}")
        raise ProcessingError(
            "No structured tool response received from Claude",
            details={"tool": tool_name},
            kind=UpstreamErrorKind.MALFORMED,
        )

    def _parse_json_arguments(self, raw: str) -> Any:
        """문자열로 직렬화된 도구 입력 파싱 (마크다운 코드 블록 허용)."""
        cleaned = raw.strip()
        if cleaned.startswith("```json"):
            cleaned = cleaned[7:]
        elif cleaned.startswith("```"):
            cleaned = cleaned[3:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]

        try:
            return json.loads(cleaned.strip())
        except json.JSONDecodeError as e:
            logger.error(f"[Claude] 도구 입력 JSON 파싱 실패: {e}")
            raise ProcessingError(
                "Failed to parse structured response from Claude",
                kind=UpstreamErrorKind.MALFORMED,
            ) from e


# Singleton instance for dependency injection
_claude_client: Optional[ClaudeClient] = None


def get_claude_client() -> ClaudeClient:
    """Get or create Claude client singleton."""
    global _claude_client
    if _claude_client is None:
        _claude_client = ClaudeClient()
    return _claude_client
