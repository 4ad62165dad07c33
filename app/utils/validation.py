"""입력 유효성 검증 유틸리티.

스레드 처리 요청이 외부 LLM에 도달하기 전에 구조와 크기를 검증합니다.
검증은 부수 효과가 없는 순수 함수로만 구성됩니다.
"""

from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from app.config import get_settings
from app.exceptions import RequestTooLargeError, ThreadValidationError
from app.models import ProcessThreadRequest, ThreadMessage


# (필드명, pydantic 에러 타입) → 사용자 메시지
FIELD_MESSAGES = {
    ("thread", "too_short"): "Thread must contain at least one message",
    ("thread", "too_long"): "Thread cannot exceed 100 messages",
    ("thread", "list_type"): "Thread must be an array of messages",
    ("mode", "enum"): "Mode must be one of: github, notion, summary",
    ("sender", "string_too_short"): "Sender is required",
    ("text", "string_too_short"): "Text is required",
    ("priority", "enum"): "Priority must be one of: low, medium, high",
}


def _field_message(loc: tuple, error_type: str, default: str) -> str:
    """마지막 문자열 경로 요소 기준으로 사람이 읽을 메시지를 고릅니다."""
    field = next((part for part in reversed(loc) if isinstance(part, str)), "")

    message = FIELD_MESSAGES.get((field, error_type))
    if message:
        return message
    if error_type == "missing" and field:
        return f"{field[:1].upper()}{field[1:]} is required"
    return default


def format_validation_errors(
    errors: Iterable[dict],
    strip_prefix: tuple = (),
) -> list[dict[str, str]]:
    """
    pydantic 에러 목록을 {path, message} 목록으로 변환.

    Args:
        errors: pydantic/FastAPI의 errors() 결과
        strip_prefix: 제거할 경로 접두어 (FastAPI 본문 에러의 "body" 등)

    Returns:
        위반 항목마다 하나씩, 점으로 연결된 경로와 메시지
    """
    formatted = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if strip_prefix and loc[: len(strip_prefix)] == strip_prefix:
            loc = loc[len(strip_prefix):]

        formatted.append({
            "path": ".".join(str(part) for part in loc),
            "message": _field_message(loc, error.get("type", ""), error.get("msg", "Invalid value")),
        })
    return formatted


def validate_process_request(raw: Any) -> ProcessThreadRequest:
    """
    스레드 처리 요청 본문 검증.

    - thread: 1~100개의 메시지, 각 메시지는 비어있지 않은 sender/text
    - mode: github, notion, summary 중 하나
    - options: 있으면 정해진 선택 필드 형태

    첫 번째 위반만이 아니라 모든 위반 항목을 모아서 보고합니다.

    Args:
        raw: 파싱된 JSON 본문

    Returns:
        정규화된 ProcessThreadRequest (이후 단계는 원본 대신 이것을 사용)

    Raises:
        ThreadValidationError: 하나 이상의 필드가 계약을 위반한 경우
    """
    if not isinstance(raw, dict):
        raise ThreadValidationError(
            details={"errors": [{"path": "", "message": "Request body must be a JSON object"}]},
        )

    try:
        return ProcessThreadRequest.model_validate(raw)
    except PydanticValidationError as e:
        raise ThreadValidationError(
            details={"errors": format_validation_errors(e.errors())},
        ) from e


def validate_request_size(content_length: Optional[str]) -> None:
    """
    Content-Length 헤더 기준 요청 크기 검증.

    헤더가 없거나 숫자가 아니면 0으로 취급합니다.

    Raises:
        RequestTooLargeError: 설정된 최대 크기(KB) 초과
    """
    settings = get_settings()
    max_bytes = settings.max_request_size_kb * 1024

    try:
        size = int(content_length or 0)
    except ValueError:
        size = 0

    if size > max_bytes:
        raise RequestTooLargeError(
            f"Request size exceeds {settings.max_request_size_kb}KB limit",
            details={
                "content_length": size,
                "max_size_bytes": max_bytes,
            },
        )


def extract_participants(messages: Iterable[ThreadMessage]) -> list[str]:
    """등장 순서를 유지한 채 중복 없는 발신자 목록을 반환합니다."""
    return list(dict.fromkeys(message.sender for message in messages))


def format_thread_for_prompt(messages: Iterable[ThreadMessage]) -> str:
    """`sender: text (timestamp)` 형식의 줄로 대화 기록을 펼칩니다."""
    lines = []
    for message in messages:
        line = f"{message.sender}: {message.text}"
        if message.timestamp:
            line += f" ({message.timestamp})"
        lines.append(line)
    return "\n".join(lines)
