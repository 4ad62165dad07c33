"""유틸리티 모듈."""

from .validation import (
    validate_process_request,
    validate_request_size,
    format_validation_errors,
    extract_participants,
    format_thread_for_prompt,
)
from .screening import (
    is_suspicious,
    find_suspicious_message,
    screen_thread,
)

__all__ = [
    "validate_process_request",
    "validate_request_size",
    "format_validation_errors",
    "extract_participants",
    "format_thread_for_prompt",
    "is_suspicious",
    "find_suspicious_message",
    "screen_thread",
]
