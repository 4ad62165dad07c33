"""의심 콘텐츠 차단.

스크립트 삽입 흔적이 있는 메시지가 하나라도 있으면 요청 전체를 거부합니다.
내용을 고치거나 일부만 걸러내지 않습니다.
"""

import logging
import re
from typing import Iterable, Optional

from app.exceptions import SuspiciousContentError
from app.models import ThreadMessage

logger = logging.getLogger(__name__)


SUSPICIOUS_PATTERNS = [
    re.compile(r"script\s*:", re.IGNORECASE),
    re.compile(r"javascript\s*:", re.IGNORECASE),
    re.compile(r"data\s*:", re.IGNORECASE),
    re.compile(r"<\s*script", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=", re.IGNORECASE),  # onclick=, onerror= ...
]


def is_suspicious(value: Optional[str]) -> bool:
    """문자열이 의심 패턴 중 하나라도 포함하면 True."""
    if not value:
        return False
    return any(pattern.search(value) for pattern in SUSPICIOUS_PATTERNS)


def find_suspicious_message(messages: Iterable[ThreadMessage]) -> Optional[int]:
    """처음으로 걸리는 메시지의 인덱스. 없으면 None."""
    for index, message in enumerate(messages):
        if is_suspicious(message.sender) or is_suspicious(message.text):
            return index
    return None


def screen_thread(messages: list[ThreadMessage]) -> None:
    """
    모든 메시지의 sender와 text를 검사합니다.

    Raises:
        SuspiciousContentError: 하나라도 의심 패턴에 걸린 경우
    """
    index = find_suspicious_message(messages)
    if index is not None:
        logger.warning(
            f"[Screening] 의심스러운 내용 감지: message_index={index}, thread_length={len(messages)}"
        )
        raise SuspiciousContentError()
