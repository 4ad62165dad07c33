"""
스레드 처리 API입니다.
대화 기록을 받아 모드(github / notion / summary)에 맞는 구조화된 결과를 반환합니다.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request

from app.exceptions import ThreadValidationError
from app.services.thread_processor import ThreadProcessor, get_thread_processor

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def process_thread(
    request: Request,
    processor: ThreadProcessor = Depends(get_thread_processor),
) -> dict:
    """
    스레드 처리.

    본문 검증은 오케스트레이터가 직접 수행하므로 여기서는 JSON 파싱만 합니다.
    모든 실패는 SmartThreadError로 올라가 전역 핸들러가 에러 봉투로 변환합니다.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ThreadValidationError(
            "Request body must be valid JSON",
            details={"errors": [{"path": "", "message": "Malformed JSON body"}]},
        ) from None

    response = await processor.process(payload)
    return response.model_dump(mode="json", by_alias=True)
