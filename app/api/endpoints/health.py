"""
헬스 체크(Health Check) 엔드포인트입니다.
서버와 Claude API에 실제로 도달 가능한지 확인합니다.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.services.claude_client import ClaudeClient, get_claude_client

logger = logging.getLogger(__name__)

router = APIRouter()

APP_VERSION = "1.0.0"
_started_at = time.monotonic()


def get_uptime_seconds() -> float:
    """프로세스가 이 모듈을 불러온 뒤 지난 시간(초)."""
    return round(time.monotonic() - _started_at, 3)


@router.get("")
async def health_check(claude_client: ClaudeClient = Depends(get_claude_client)):
    """
    상세 상태 확인 함수.
    Claude 호출이 성공하면 200, 실패하거나 시간 안에 응답이 없으면 503을 반환합니다.
    """
    settings = get_settings()
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        try:
            claude_healthy = await asyncio.wait_for(
                claude_client.health_check(),
                timeout=settings.health_check_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"[Health] Claude 응답 시간 초과: {settings.health_check_timeout_seconds}s"
            )
            claude_healthy = False

        status_code = 200 if claude_healthy else 503
        return JSONResponse(
            status_code=status_code,
            content={
                "status": "healthy" if claude_healthy else "unhealthy",
                "timestamp": timestamp,
                "services": {
                    "claude": "healthy" if claude_healthy else "unhealthy",
                    "server": "healthy",
                },
                "version": APP_VERSION,
                "uptime": get_uptime_seconds(),
            },
        )

    except Exception as e:
        logger.error(f"[Health] 헬스 체크 실패: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": "unhealthy",
                "timestamp": timestamp,
                "error": "Health check failed",
            },
        )
