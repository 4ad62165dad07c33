"""
외부 연동 상태 엔드포인트입니다.
설정값이 있는지만 보고하며 실제 연결은 확인하지 않습니다.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.services.integrations import get_integration_status

router = APIRouter()


@router.get("")
async def get_integrations() -> dict:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "integrations": get_integration_status(),
    }
