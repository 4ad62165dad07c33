"""
대시보드 스레드 목록 API입니다.
메모리 저장소의 스레드를 조회하고 새 스레드를 등록합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import enforce_strict_rate_limit
from app.models import ThreadCreate
from app.models.dashboard import dump
from app.services.mock_store import MockStore, get_mock_store

router = APIRouter()


@router.get("")
async def list_threads(
    status: Optional[str] = None,
    source: Optional[str] = None,
    limit: int = Query(50, ge=0),
    offset: int = Query(0, ge=0),
    store: MockStore = Depends(get_mock_store),
) -> dict:
    """상태/출처로 필터링한 스레드 목록 (페이지 단위)."""
    threads, total = store.list_threads(status=status, source=source, limit=limit, offset=offset)
    return {
        "success": True,
        "data": {
            "threads": dump(threads),
            "total": total,
            "limit": limit,
            "offset": offset,
        },
    }


@router.get("/{thread_id}")
async def get_thread(thread_id: str, store: MockStore = Depends(get_mock_store)) -> dict:
    return {"success": True, "data": dump(store.get_thread(thread_id))}


@router.post("", status_code=201, dependencies=[Depends(enforce_strict_rate_limit)])
async def create_thread(
    data: ThreadCreate,
    store: MockStore = Depends(get_mock_store),
) -> dict:
    """새 스레드 등록 (pending 상태로 목록 맨 앞에 추가)."""
    thread = store.create_thread(data)
    return {
        "success": True,
        "data": dump(thread),
        "message": "Thread created successfully",
    }
