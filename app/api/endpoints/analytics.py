"""
대시보드 분석 통계 API입니다.
"""

from fastapi import APIRouter, Depends, Query

from app.models.dashboard import dump
from app.services.mock_store import MockStore, get_mock_store

router = APIRouter()


@router.get("")
async def get_analytics(store: MockStore = Depends(get_mock_store)) -> dict:
    return {"success": True, "data": dump(store.analytics)}


@router.get("/summary")
async def get_summary(store: MockStore = Depends(get_mock_store)) -> dict:
    return {"success": True, "data": dump(store.analytics.summary)}


@router.get("/threads-processed")
async def get_threads_processed(
    period: int = Query(15, ge=1, description="최근 N일"),
    store: MockStore = Depends(get_mock_store),
) -> dict:
    """최근 N일간 처리된 스레드 수."""
    return {"success": True, "data": dump(store.analytics.threads_processed[-period:])}


@router.get("/processing-time")
async def get_processing_time(store: MockStore = Depends(get_mock_store)) -> dict:
    return {"success": True, "data": dump(store.analytics.processing_time)}


@router.get("/source-distribution")
async def get_source_distribution(store: MockStore = Depends(get_mock_store)) -> dict:
    return {"success": True, "data": dump(store.analytics.source_distribution)}
