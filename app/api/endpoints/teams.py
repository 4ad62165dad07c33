"""
팀원 관리 API입니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import enforce_strict_rate_limit
from app.models import TeamMemberCreate, TeamMemberUpdate
from app.models.dashboard import dump
from app.services.mock_store import MockStore, get_mock_store

router = APIRouter()


@router.get("")
async def list_members(
    department: Optional[str] = None,
    status: Optional[str] = None,
    limit: int = Query(50, ge=0),
    offset: int = Query(0, ge=0),
    store: MockStore = Depends(get_mock_store),
) -> dict:
    """부서(대소문자 무시)/상태로 필터링한 팀원 목록."""
    members, total = store.list_members(
        department=department, status=status, limit=limit, offset=offset
    )
    return {
        "success": True,
        "data": {
            "members": dump(members),
            "total": total,
            "limit": limit,
            "offset": offset,
        },
    }


@router.get("/{member_id}")
async def get_member(member_id: str, store: MockStore = Depends(get_mock_store)) -> dict:
    return {"success": True, "data": dump(store.get_member(member_id))}


@router.post("", status_code=201, dependencies=[Depends(enforce_strict_rate_limit)])
async def add_member(
    data: TeamMemberCreate,
    store: MockStore = Depends(get_mock_store),
) -> dict:
    """
    팀원 추가.
    이름과 이메일은 필수이며, 같은 이메일이 이미 있으면 409를 반환합니다.
    """
    member = store.add_member(data)
    return {
        "success": True,
        "data": dump(member),
        "message": "Team member added successfully",
    }


@router.put("/{member_id}", dependencies=[Depends(enforce_strict_rate_limit)])
async def update_member(
    member_id: str,
    data: TeamMemberUpdate,
    store: MockStore = Depends(get_mock_store),
) -> dict:
    """보낸 필드만 반영합니다 (id는 변경 불가)."""
    member = store.update_member(member_id, data)
    return {
        "success": True,
        "data": dump(member),
        "message": "Team member updated successfully",
    }
