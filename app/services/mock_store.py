"""
대시보드용 메모리 저장소입니다.

스레드 목록, 팀원, 분석 통계를 프로세스 메모리에만 보관합니다 (서버 재시작 시 초기화).
고유 ID 외에는 별도 제약이 없습니다.
"""

import logging
import threading
import time
from typing import Optional

from app.data import MOCK_ANALYTICS, MOCK_TEAM_MEMBERS, MOCK_THREADS
from app.exceptions import ConflictError, NotFoundError, ThreadValidationError
from app.models import (
    AnalyticsData,
    TeamMember,
    TeamMemberCreate,
    TeamMemberUpdate,
    Thread,
    ThreadCreate,
    ThreadStatus,
)
from app.models.dashboard import utc_now

logger = logging.getLogger(__name__)


def _paginate(items: list, limit: int, offset: int) -> list:
    return items[offset:offset + limit]


class MockStore:
    """스레드/팀원/분석 데이터를 메모리 리스트로 관리하는 저장소."""

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        """초기 데이터로 되돌립니다."""
        with self._lock:
            self._threads = [Thread.model_validate(item) for item in MOCK_THREADS]
            self._members = [TeamMember.model_validate(item) for item in MOCK_TEAM_MEMBERS]
            self._analytics = AnalyticsData.model_validate(MOCK_ANALYTICS)

    def _next_id(self, existing: set[str]) -> str:
        # 밀리초 타임스탬프 기반 ID, 같은 밀리초에 겹치면 1씩 증가
        candidate = int(time.time() * 1000)
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    # ==================== 스레드 ====================

    def list_threads(
        self,
        status: Optional[str] = None,
        source: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Thread], int]:
        """필터를 적용한 스레드 목록과 필터 후 전체 개수."""
        with self._lock:
            threads = list(self._threads)

        if status:
            threads = [t for t in threads if t.status.value == status]
        if source:
            threads = [t for t in threads if t.source.value == source]

        return _paginate(threads, limit, offset), len(threads)

    def get_thread(self, thread_id: str) -> Thread:
        with self._lock:
            thread = next((t for t in self._threads if t.id == thread_id), None)
        if thread is None:
            raise NotFoundError("Thread not found", details={"id": thread_id})
        return thread

    def create_thread(self, data: ThreadCreate) -> Thread:
        """새 스레드를 pending 상태로 목록 맨 앞에 추가합니다."""
        with self._lock:
            thread = Thread(
                id=self._next_id({t.id for t in self._threads}),
                source=data.source,
                title=data.title or "Untitled Thread",
                summary=data.summary,
                status=ThreadStatus.PENDING,
                created_at=utc_now().isoformat(),
                message_count=data.message_count,
                participants=list(data.participants),
                channel=data.channel,
            )
            self._threads.insert(0, thread)

        logger.info(f"[Store] 스레드 생성: id={thread.id}, source={thread.source.value}")
        return thread

    # ==================== 팀원 ====================

    def list_members(
        self,
        department: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[TeamMember], int]:
        """부서(대소문자 무시)/상태로 필터링한 팀원 목록과 전체 개수."""
        with self._lock:
            members = list(self._members)

        if department:
            members = [m for m in members if m.department.lower() == department.lower()]
        if status:
            members = [m for m in members if m.status.value == status]

        return _paginate(members, limit, offset), len(members)

    def get_member(self, member_id: str) -> TeamMember:
        with self._lock:
            member = next((m for m in self._members if m.id == member_id), None)
        if member is None:
            raise NotFoundError("Team member not found", details={"id": member_id})
        return member

    def add_member(self, data: TeamMemberCreate) -> TeamMember:
        """
        팀원을 추가합니다.

        Raises:
            ThreadValidationError: 이름 또는 이메일 누락
            ConflictError: 같은 이메일의 팀원이 이미 있음
        """
        if not data.name or not data.email:
            raise ThreadValidationError("Name and email are required")

        now = utc_now()
        with self._lock:
            if any(m.email == data.email for m in self._members):
                raise ConflictError(
                    "Team member with this email already exists",
                    details={"email": data.email},
                )

            member = TeamMember(
                id=self._next_id({m.id for m in self._members}),
                name=data.name,
                email=data.email,
                role=data.role or "Team Member",
                department=data.department or "General",
                join_date=now.date().isoformat(),
                location=data.location or "",
                phone=data.phone or "",
                last_active=now.isoformat(),
            )
            self._members.append(member)

        logger.info(f"[Store] 팀원 추가: id={member.id}")
        return member

    def update_member(self, member_id: str, data: TeamMemberUpdate) -> TeamMember:
        """보낸 필드만 덮어씁니다. id는 바뀌지 않습니다."""
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        with self._lock:
            index = next((i for i, m in enumerate(self._members) if m.id == member_id), None)
            if index is None:
                raise NotFoundError("Team member not found", details={"id": member_id})

            email = changes.get("email")
            if email and any(m.email == email and m.id != member_id for m in self._members):
                raise ConflictError(
                    "Team member with this email already exists",
                    details={"email": email},
                )

            updated = self._members[index].model_copy(update={**changes, "id": member_id})
            member = TeamMember.model_validate(updated.model_dump())
            self._members[index] = member

        logger.info(f"[Store] 팀원 수정: id={member_id}, fields={sorted(changes)}")
        return member

    # ==================== 분석 ====================

    @property
    def analytics(self) -> AnalyticsData:
        return self._analytics


# Singleton instance for dependency injection
_mock_store: Optional[MockStore] = None


def get_mock_store() -> MockStore:
    """Get or create mock store singleton."""
    global _mock_store
    if _mock_store is None:
        _mock_store = MockStore()
    return _mock_store
