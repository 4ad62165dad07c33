"""
대시보드용 데이터 모델입니다.
스레드 목록, 팀원, 분석 통계를 메모리에만 보관하며 고유 ID 외의 제약은 없습니다.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.models.thread import CamelModel


class ThreadSource(str, Enum):
    SLACK = "slack"
    DISCORD = "discord"
    TEAMS = "teams"


class ThreadStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PROCESSED = "processed"
    ERROR = "error"


class MemberStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    AWAY = "away"


class ThreadOutputs(CamelModel):
    """처리된 스레드의 결과 요약."""

    commit_summary: Optional[str] = None
    pr_title: Optional[str] = None
    has_meeting_summary: Optional[bool] = None
    task_count: Optional[int] = None
    processing_time: Optional[str] = None


class Thread(CamelModel):
    id: str
    source: ThreadSource
    title: str
    summary: str = ""
    status: ThreadStatus = ThreadStatus.PENDING
    created_at: str
    message_count: int = 0
    participants: list[str] = Field(default_factory=list)
    channel: Optional[str] = None
    outputs: Optional[ThreadOutputs] = None


class ThreadCreate(CamelModel):
    """POST /api/threads 본문. 비어 있는 값은 기본값으로 채웁니다."""

    source: ThreadSource = ThreadSource.SLACK
    title: str = "Untitled Thread"
    summary: str = ""
    message_count: int = 0
    participants: list[str] = Field(default_factory=list)
    channel: Optional[str] = None


class TeamMember(CamelModel):
    id: str
    name: str
    email: str
    role: str = "Team Member"
    department: str = "General"
    status: MemberStatus = MemberStatus.OFFLINE
    avatar: Optional[str] = None
    join_date: str
    location: Optional[str] = ""
    phone: Optional[str] = ""
    last_active: str
    threads_participated: int = 0
    tasks_completed: int = 0


class TeamMemberCreate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None


class TeamMemberUpdate(CamelModel):
    """PUT /api/teams/{id} 본문. 보낸 필드만 반영합니다."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    status: Optional[MemberStatus] = None
    avatar: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    last_active: Optional[str] = None
    threads_participated: Optional[int] = None
    tasks_completed: Optional[int] = None


class ThreadsProcessedPoint(CamelModel):
    date: str
    threads: int
    tasks: int
    errors: int


class ProcessingTimePoint(CamelModel):
    date: str
    avg_time: float
    max_time: float
    min_time: float


class SourceShare(CamelModel):
    source: str
    count: int
    percentage: float


class AnalyticsSummary(CamelModel):
    total_threads: int
    total_tasks: int
    total_errors: int
    avg_processing_time: float


class AnalyticsData(CamelModel):
    threads_processed: list[ThreadsProcessedPoint]
    processing_time: list[ProcessingTimePoint]
    source_distribution: list[SourceShare]
    summary: AnalyticsSummary


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def dump(model: Any) -> Any:
    """camelCase JSON 직렬화 헬퍼."""
    if isinstance(model, list):
        return [dump(item) for item in model]
    if isinstance(model, BaseModel):
        return model.model_dump(mode="json", by_alias=True)
    return model
