"""
모드별 처리 결과 모델입니다.

외부 LLM이 도구(tool) 호출 형태로 돌려준 구조화 응답을 이 모델로 검증합니다.
- github: 커밋 제안 목록 + PR 제안
- notion: 작업 목록 + 요약
- summary: 회의 요약

모든 결과의 confidence는 0~1 범위여야 하며, 벗어나면 잘못된 응답으로 취급합니다.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, model_validator

from app.models.thread import CamelModel, Priority


class CommitType(str, Enum):
    """Conventional Commits 타입."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"


class TaskStatus(str, Enum):
    """작업 진행 상태."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CommitSuggestion(CamelModel):
    type: CommitType
    scope: Optional[str] = None
    description: str
    body: Optional[str] = None
    breaking_change: Optional[bool] = None

    def to_header(self) -> str:
        """`type(scope): description` 형식의 커밋 헤더."""
        scope = f"({self.scope})" if self.scope else ""
        return f"{self.type.value}{scope}: {self.description}"


class PullRequestSuggestion(CamelModel):
    title: str
    description: str
    labels: list[str] = Field(default_factory=list)
    reviewers: Optional[list[str]] = None
    assignees: Optional[list[str]] = None


class GitHubResult(CamelModel):
    """github 모드 결과."""

    commits: list[CommitSuggestion]
    pull_request: PullRequestSuggestion
    confidence: float = Field(..., ge=0.0, le=1.0)


class NotionTask(CamelModel):
    title: str
    description: Optional[str] = None
    priority: Priority
    status: TaskStatus
    assignee: Optional[str] = None
    due_date: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: Optional[float] = None


class NotionResult(CamelModel):
    """notion 모드 결과."""

    tasks: list[NotionTask]
    summary: str
    total_tasks: int = 0
    confidence: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def _discard_reported_total(cls, data: Any) -> Any:
        # 외부 응답의 totalTasks는 형식과 상관없이 버림 ("two", 2.5 등)
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if k not in ("totalTasks", "total_tasks")}
        return data

    @model_validator(mode="after")
    def _recount_tasks(self) -> "NotionResult":
        # 외부 응답의 totalTasks 값은 믿지 않고 실제 목록 길이로 다시 계산
        self.total_tasks = len(self.tasks)
        return self


class SummaryResult(CamelModel):
    """summary 모드 결과."""

    title: str
    summary: str
    key_points: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)
    decisions: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    participants: list[str] = Field(default_factory=list)
    duration: Optional[str] = None
    confidence: float = Field(..., ge=0.0, le=1.0)


ProcessingResult = Union[GitHubResult, NotionResult, SummaryResult]
