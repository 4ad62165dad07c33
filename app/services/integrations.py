"""
외부 연동(Slack, Discord, Notion, GitHub) 스텁입니다.

실제 외부 API는 호출하지 않습니다.
- 설정값(토큰 등)의 존재 여부로 configured를 판단합니다.
- 설정되지 않은 연동의 기능을 호출하면 IntegrationNotConfiguredError가 발생합니다.
- 설정된 연동은 로그만 남기고, 조회 기능은 고정된 샘플 데이터를 돌려줍니다.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from app.config import Settings, get_settings
from app.exceptions import IntegrationNotConfiguredError
from app.models import (
    CommitSuggestion,
    NotionTask,
    PullRequestSuggestion,
    ThreadMessage,
)

logger = logging.getLogger(__name__)


COMMIT_SUGGESTIONS_HEADER = "## 🤖 SmartThread Commit Suggestions"


def format_commit_suggestions(commits: list[CommitSuggestion]) -> str:
    """
    커밋 제안 목록을 GitHub 코멘트용 마크다운으로 만듭니다.

    각 줄은 `` - `type(scope): description` ``이며 breaking change는 경고 표시가 붙습니다.
    """
    lines = []
    for commit in commits:
        suffix = "⚠️ BREAKING: " if commit.breaking_change else ""
        lines.append(f"- `{commit.to_header()}`{suffix}")
    return f"{COMMIT_SUGGESTIONS_HEADER}\n\n" + "\n".join(lines)


class Integration(ABC):
    """외부 연동 공통 인터페이스."""

    name: str = ""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    @abstractmethod
    def configured(self) -> bool:
        """필요한 설정값이 모두 있는지 여부."""

    def ensure_configured(self) -> None:
        if not self.configured:
            logger.warning(f"[Integration] 설정되지 않은 연동 호출: {self.name}")
            raise IntegrationNotConfiguredError(self.name)

    def status(self) -> dict[str, Any]:
        configured = self.configured
        return {
            "name": self.name.lower(),
            "enabled": configured,
            "configured": configured,
            "status": "available" if configured else "not_configured",
        }


class MessageSourceIntegration(Integration):
    """대화를 가져오고 메시지를 보낼 수 있는 채팅 연동."""

    @abstractmethod
    async def fetch_messages(self, channel_id: str, **kwargs: Any) -> list[ThreadMessage]:
        ...

    @abstractmethod
    async def post_message(self, channel_id: str, text: str, **kwargs: Any) -> None:
        ...


class SlackIntegration(MessageSourceIntegration):
    name = "Slack"

    @property
    def configured(self) -> bool:
        return bool(self.settings.slack_bot_token and self.settings.slack_signing_secret)

    async def fetch_messages(
        self,
        channel_id: str,
        thread_ts: str = "",
        **kwargs: Any,
    ) -> list[ThreadMessage]:
        """스레드의 답글 목록 (샘플 데이터)."""
        self.ensure_configured()
        logger.info(f"[Slack] 스레드 메시지 조회: channel={channel_id}, thread_ts={thread_ts}")

        samples = [
            ("U1234567", "Mock Slack message 1", "1234567890.123456"),
            ("U2345678", "Mock Slack message 2", "1234567891.123456"),
        ]
        return [
            ThreadMessage(
                sender=user,
                text=text,
                timestamp=ts,
                metadata={"channel": channel_id, "thread_ts": thread_ts},
            )
            for user, text, ts in samples
        ]

    async def post_message(
        self,
        channel_id: str,
        text: str,
        thread_ts: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.ensure_configured()
        logger.info(f"[Slack] 메시지 전송 (stub): channel={channel_id}, thread_ts={thread_ts}")


class DiscordIntegration(MessageSourceIntegration):
    name = "Discord"

    @property
    def configured(self) -> bool:
        return bool(self.settings.discord_bot_token)

    async def fetch_messages(
        self,
        channel_id: str,
        limit: int = 50,
        **kwargs: Any,
    ) -> list[ThreadMessage]:
        """채널의 최근 메시지 (샘플 데이터)."""
        self.ensure_configured()
        logger.info(f"[Discord] 채널 메시지 조회: channel={channel_id}, limit={limit}")

        now = datetime.now(timezone.utc).isoformat()
        samples = [
            ("123456789", "TestUser1", "Mock Discord message 1"),
            ("123456790", "TestUser2", "Mock Discord message 2"),
        ]
        return [
            ThreadMessage(
                sender=username,
                text=content,
                timestamp=now,
                metadata={"id": message_id, "channel_id": channel_id},
            )
            for message_id, username, content in samples[:limit]
        ]

    async def post_message(self, channel_id: str, text: str, **kwargs: Any) -> None:
        self.ensure_configured()
        logger.info(f"[Discord] 메시지 전송 (stub): channel={channel_id}")


class NotionIntegration(Integration):
    name = "Notion"

    @property
    def configured(self) -> bool:
        return bool(self.settings.notion_api_key and self.settings.notion_database_id)

    async def create_tasks(self, tasks: list[NotionTask]) -> int:
        """작업을 데이터베이스에 등록합니다. 등록한 개수를 반환합니다."""
        self.ensure_configured()
        logger.info(f"[Notion] 작업 생성: {len(tasks)}개")

        for task in tasks:
            logger.debug(f"[Notion] 작업 생성 (stub): {task.title}")

        logger.info("[Notion] 모든 작업 생성 완료 (stub)")
        return len(tasks)

    async def query_tasks(self, filters: Optional[dict[str, Any]] = None) -> list[NotionTask]:
        self.ensure_configured()
        logger.info(f"[Notion] 작업 조회: filters={filters}")

        return [
            NotionTask(
                title="Mock Notion Task 1",
                description="This is a mock task from Notion",
                priority="medium",
                status="not_started",
                tags=["mock", "stub"],
                estimated_hours=2,
            ),
            NotionTask(
                title="Mock Notion Task 2",
                description="Another mock task from Notion",
                priority="high",
                status="in_progress",
                tags=["important", "stub"],
                estimated_hours=4,
            ),
        ]


class GitHubIntegration(Integration):
    name = "GitHub"

    @property
    def configured(self) -> bool:
        return bool(self.settings.github_token)

    def _resolve_repo(self, repo: Optional[str]) -> str:
        return repo or self.settings.github_default_repo

    async def create_pull_request(
        self,
        pull_request: PullRequestSuggestion,
        head_branch: str,
        repo: Optional[str] = None,
        base_branch: str = "main",
    ) -> None:
        self.ensure_configured()
        repo = self._resolve_repo(repo)
        logger.info(
            f"[GitHub] PR 생성 (stub): repo={repo}, {head_branch} -> {base_branch}, "
            f"title={pull_request.title}"
        )

    async def get_commit_history(
        self,
        repo: Optional[str] = None,
        branch: str = "main",
        count: int = 10,
    ) -> list[dict[str, Any]]:
        """최근 커밋 목록 (샘플 데이터)."""
        self.ensure_configured()
        repo = self._resolve_repo(repo)
        logger.info(f"[GitHub] 커밋 기록 조회: repo={repo}, branch={branch}, count={count}")

        history = [
            {
                "sha": "abc123",
                "commit": {
                    "message": "feat: add user authentication",
                    "author": {"name": "Developer 1", "date": "2024-01-01T10:00:00Z"},
                },
            },
            {
                "sha": "def456",
                "commit": {
                    "message": "fix: resolve login issue",
                    "author": {"name": "Developer 2", "date": "2024-01-01T09:00:00Z"},
                },
            },
        ]
        return history[:count]

    async def add_commit_suggestions(
        self,
        issue_number: int,
        commits: list[CommitSuggestion],
        repo: Optional[str] = None,
    ) -> str:
        """이슈에 커밋 제안 코멘트를 답니다. 작성된 코멘트 본문을 반환합니다."""
        self.ensure_configured()
        repo = self._resolve_repo(repo)

        comment = format_commit_suggestions(commits)
        logger.info(f"[GitHub] 커밋 제안 코멘트 (stub): repo={repo}, issue=#{issue_number}")
        return comment


def build_integrations(settings: Optional[Settings] = None) -> list[Integration]:
    """상태 보고 순서대로 모든 연동 인스턴스를 만듭니다."""
    settings = settings or get_settings()
    return [
        NotionIntegration(settings),
        GitHubIntegration(settings),
        SlackIntegration(settings),
        DiscordIntegration(settings),
    ]


def get_integration_status(settings: Optional[Settings] = None) -> list[dict[str, Any]]:
    """각 연동의 설정 여부 (연결 확인은 하지 않음)."""
    return [integration.status() for integration in build_integrations(settings)]
