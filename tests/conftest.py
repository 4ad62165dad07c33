"""공유 pytest fixture 모음."""

import os

# app 모듈을 불러오기 전에 테스트 환경 설정
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-key")
os.environ.setdefault("ENVIRONMENT", "test")

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.config import get_settings
from app.services.claude_client import ClaudeClient, get_claude_client
from app.services.mock_store import get_mock_store
from app.services.rate_limiter import reset_rate_limiters
from app.services.thread_processor import ThreadProcessor, get_thread_processor


def make_tool_response(tool_name: str, payload, input_tokens: int = 120, output_tokens: int = 80):
    """Anthropic Messages API의 tool_use 응답 흉내."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="tool_use", name=tool_name, input=payload)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
        stop_reason="tool_use",
    )


def make_text_response(text: str = "ok"):
    """도구 호출 없이 텍스트만 있는 응답."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=5, output_tokens=2),
        stop_reason="end_turn",
    )


@pytest.fixture(autouse=True)
def reset_state():
    """테스트 간 rate limit 카운터와 메모리 저장소 초기화."""
    reset_rate_limiters()
    get_mock_store().reset()
    yield
    reset_rate_limiters()


@pytest.fixture
def github_result():
    return {
        "commits": [
            {
                "type": "fix",
                "scope": "auth",
                "description": "resolve login token validation",
                "breakingChange": False,
            }
        ],
        "pullRequest": {
            "title": "Fix login token validation",
            "description": "Fixes the bug discussed in the thread.",
            "labels": ["bug"],
            "reviewers": ["Bob"],
        },
        "confidence": 0.9,
    }


@pytest.fixture
def notion_result():
    return {
        "tasks": [
            {
                "title": "Update user dashboard",
                "description": "Refresh the dashboard layout",
                "priority": "high",
                "status": "not_started",
                "assignee": "Dev",
                "tags": ["ui"],
                "estimatedHours": 6,
            },
            {
                "title": "Write dashboard tests",
                "priority": "medium",
                "status": "not_started",
                "tags": ["testing"],
            },
        ],
        "summary": "Dashboard refresh work",
        "totalTasks": 2,
        "confidence": 0.8,
    }


@pytest.fixture
def summary_result():
    return {
        "title": "Project timeline sync",
        "summary": "The team needs two more weeks for testing.",
        "keyPoints": ["Testing needs more time"],
        "actionItems": ["Update the release plan"],
        "decisions": ["Extend the timeline by two weeks"],
        "nextSteps": ["Share the new date"],
        "participants": ["Lead", "Team"],
        "duration": "10 minutes",
        "confidence": 0.75,
    }


@pytest.fixture
def github_thread():
    return [
        {"sender": "Alice", "text": "Fixed the bug"},
        {"sender": "Bob", "text": "LGTM, merging"},
    ]


@pytest.fixture
def fake_anthropic():
    """AsyncAnthropic 대역. messages.create만 사용합니다."""
    sdk = MagicMock()
    sdk.messages = MagicMock()
    sdk.messages.create = AsyncMock(return_value=make_text_response())
    return sdk


@pytest.fixture
def claude_client(fake_anthropic):
    return ClaudeClient(client=fake_anthropic, model="claude-test-model")


@pytest.fixture
def processor(claude_client):
    return ThreadProcessor(claude_client=claude_client, settings=get_settings())


@pytest.fixture
async def client(processor, claude_client):
    """httpx AsyncClient fixture (FastAPI 테스트용). Claude 호출은 대역으로 교체됩니다."""
    from httpx import AsyncClient, ASGITransport
    from app.main import app

    app.dependency_overrides[get_thread_processor] = lambda: processor
    app.dependency_overrides[get_claude_client] = lambda: claude_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def tool_response():
    """make_tool_response 팩토리."""
    return make_tool_response


@pytest.fixture
def text_response():
    """make_text_response 팩토리."""
    return make_text_response
