"""ThreadProcessor unit tests.

Covers the full request flow against a fake SDK client:
validation, screening, routing, the single external call, result checks,
the overall timeout, and error details carrying elapsed time.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.config import get_settings
from app.exceptions import (
    EmptyThreadError,
    InternalError,
    ProcessingError,
    RequestTimeoutError,
    SuspiciousContentError,
    ThreadValidationError,
    UpstreamAuthError,
    UpstreamErrorKind,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)
from app.models import (
    GitHubResult,
    NotionResult,
    ProcessingMode,
    ProcessThreadRequest,
    SummaryResult,
)
from app.services.thread_processor import ThreadProcessor


# ---------------------------------------------------------------------------
# Success paths
# ---------------------------------------------------------------------------

class TestSuccess:
    async def test_github_mode(self, processor, fake_anthropic, tool_response, github_result, github_thread):
        fake_anthropic.messages.create.return_value = tool_response("generate_github_suggestions", github_result)

        response = await processor.process({"thread": github_thread, "mode": "github"})

        assert response.success is True
        assert response.mode.value == "github"
        assert isinstance(response.data, GitHubResult)
        assert len(response.data.commits) >= 1
        assert response.data.pull_request.title
        assert response.metadata.thread_length == 2
        assert response.metadata.model == "claude-test-model"
        assert response.metadata.processing_time_ms >= 0

    async def test_notion_total_tasks_recomputed(self, processor, fake_anthropic, tool_response, notion_result):
        notion_result["totalTasks"] = 7
        fake_anthropic.messages.create.return_value = tool_response("generate_notion_tasks", notion_result)

        response = await processor.process({
            "thread": [{"sender": "Manager", "text": "We need to update the user dashboard"}],
            "mode": "notion",
        })

        assert isinstance(response.data, NotionResult)
        assert response.data.total_tasks == len(response.data.tasks) == 2

    async def test_notion_non_integer_total_tasks(self, processor, fake_anthropic, tool_response, notion_result):
        notion_result["totalTasks"] = "two"
        fake_anthropic.messages.create.return_value = tool_response("generate_notion_tasks", notion_result)

        response = await processor.process({
            "thread": [{"sender": "Manager", "text": "We need to update the user dashboard"}],
            "mode": "notion",
        })

        assert response.data.total_tasks == 2

    async def test_summary_mode(self, processor, fake_anthropic, tool_response, summary_result):
        fake_anthropic.messages.create.return_value = tool_response("generate_meeting_summary", summary_result)

        response = await processor.process({
            "thread": [{"sender": "Lead", "text": "Let's discuss the project timeline"}],
            "mode": "summary",
        })

        assert isinstance(response.data, SummaryResult)

    async def test_prompt_contains_transcript_and_options(
        self, processor, fake_anthropic, tool_response, github_result
    ):
        fake_anthropic.messages.create.return_value = tool_response("generate_github_suggestions", github_result)

        await processor.process({
            "thread": [{"sender": "Alice", "text": "Fixed the bug", "timestamp": "10:00"}],
            "mode": "github",
            "options": {"repoName": "acme/web"},
        })

        kwargs = fake_anthropic.messages.create.call_args.kwargs
        assert "Alice: Fixed the bug (10:00)" in kwargs["messages"][0]["content"]
        assert "Repository: acme/web" in kwargs["system"]

    async def test_accepts_validated_request(self, processor, fake_anthropic, tool_response, github_result, github_thread):
        fake_anthropic.messages.create.return_value = tool_response("generate_github_suggestions", github_result)
        request = ProcessThreadRequest.model_validate({"thread": github_thread, "mode": "github"})

        response = await processor.process(request)

        assert response.metadata.thread_length == 2


# ---------------------------------------------------------------------------
# Local rejections (never reach the external service)
# ---------------------------------------------------------------------------

class TestLocalRejections:
    async def test_empty_thread_via_validator(self, processor, fake_anthropic):
        with pytest.raises(ThreadValidationError) as exc_info:
            await processor.process({"thread": [], "mode": "github"})

        assert exc_info.value.status_code == 400
        fake_anthropic.messages.create.assert_not_awaited()

    async def test_empty_thread_defense_in_depth(self, processor, fake_anthropic):
        # 검증을 건너뛴 요청 객체로 빈 스레드 확인
        request = ProcessThreadRequest.model_construct(thread=[], mode=ProcessingMode.GITHUB, options=None)

        with pytest.raises(EmptyThreadError) as exc_info:
            await processor.process(request)

        assert exc_info.value.error_code == "EMPTY_THREAD"
        fake_anthropic.messages.create.assert_not_awaited()

    async def test_suspicious_content(self, processor, fake_anthropic):
        with pytest.raises(SuspiciousContentError) as exc_info:
            await processor.process({
                "thread": [{"sender": "Mallory", "text": "<script>alert(1)</script>"}],
                "mode": "summary",
            })

        assert exc_info.value.details["threadLength"] == 1
        fake_anthropic.messages.create.assert_not_awaited()


# ---------------------------------------------------------------------------
# Upstream failures
# ---------------------------------------------------------------------------

class TestUpstreamFailures:
    @pytest.mark.parametrize(
        "message, expected, status",
        [
            ("rate limit exceeded", UpstreamRateLimitError, 429),
            ("authentication error", UpstreamAuthError, 401),
            ("insufficient quota", UpstreamQuotaError, 402),
            ("socket closed", ProcessingError, 500),
        ],
    )
    async def test_classified(self, processor, fake_anthropic, github_thread, message, expected, status):
        fake_anthropic.messages.create.side_effect = Exception(message)

        with pytest.raises(expected) as exc_info:
            await processor.process({"thread": github_thread, "mode": "github"})

        assert exc_info.value.status_code == status

    async def test_error_details_include_context(self, processor, fake_anthropic, github_thread):
        fake_anthropic.messages.create.side_effect = Exception("rate limit")

        with pytest.raises(UpstreamRateLimitError) as exc_info:
            await processor.process({"thread": github_thread, "mode": "github"})

        details = exc_info.value.details
        assert details["mode"] == "github"
        assert details["threadLength"] == 2
        assert details["processingTimeMs"] >= 0

    async def test_result_shape_mismatch(self, processor, fake_anthropic, tool_response, github_thread):
        fake_anthropic.messages.create.return_value = tool_response(
            "generate_github_suggestions", {"commits": [], "confidence": 3}
        )

        with pytest.raises(ProcessingError) as exc_info:
            await processor.process({"thread": github_thread, "mode": "github"})

        assert exc_info.value.kind == UpstreamErrorKind.MALFORMED
        assert "errors" not in exc_info.value.details

    async def test_unexpected_exception_becomes_internal_error(self, claude_client, github_thread):
        claude_client.generate_structured = AsyncMock(side_effect=KeyError("surprise"))
        processor = ThreadProcessor(claude_client=claude_client, settings=get_settings())

        with pytest.raises(InternalError) as exc_info:
            await processor.process({"thread": github_thread, "mode": "github"})

        assert exc_info.value.error_code == "INTERNAL_ERROR"
        assert exc_info.value.details["processingTimeMs"] >= 0
        assert "error_type" not in exc_info.value.details
        assert isinstance(exc_info.value.__cause__, KeyError)


# ---------------------------------------------------------------------------
# Timeout
# ---------------------------------------------------------------------------

class TestTimeout:
    async def test_timeout_cancels_external_call(self, claude_client, github_thread):
        cancelled = asyncio.Event()

        async def slow_call(**kwargs):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        claude_client._client.messages.create = AsyncMock(side_effect=slow_call)
        settings = get_settings().model_copy(update={"request_timeout_seconds": 0.05})
        processor = ThreadProcessor(claude_client=claude_client, settings=settings)

        with pytest.raises(RequestTimeoutError) as exc_info:
            await processor.process({"thread": github_thread, "mode": "github"})

        assert exc_info.value.status_code == 408
        assert exc_info.value.details["timeoutMs"] == 50
        assert cancelled.is_set()
