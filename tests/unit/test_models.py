"""Unit tests for Pydantic data models.

Tests request parsing (camelCase aliases), result validation bounds,
the notion task recount, and the immutable response envelopes.
"""

import pytest
from pydantic import ValidationError

from app.models import (
    ProcessingMode,
    Priority,
    ThreadMessage,
    ProcessingOptions,
    ProcessThreadRequest,
    CommitSuggestion,
    CommitType,
    GitHubResult,
    NotionResult,
    SummaryResult,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
    ProcessThreadResponse,
    Thread,
    TeamMember,
    ThreadCreate,
)
from app.models.dashboard import dump


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TestThreadMessage:
    def test_minimal_message(self):
        msg = ThreadMessage(sender="Alice", text="hi")
        assert msg.timestamp is None
        assert msg.metadata is None

    def test_empty_sender_rejected(self):
        with pytest.raises(ValidationError):
            ThreadMessage(sender="", text="hi")

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            ThreadMessage(sender="Alice", text="")


class TestProcessThreadRequest:
    def test_camel_case_options(self):
        req = ProcessThreadRequest.model_validate({
            "thread": [{"sender": "Alice", "text": "hi"}],
            "mode": "github",
            "options": {"repoName": "acme/web", "branchName": "main", "priority": "high"},
        })
        assert req.mode == ProcessingMode.GITHUB
        assert req.options.repo_name == "acme/web"
        assert req.options.branch_name == "main"
        assert req.options.priority == Priority.HIGH

    def test_snake_case_also_accepted(self):
        opts = ProcessingOptions(repo_name="acme/web")
        assert opts.repo_name == "acme/web"

    def test_hundred_messages_accepted(self):
        thread = [{"sender": "A", "text": str(i)} for i in range(100)]
        req = ProcessThreadRequest.model_validate({"thread": thread, "mode": "summary"})
        assert len(req.thread) == 100

    def test_hundred_and_one_messages_rejected(self):
        thread = [{"sender": "A", "text": str(i)} for i in range(101)]
        with pytest.raises(ValidationError):
            ProcessThreadRequest.model_validate({"thread": thread, "mode": "summary"})

    def test_empty_thread_rejected(self):
        with pytest.raises(ValidationError):
            ProcessThreadRequest.model_validate({"thread": [], "mode": "summary"})

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            ProcessThreadRequest.model_validate({"thread": [{"sender": "A", "text": "b"}], "mode": "jira"})


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------

class TestCommitSuggestion:
    def test_header_with_scope(self):
        commit = CommitSuggestion(type=CommitType.FIX, scope="auth", description="fix login")
        assert commit.to_header() == "fix(auth): fix login"

    def test_header_without_scope(self):
        commit = CommitSuggestion(type="feat", description="add dark mode")
        assert commit.to_header() == "feat: add dark mode"


class TestGitHubResult:
    def test_parses_camel_case(self, github_result):
        result = GitHubResult.model_validate(github_result)
        assert result.pull_request.title == "Fix login token validation"
        assert result.commits[0].breaking_change is False

    @pytest.mark.parametrize("confidence", [-0.01, 1.01])
    def test_confidence_out_of_range(self, github_result, confidence):
        github_result["confidence"] = confidence
        with pytest.raises(ValidationError):
            GitHubResult.model_validate(github_result)

    @pytest.mark.parametrize("confidence", [0, 1])
    def test_confidence_bounds_inclusive(self, github_result, confidence):
        github_result["confidence"] = confidence
        assert GitHubResult.model_validate(github_result).confidence == confidence

    def test_pull_request_labels_default(self, github_result):
        del github_result["pullRequest"]["labels"]
        result = GitHubResult.model_validate(github_result)
        assert result.pull_request.labels == []


class TestNotionResult:
    def test_total_tasks_recomputed(self, notion_result):
        notion_result["totalTasks"] = 99
        result = NotionResult.model_validate(notion_result)
        assert result.total_tasks == len(result.tasks) == 2

    @pytest.mark.parametrize("reported", ["two", 2.5, None, {"n": 2}])
    def test_reported_total_of_any_type_is_ignored(self, notion_result, reported):
        notion_result["totalTasks"] = reported
        result = NotionResult.model_validate(notion_result)
        assert result.total_tasks == len(result.tasks) == 2

    def test_snake_case_total_is_ignored(self, notion_result):
        del notion_result["totalTasks"]
        notion_result["total_tasks"] = "many"
        assert NotionResult.model_validate(notion_result).total_tasks == 2

    def test_total_tasks_missing(self, notion_result):
        del notion_result["totalTasks"]
        result = NotionResult.model_validate(notion_result)
        assert result.total_tasks == 2

    def test_serialized_alias(self, notion_result):
        data = NotionResult.model_validate(notion_result).model_dump(by_alias=True)
        assert data["totalTasks"] == 2
        assert data["tasks"][0]["estimatedHours"] == 6


class TestSummaryResult:
    def test_parses(self, summary_result):
        result = SummaryResult.model_validate(summary_result)
        assert result.key_points == ["Testing needs more time"]
        assert result.participants == ["Lead", "Team"]

    def test_confidence_required(self, summary_result):
        del summary_result["confidence"]
        with pytest.raises(ValidationError):
            SummaryResult.model_validate(summary_result)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------

class TestEnvelopes:
    def test_success_envelope_serialization(self, github_result):
        response = ProcessThreadResponse(
            mode=ProcessingMode.GITHUB,
            data=GitHubResult.model_validate(github_result),
            metadata=ResponseMetadata(thread_length=2, processing_time_ms=15, model="claude-test"),
        )
        data = response.model_dump(mode="json", by_alias=True)

        assert data["success"] is True
        assert data["mode"] == "github"
        assert data["data"]["pullRequest"]["title"] == "Fix login token validation"
        assert data["metadata"]["threadLength"] == 2
        assert data["metadata"]["processingTimeMs"] == 15
        assert data["metadata"]["model"] == "claude-test"
        assert data["metadata"]["processedAt"]

    def test_envelope_is_frozen(self):
        envelope = ErrorResponse(error=ErrorDetail(code="X", message="y"))
        with pytest.raises(ValidationError):
            envelope.success = True

    def test_error_envelope_defaults(self):
        data = ErrorResponse(error=ErrorDetail(code="X", message="y")).model_dump(by_alias=True)
        assert data["success"] is False
        assert data["error"]["details"] is None
        assert data["error"]["timestamp"]


# ---------------------------------------------------------------------------
# Dashboard models
# ---------------------------------------------------------------------------

class TestDashboardModels:
    def test_thread_create_defaults(self):
        data = ThreadCreate()
        assert data.source.value == "slack"
        assert data.title == "Untitled Thread"

    def test_dump_list_uses_camel_case(self):
        thread = Thread(id="1", source="slack", title="t", created_at="2024-01-01T00:00:00Z")
        dumped = dump([thread])
        assert dumped[0]["createdAt"] == "2024-01-01T00:00:00Z"
        assert dumped[0]["messageCount"] == 0

    def test_team_member_defaults(self):
        member = TeamMember(
            id="9",
            name="Kim",
            email="kim@company.com",
            join_date="2024-01-01",
            last_active="2024-01-01T00:00:00Z",
        )
        assert member.role == "Team Member"
        assert member.department == "General"
        assert member.status.value == "offline"
