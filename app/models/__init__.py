"""Data models for SmartThread."""

from .thread import (
    ProcessingMode,
    Priority,
    ThreadMessage,
    ProcessingOptions,
    ProcessThreadRequest,
)
from .results import (
    CommitType,
    TaskStatus,
    CommitSuggestion,
    PullRequestSuggestion,
    GitHubResult,
    NotionTask,
    NotionResult,
    SummaryResult,
    ProcessingResult,
)
from .error import (
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
    ProcessThreadResponse,
)
from .dashboard import (
    ThreadSource,
    ThreadStatus,
    MemberStatus,
    ThreadOutputs,
    Thread,
    ThreadCreate,
    TeamMember,
    TeamMemberCreate,
    TeamMemberUpdate,
    AnalyticsData,
    AnalyticsSummary,
)

__all__ = [
    # Request models
    "ProcessingMode",
    "Priority",
    "ThreadMessage",
    "ProcessingOptions",
    "ProcessThreadRequest",
    # Result models
    "CommitType",
    "TaskStatus",
    "CommitSuggestion",
    "PullRequestSuggestion",
    "GitHubResult",
    "NotionTask",
    "NotionResult",
    "SummaryResult",
    "ProcessingResult",
    # Envelope models
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMetadata",
    "ProcessThreadResponse",
    # Dashboard models
    "ThreadSource",
    "ThreadStatus",
    "MemberStatus",
    "ThreadOutputs",
    "Thread",
    "ThreadCreate",
    "TeamMember",
    "TeamMemberCreate",
    "TeamMemberUpdate",
    "AnalyticsData",
    "AnalyticsSummary",
]
