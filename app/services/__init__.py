"""Services for SmartThread thread processing."""

from .claude_client import ClaudeClient, classify_upstream_error, get_claude_client
from .rate_limiter import (
    FixedWindowRateLimiter,
    InMemoryRateLimitStore,
    get_rate_limiter,
    reset_rate_limiters,
)
from .mode_router import ModeRoute, route_mode
from .thread_processor import ThreadProcessor, get_thread_processor
from .mock_store import MockStore, get_mock_store
from .integrations import Integration, get_integration_status

__all__ = [
    "ClaudeClient",
    "classify_upstream_error",
    "get_claude_client",
    "FixedWindowRateLimiter",
    "InMemoryRateLimitStore",
    "get_rate_limiter",
    "reset_rate_limiters",
    "ModeRoute",
    "route_mode",
    "ThreadProcessor",
    "get_thread_processor",
    "MockStore",
    "get_mock_store",
    "Integration",
    "get_integration_status",
]
