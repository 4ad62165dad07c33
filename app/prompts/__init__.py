"""Prompt templates and structured output schemas."""

from .thread_prompts import (
    GITHUB_SYSTEM_PROMPT,
    NOTION_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    USER_PROMPT_TEMPLATE,
)
from .output_schemas import GITHUB_TOOL, NOTION_TOOL, SUMMARY_TOOL

__all__ = [
    "GITHUB_SYSTEM_PROMPT",
    "NOTION_SYSTEM_PROMPT",
    "SUMMARY_SYSTEM_PROMPT",
    "USER_PROMPT_TEMPLATE",
    "GITHUB_TOOL",
    "NOTION_TOOL",
    "SUMMARY_TOOL",
]
