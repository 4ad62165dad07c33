"""
처리 모드별 프롬프트/출력 스키마 선택기입니다.

같은 mode + options 조합에는 항상 같은 시스템 프롬프트와 스키마를 돌려줍니다.
검증 단계에서 걸러졌어야 할 알 수 없는 모드가 들어오면 기본값으로 대체하지 않고 실패합니다.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Optional, Type

from pydantic import BaseModel

from app.exceptions import UnsupportedModeError
from app.models import (
    GitHubResult,
    NotionResult,
    ProcessingMode,
    ProcessingOptions,
    SummaryResult,
)
from app.prompts import (
    GITHUB_SYSTEM_PROMPT,
    GITHUB_TOOL,
    NOTION_SYSTEM_PROMPT,
    NOTION_TOOL,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_TOOL,
)


@dataclass(frozen=True)
class ModeRoute:
    """선택된 모드의 처리 방법."""

    mode: ProcessingMode
    system_prompt: str
    tool: dict[str, Any]
    result_model: Type[BaseModel]

    @property
    def tool_name(self) -> str:
        return self.tool["name"]


def _with_context(base_prompt: str, hints: list[str]) -> str:
    """옵션으로 받은 참고 정보를 프롬프트 끝에 붙입니다."""
    if not hints:
        return base_prompt
    return base_prompt + "\n\n" + "\n".join(hints)


def _github_route(options: ProcessingOptions) -> ModeRoute:
    hints = []
    if options.repo_name:
        hints.append(f"Repository: {options.repo_name}")
    if options.branch_name:
        hints.append(f"Branch: {options.branch_name}")

    return ModeRoute(
        mode=ProcessingMode.GITHUB,
        system_prompt=_with_context(GITHUB_SYSTEM_PROMPT, hints),
        tool=copy.deepcopy(GITHUB_TOOL),
        result_model=GitHubResult,
    )


def _notion_route(options: ProcessingOptions) -> ModeRoute:
    hints = []
    if options.priority:
        hints.append(f"Default Priority: {options.priority.value}")
    if options.assignee:
        hints.append(f"Default Assignee: {options.assignee}")

    return ModeRoute(
        mode=ProcessingMode.NOTION,
        system_prompt=_with_context(NOTION_SYSTEM_PROMPT, hints),
        tool=copy.deepcopy(NOTION_TOOL),
        result_model=NotionResult,
    )


def _summary_route(options: ProcessingOptions) -> ModeRoute:
    return ModeRoute(
        mode=ProcessingMode.SUMMARY,
        system_prompt=SUMMARY_SYSTEM_PROMPT,
        tool=copy.deepcopy(SUMMARY_TOOL),
        result_model=SummaryResult,
    )


_ROUTES: dict[ProcessingMode, Callable[[ProcessingOptions], ModeRoute]] = {
    ProcessingMode.GITHUB: _github_route,
    ProcessingMode.NOTION: _notion_route,
    ProcessingMode.SUMMARY: _summary_route,
}


def route_mode(
    mode: Any,
    options: Optional[ProcessingOptions] = None,
) -> ModeRoute:
    """
    모드에 맞는 시스템 프롬프트와 출력 스키마를 선택합니다.

    Args:
        mode: ProcessingMode 또는 그 문자열 값
        options: 프롬프트에 넣을 참고 옵션

    Returns:
        ModeRoute (tool은 매번 새 사본이므로 호출자가 수정해도 안전)

    Raises:
        UnsupportedModeError: 세 가지 모드 중 어느 것도 아닌 경우
    """
    try:
        mode = ProcessingMode(mode)
    except ValueError:
        raise UnsupportedModeError(mode) from None

    builder = _ROUTES.get(mode)
    if builder is None:
        raise UnsupportedModeError(mode)

    return builder(options or ProcessingOptions())
