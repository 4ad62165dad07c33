"""
스레드 처리 요청 데이터 모델입니다.
대화 기록(메시지 목록), 처리 모드, 선택 옵션을 정의합니다.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """외부 JSON은 camelCase, 파이썬 속성은 snake_case로 다루는 기본 모델."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProcessingMode(str, Enum):
    """처리 모드: 어떤 형태의 결과를 만들지 결정합니다."""

    GITHUB = "github"  # 커밋 메시지 + PR 제안
    NOTION = "notion"  # 작업(Task) 목록
    SUMMARY = "summary"  # 회의 요약


class Priority(str, Enum):
    """작업 우선순위."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ThreadMessage(CamelModel):
    """대화 속 한 줄의 발언입니다. 요청이 끝나면 버려집니다."""

    sender: str = Field(..., min_length=1, description="발신자")
    text: str = Field(..., min_length=1, description="메시지 내용")
    timestamp: Optional[str] = Field(default=None, description="보낸 시각 (자유 형식)")
    metadata: Optional[dict[str, Any]] = Field(default=None, description="부가 정보")


class ProcessingOptions(CamelModel):
    """
    요청별 선택 옵션입니다.
    프롬프트에 참고 정보로만 들어가며 외부 시스템과 대조하지 않습니다.
    """

    repo_name: Optional[str] = None
    branch_name: Optional[str] = None
    notion_database_id: Optional[str] = None
    priority: Optional[Priority] = None
    assignee: Optional[str] = None


class ProcessThreadRequest(CamelModel):
    """POST /api/process-thread 요청 본문."""

    thread: list[ThreadMessage] = Field(..., min_length=1, max_length=100)
    mode: ProcessingMode
    options: Optional[ProcessingOptions] = None
