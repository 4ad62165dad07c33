"""
처리 모드 안내 엔드포인트입니다.
지원하는 모드와 예시 입력을 정적으로 보여주며, 실제 처리는 하지 않습니다.
"""

from fastapi import APIRouter

from app.models import ProcessingMode

router = APIRouter()


MODE_DESCRIPTIONS = {
    ProcessingMode.GITHUB.value: "Generate commit messages and PR suggestions from thread discussions",
    ProcessingMode.NOTION.value: "Create actionable tasks and project items from conversations",
    ProcessingMode.SUMMARY.value: "Generate comprehensive meeting summaries and action items",
}


def _example(mode: ProcessingMode, messages: list[tuple[str, str]], output: str) -> dict:
    return {
        "input": {
            "thread": [{"sender": sender, "text": text} for sender, text in messages],
            "mode": mode.value,
        },
        "output": output,
    }


MODE_EXAMPLES = {
    ProcessingMode.GITHUB.value: _example(
        ProcessingMode.GITHUB,
        [
            ("Alice", "The login bug is fixed, ready for review"),
            ("Bob", "Great! I'll test it and merge if all looks good"),
        ],
        "Commit messages and PR details",
    ),
    ProcessingMode.NOTION.value: _example(
        ProcessingMode.NOTION,
        [
            ("Manager", "We need to update the user dashboard"),
            ("Dev", "I can work on the UI improvements"),
        ],
        "Structured tasks with priorities and assignments",
    ),
    ProcessingMode.SUMMARY.value: _example(
        ProcessingMode.SUMMARY,
        [
            ("Lead", "Let's discuss the project timeline"),
            ("Team", "We need 2 more weeks for testing"),
        ],
        "Meeting summary with key decisions and next steps",
    ),
}


@router.get("")
async def get_modes() -> dict:
    """지원하는 처리 모드 목록, 설명, 예시."""
    return {
        "available": [mode.value for mode in ProcessingMode],
        "descriptions": MODE_DESCRIPTIONS,
        "examples": MODE_EXAMPLES,
    }
