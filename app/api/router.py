"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.

/api 아래의 모든 요청은 먼저 rate limit(분당 100회)과 요청 크기(500KB)를 통과해야 합니다.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import check_request_size, enforce_api_rate_limit
from app.api.endpoints import (
    analytics,
    health,
    integrations,
    modes,
    process_thread,
    teams,
    threads,
)
from app.config import get_settings

# 메인 API 라우터 생성
api_router = APIRouter(
    dependencies=[Depends(enforce_api_rate_limit), Depends(check_request_size)],
)

# 스레드 처리 엔드포인트: 대화 기록 → 구조화 결과 (/process-thread)
api_router.include_router(
    process_thread.router,
    prefix="/process-thread",
    tags=["processing"]
)

# 헬스 체크 엔드포인트: 서버 + Claude 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 모드 안내 엔드포인트 (/modes)
api_router.include_router(
    modes.router,
    prefix="/modes",
    tags=["modes"]
)

# 외부 연동 설정 상태 (/integrations)
api_router.include_router(
    integrations.router,
    prefix="/integrations",
    tags=["integrations"]
)

# 대시보드용 메모리 저장소 엔드포인트 (/threads, /teams, /analytics)
api_router.include_router(
    threads.router,
    prefix="/threads",
    tags=["threads"]
)
api_router.include_router(
    teams.router,
    prefix="/teams",
    tags=["teams"]
)
api_router.include_router(
    analytics.router,
    prefix="/analytics",
    tags=["analytics"]
)


@api_router.get("", tags=["index"])
async def api_index() -> dict:
    """API 안내: 엔드포인트 목록, 지원 모드, 제한 정보."""
    settings = get_settings()
    window_minutes = settings.rate_limit_window_seconds / 60

    return {
        "name": "SmartThread API",
        "version": "1.0.0",
        "description": (
            "AI-powered thread processing for generating commit messages, PR titles, "
            "Notion tasks, and meeting summaries"
        ),
        "endpoints": {
            "POST /api/process-thread": {
                "description": "Process a thread of messages to generate structured output",
                "parameters": {
                    "thread": "Array of messages with sender and text",
                    "mode": "Processing mode: github, notion, or summary",
                    "options": "Optional configuration based on mode",
                },
                "example": {
                    "thread": [
                        {"sender": "Alice", "text": "Fixed the login bug"},
                        {"sender": "Bob", "text": "Great! Ready for merge"},
                    ],
                    "mode": "github",
                },
            },
            "GET /api/health": {"description": "Check API and Claude service health"},
            "GET /api/modes": {"description": "Get available processing modes and examples"},
            "GET /api/integrations": {"description": "Get status of external integrations"},
        },
        "supportedModes": [
            {
                "name": "github",
                "description": "Generate commit messages and PR suggestions",
                "outputFormat": "GitHubResult",
            },
            {
                "name": "notion",
                "description": "Create actionable tasks and project items",
                "outputFormat": "NotionResult",
            },
            {
                "name": "summary",
                "description": "Generate meeting summaries and action items",
                "outputFormat": "SummaryResult",
            },
        ],
        "rateLimit": {
            "requests": settings.rate_limit_max_requests,
            "window": "1 minute" if window_minutes == 1 else f"{window_minutes:g} minutes",
        },
        "maxRequestSize": f"{settings.max_request_size_kb}KB",
    }
