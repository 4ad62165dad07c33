"""
SmartThread API의 메인 진입점 파일입니다.
웹 서버 애플리케이션을 생성하고 설정하는 역할을 담당합니다.
"""

import asyncio
import logging
import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.endpoints.health import APP_VERSION, get_uptime_seconds
from app.api.router import api_router
from app.config import get_settings
from app.exceptions import RateLimitExceededError, SmartThreadError, UpstreamRateLimitError
from app.models import ErrorDetail, ErrorResponse
from app.services.rate_limiter import all_rate_limiters, run_periodic_cleanup
from app.utils import format_validation_errors

logger = logging.getLogger(__name__)


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
}


def setup_logging() -> None:
    """환경에 맞는 로그 레벨로 루트 로거를 설정합니다."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.effective_log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def error_response(
    status_code: int,
    code: str,
    message: str,
    details=None,
    headers: dict = None,
) -> JSONResponse:
    """실패 응답 봉투를 JSONResponse로 만듭니다."""
    envelope = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션의 생명주기(시작과 종료)를 관리하는 함수입니다.

    서버가 시작될 때:
    1. 필수 설정(API 키)을 확인합니다. 없으면 시작을 중단합니다.
    2. rate limit 만료 엔트리 정리 작업을 띄웁니다.

    서버가 종료될 때:
    1. 정리 작업을 취소하고 종료 로그를 출력합니다.
    """
    settings = get_settings()
    settings.require_api_key()

    logger.info(f"SmartThread API가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    logger.info(f"환경: {settings.environment}, Claude 모델: {settings.claude_model}")

    cleanup_task = asyncio.create_task(
        run_periodic_cleanup(all_rate_limiters(), settings.rate_limit_cleanup_interval_seconds)
    )

    yield

    # 종료 시: 리소스 정리
    cleanup_task.cancel()
    try:
        await cleanup_task
    except asyncio.CancelledError:
        pass
    logger.info("SmartThread API가 종료됩니다")


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. 기본 앱 정보 설정 (제목, 설명 등)
    2. CORS 설정 (대시보드와의 통신 허용 설정)
    3. 보안 헤더 / 요청 로그 미들웨어
    4. 에러 봉투 변환 핸들러
    5. API 라우터 연결
    """
    settings = get_settings()

    app = FastAPI(
        title="SmartThread API",
        description="대화 스레드를 커밋 메시지, Notion 작업, 회의 요약으로 변환하는 AI 처리 API",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",  # 개발자용 문서 주소
        redoc_url="/redoc",
    )

    # CORS 미들웨어 설정: 대시보드 웹페이지가 이 서버에 접속할 수 있도록 허용하는 설정입니다.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def security_headers_and_logging(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        client_host = request.client.host if request.client else "unknown"
        logger.info(
            f"[HTTP] {request.method} {request.url.path} from {client_host} "
            f"-> {response.status_code} ({elapsed_ms}ms)"
        )
        return response

    # 글로벌 예외 핸들러: 커스텀 예외를 구조화된 JSON 응답으로 변환
    @app.exception_handler(SmartThreadError)
    async def smartthread_error_handler(request: Request, exc: SmartThreadError):
        details = exc.details
        if not settings.is_production and exc.__cause__ is not None:
            cause = exc.__cause__
            debug = {
                "exception": type(cause).__name__,
                "traceback": traceback.format_exception(type(cause), cause, cause.__traceback__),
            }
            details = {**details, "debug": debug} if isinstance(details, dict) else {
                "info": details,
                "debug": debug,
            }

        headers = dict(getattr(exc, "headers", None) or {})
        retry_after = getattr(exc, "retry_after", None)
        if isinstance(exc, (RateLimitExceededError, UpstreamRateLimitError)) and retry_after:
            headers["Retry-After"] = str(retry_after)

        return error_response(exc.status_code, exc.error_code, exc.message, details, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            400,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": format_validation_errors(exc.errors(), strip_prefix=("body",))},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            logger.warning(f"[HTTP] 존재하지 않는 경로: {request.method} {request.url.path}")
            return error_response(
                404,
                "NOT_FOUND",
                f"Route {request.method} {request.url.path} not found",
                {
                    "availableRoutes": [
                        "POST /api/process-thread",
                        "GET /api/health",
                        "GET /api/modes",
                        "GET /api/integrations",
                    ]
                },
            )
        return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        details = None
        if not settings.is_production:
            details = {
                "exception": type(exc).__name__,
                "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
            }
        return error_response(500, "INTERNAL_ERROR", "Internal server error", details)

    # API 라우터 포함: /api 주소 아래에 모든 기능을 연결합니다.
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def liveness() -> dict:
        """프로세스 생존 확인 (외부 서비스는 확인하지 않음)."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": APP_VERSION,
            "uptime": get_uptime_seconds(),
        }

    @app.get("/")
    async def root() -> dict:
        """
        루트 엔드포인트: 서버가 정상적으로 동작하는지 확인하는 기본 주소입니다.
        접속 시 서버의 기본 정보를 반환합니다.
        """
        return {
            "name": "SmartThread Backend",
            "version": APP_VERSION,
            "description": "AI-powered thread processing API",
            "status": "running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "api": "/api",
                "docs": "/docs",
            },
            "deployment": {
                "environment": settings.environment,
                "port": settings.port,
            },
        }

    return app


setup_logging()

# 애플리케이션 인스턴스 생성
app = create_app()


# 이 파일을 직접 실행했을 때 서버를 구동시키는 코드입니다.
if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    # uvicorn 웹 서버를 실행합니다.
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,  # 개발 모드에서는 코드 변경 시 자동 재시작
    )
