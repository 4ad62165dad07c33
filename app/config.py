from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings

from app.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    """

    # Claude API 설정: 스레드 분석에 사용할 키와 모델
    anthropic_api_key: str = ""  # 필수값. 비어 있으면 서버가 시작되지 않습니다.
    claude_model: str = "claude-sonnet-4-20250514"
    claude_temperature: float = 0.7
    claude_max_tokens: int = 2000

    # 서버 설정
    host: str = "0.0.0.0"
    port: int = 3001
    environment: Literal["development", "production", "test"] = "development"
    log_level: Optional[str] = None  # 지정하지 않으면 환경에 따라 결정
    frontend_url: str = "http://localhost:3000"  # CORS 허용 주소 (대시보드)
    trust_proxy: bool = False  # True면 X-Forwarded-For의 첫 주소를 클라이언트로 간주

    # 요청 처리 제한
    request_timeout_seconds: float = 30.0
    health_check_timeout_seconds: float = 10.0
    max_request_size_kb: int = 500

    # 고정 윈도우 rate limit 설정
    rate_limit_max_requests: int = 100  # /api 전체: 분당 100회
    rate_limit_window_seconds: int = 60
    strict_rate_limit_max_requests: int = 60  # 쓰기 API: 분당 60회
    rate_limit_cleanup_interval_seconds: int = 300  # 5분마다 만료 엔트리 정리

    # 외부 연동 (스텁) 설정: 값의 존재 여부만 확인합니다
    slack_bot_token: str = ""
    slack_signing_secret: str = ""
    discord_bot_token: str = ""
    notion_api_key: str = ""
    notion_database_id: str = ""
    github_token: str = ""
    github_default_repo: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def allowed_origins(self) -> list[str]:
        return [self.frontend_url]

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "INFO" if self.is_production else "DEBUG"

    def require_api_key(self) -> None:
        """
        필수 설정 확인.
        API 키가 없으면 ConfigurationError를 발생시켜 서버 시작을 중단합니다.
        """
        if not self.anthropic_api_key:
            raise ConfigurationError(
                "필수 환경 변수가 설정되지 않았습니다: ANTHROPIC_API_KEY",
                details={"missing": ["ANTHROPIC_API_KEY"]},
            )


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    """
    return Settings()
