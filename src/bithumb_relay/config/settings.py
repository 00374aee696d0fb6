"""통합 Settings 모듈 - 환경변수 기반

이 모듈의 역할:
    1. 코드에 합리적인 기본값 제공
    2. 환경변수로 오버라이드 (우선순위 높음)
    3. 타입 안전성 보장 (Pydantic 자동 검증)

설정 우선순위:
    1. 환경변수 (최우선) - export BITHUMB_BASE_URL=...
    2. .env 파일 - config/.env
    3. 코드 기본값 (settings.py 내부)

사용 예시:
    # 개발 환경 (기본값 사용)
    bithumb-relay
    # → https://api.bithumb.com, 포트 3000

    # 포트/타임아웃 오버라이드
    export SERVER_PORT=8080
    export BITHUMB_TIMEOUT_SEC=5
    bithumb-relay

API Key / Secret Key는 설정에 두지 않습니다. 요청마다 호출자가 전달합니다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# 설정 파일 경로
config_dir = Path(__file__).parent


def env_settings(prefix: str) -> SettingsConfigDict:
    """환경변수 + .env 통합 설정

    Args:
        prefix: 환경변수 접두사 (예: BITHUMB_, SERVER_)

    Returns:
        Pydantic 설정 딕셔너리
    """
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=config_dir / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppSettings(BaseSettings):
    """애플리케이션 일반 설정

    환경변수 오버라이드:
        APP_ENVIRONMENT: 실행 환경 (dev, prod, test) (기본: dev)
        APP_DEBUG: 디버그 모드, aiohttp 접근 로그 활성화 (기본: false)
    """

    environment: str = "dev"
    debug: bool = False

    model_config = env_settings("APP_")


class BithumbSettings(BaseSettings):
    """빗썸 REST API 설정

    환경변수 오버라이드:
        BITHUMB_BASE_URL: REST API 주소 (기본: https://api.bithumb.com)
        BITHUMB_TIMEOUT_SEC: HTTP 요청 전체 타임아웃 (기본: 10초)
        BITHUMB_NONCE_STRATEGY: nonce 생성 방식 (clock | monotonic, 기본: clock)
    """

    base_url: str = "https://api.bithumb.com"
    timeout_sec: float = 10.0
    nonce_strategy: Literal["clock", "monotonic"] = "clock"

    model_config = env_settings("BITHUMB_")


class ServerSettings(BaseSettings):
    """HTTP 서버 설정

    환경변수 오버라이드:
        SERVER_HOST: 바인딩 주소 (기본: 0.0.0.0)
        SERVER_PORT: 리스닝 포트 (기본: 3000)
        SERVER_STATIC_DIR: 정적 파일 디렉터리 (기본: static, 없으면 비활성)
    """

    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = "static"

    model_config = env_settings("SERVER_")


class LoggingSettings(BaseSettings):
    """로깅 설정

    환경변수 오버라이드:
        LOG_LEVEL: 로깅 레벨 (기본: INFO)
        LOG_TO_FILE: 파일 로깅 여부 (기본: false)
        LOG_DIR: 로그 디렉터리 (기본: logs)
    """

    level: str = "INFO"
    to_file: bool = False
    dir: str = "logs"

    model_config = env_settings("LOG_")


# ========================================
# 설정 인스턴스 (싱글톤)
# ========================================

app_settings = AppSettings()
bithumb_settings = BithumbSettings()
server_settings = ServerSettings()
logging_settings = LoggingSettings()
