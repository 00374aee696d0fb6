"""애플리케이션 진입점 (DI Container 기반)

빗썸 주문 릴레이 서버
- 프런트엔드에서 API Key/Secret Key를 받아 서버 측에서 서명
- 잔고 조회, 시세 조회, XRP 시장가 매수/매도

Usage:
    bithumb-relay                    # 기본 포트 3000
    SERVER_PORT=8080 bithumb-relay   # 포트 오버라이드
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from aiohttp import web
from aiohttp.log import access_logger

from bithumb_relay.common.logger import RelayLogger
from bithumb_relay.config.containers import ApplicationContainer
from bithumb_relay.config.settings import AppSettings, app_settings, server_settings

logger = RelayLogger.get_logger("main", "app")


def access_log_for(settings: AppSettings) -> logging.Logger | None:
    """APP_DEBUG일 때만 aiohttp 접근 로그를 남깁니다."""
    return access_logger if settings.debug else None


class Application:
    """애플리케이션 메인 클래스

    책임:
    - DI Container 관리
    - aiohttp 서버 실행
    - Graceful Shutdown
    """

    def __init__(self) -> None:
        self.container = ApplicationContainer()
        self.runner: web.AppRunner | None = None

    async def initialize(self) -> None:
        """Resource 초기화 후 HTTP 서버 기동"""
        logger.info(f"빗썸 주문 릴레이 시작 (env={app_settings.environment})")

        await self.container.init_resources()
        web_app = await self.container.web_app()

        self.runner = web.AppRunner(web_app, access_log=access_log_for(app_settings))
        await self.runner.setup()
        site = web.TCPSite(self.runner, server_settings.host, server_settings.port)
        await site.start()
        logger.info(f"서버가 http://localhost:{server_settings.port} 에서 실행 중입니다.")

    async def run(self) -> None:
        """종료 신호까지 대기"""
        await asyncio.Event().wait()

    async def shutdown(self) -> None:
        logger.info("정리 작업 시작...")
        if self.runner is not None:
            await self.runner.cleanup()
        await self.container.shutdown_resources()
        logger.info("✅ 프로그램 종료 완료")


async def main() -> None:
    app = Application()
    try:
        await app.initialize()
        await app.run()
    finally:
        await app.shutdown()


def run() -> None:
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
