from __future__ import annotations

import asyncio
import logging
import queue
import sys
from datetime import datetime
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from bithumb_relay.config.settings import logging_settings

# LogRecord 예약 속성과 충돌하면 logging이 KeyError를 던지므로 접두사를 붙여 회피
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys() | {"message", "asctime"}
)


def mask_key(value: str | None, visible: int = 4) -> str:
    """API Key 등 식별자를 앞/뒤 일부만 남기고 가립니다.

    Examples:
        >>> mask_key("abcdef1234567890")
        'abcd********7890'
        >>> mask_key("abc")
        '***'
    """
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return f"{value[:visible]}{'*' * (len(value) - visible * 2)}{value[-visible:]}"


class RelayLogger:
    """
    릴레이 서버용 로깅 시스템
    큐 기반 비동기 처리, 컴포넌트별 로깅, 구조화 extra 지원
    """

    @classmethod
    def get_logger(cls, name: str, component: str | None = None, **kwargs) -> RelayLogger:
        """
        로거 인스턴스를 반환하는 팩토리 메서드.
        logging.getLogger가 이름 단위 싱글톤이므로 별도 레지스트리는 두지 않습니다.
        """
        return cls(name, component, **kwargs)

    def __init__(
        self,
        name: str,
        component: str | None = None,
        level: int | str | None = None,
        log_to_file: bool | None = None,
        log_to_console: bool = True,
        log_dir: str | None = None,
        rotation: str = "midnight",
    ):
        """
        Args:
            name: 로거 이름
            component: 컴포넌트 이름 (infra, application, core ...)
            level: 로깅 레벨 (미지정 시 LOG_LEVEL)
            log_to_file: 파일 로깅 여부 (미지정 시 LOG_TO_FILE)
            log_to_console: 콘솔 로깅 여부
            log_dir: 로그 디렉터리 (미지정 시 LOG_DIR)
            rotation: 로그 로테이션 주기
        """
        self.name = name
        self.component = component
        self.level = level or logging_settings.level.upper()
        self.log_to_file = logging_settings.to_file if log_to_file is None else log_to_file
        self.log_to_console = log_to_console
        self.log_dir = log_dir or logging_settings.dir
        self.rotation = rotation

        self.log_queue: queue.Queue = queue.Queue()

        self._setup_logger()

    def _setup_logger(self) -> None:
        self.logger_name = f"{self.name}.{self.component}" if self.component else self.name
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(self.level)

        if self.logger.hasHandlers():
            self.logger.handlers.clear()

        self.formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(component)s] %(message)s"
        )

        handlers: list[logging.Handler] = []

        if self.log_to_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(self.formatter)
            handlers.append(console)

        if self.log_to_file:
            log_filename = self._get_log_filename()
            Path(log_filename).parent.mkdir(parents=True, exist_ok=True)

            file_handler = TimedRotatingFileHandler(
                filename=log_filename,
                when=self.rotation,
                backupCount=7,
                encoding="utf-8",
            )
            file_handler.setFormatter(self.formatter)
            handlers.append(file_handler)

        self.queue_handler = QueueHandler(self.log_queue)
        self.logger.addHandler(self.queue_handler)

        self.listener = QueueListener(self.log_queue, *handlers, respect_handler_level=True)
        self.listener.start()

    def _get_log_filename(self) -> str:
        today = datetime.now().strftime("%Y-%m-%d")
        component_part = f"{self.component}/" if self.component else ""
        return f"{self.log_dir}/{component_part}{self.name}_{today}.log"

    def _process_message(self, level: int, msg: str, extra: dict[str, Any] | None = None) -> None:
        """
        메시지 처리 및 로깅

        kwargs로 받은 필드는 LogRecord extra로 병합합니다.
        exc_info/stack_info는 logger.log() 파라미터로 분리합니다.
        """
        log_extra: dict[str, Any] = {"component": self.component or "main"}

        exc_info_param = None
        stack_info_param = False

        if extra:
            exc_info_param = extra.pop("exc_info", None)
            stack_info_param = bool(extra.pop("stack_info", False))

            nested_extra = extra.pop("extra", None)
            if isinstance(nested_extra, dict):
                log_extra.update(nested_extra)

            log_extra.update(extra)

        safe_extra = {
            (f"field_{key}" if key in _RESERVED_RECORD_KEYS else key): value
            for key, value in log_extra.items()
        }

        self.logger.log(
            level, msg, exc_info=exc_info_param, stack_info=stack_info_param, extra=safe_extra
        )

    async def alog(self, level: int, msg: str, **kwargs) -> None:
        """
        비동기 로그 기록
        - 실행 중인 이벤트 루프가 있으면 스레드 풀로 위임
        - 루프가 없으면 동기 처리
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._process_message(level, msg, kwargs)
            return
        await loop.run_in_executor(None, self._process_message, level, msg, kwargs)

    def debug(self, msg: str, **kwargs) -> None:
        self._process_message(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs) -> None:
        self._process_message(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        self._process_message(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs) -> None:
        self._process_message(logging.ERROR, msg, kwargs)

    def critical(self, msg: str, **kwargs) -> None:
        self._process_message(logging.CRITICAL, msg, kwargs)

    async def adebug(self, msg: str, **kwargs) -> None:
        await self.alog(logging.DEBUG, msg, **kwargs)

    async def ainfo(self, msg: str, **kwargs) -> None:
        await self.alog(logging.INFO, msg, **kwargs)

    async def awarning(self, msg: str, **kwargs) -> None:
        await self.alog(logging.WARNING, msg, **kwargs)

    async def aerror(self, msg: str, **kwargs) -> None:
        await self.alog(logging.ERROR, msg, **kwargs)

    def close(self) -> None:
        self.listener.stop()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass
