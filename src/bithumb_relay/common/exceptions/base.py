from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from bithumb_relay.core.types import ErrorKind

GENERIC_REMOTE_MESSAGE = "거래소 API 호출에 실패했습니다"


@dataclass(eq=False)
class RelayException(Exception):
    """릴레이 기본 예외 클래스

    경계에서 `to_response()`로 `{status: "error", message}` 형태의
    일관된 응답 본문으로 변환됩니다.
    """

    message: str
    original_exception: BaseException | None = None

    error_kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN
    http_status: ClassVar[int] = 500

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_response(self) -> dict[str, str]:
        return {"status": "error", "message": self.message}

    def to_dict(self) -> dict[str, Any]:
        """로그 extra 용 구조화 정보"""
        result: dict[str, Any] = {
            "error": self.message,
            "error_type": self.__class__.__name__,
            "error_kind": self.error_kind.value,
        }
        if self.original_exception is not None:
            result["original_error"] = str(self.original_exception)
            result["original_error_type"] = self.original_exception.__class__.__name__
        return result


@dataclass(eq=False)
class ValidationError(RelayException):
    """호출자 입력 오류. 네트워크 호출 전에 거부됩니다."""

    error_kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION
    http_status: ClassVar[int] = 400


@dataclass(eq=False)
class QuoteError(RelayException):
    """시세 조회 실패. 주문은 서명 전에 중단됩니다."""

    error_kind: ClassVar[ErrorKind] = ErrorKind.QUOTE
    http_status: ClassVar[int] = 400


@dataclass(eq=False)
class RemoteError(RelayException):
    """거래소 호출 실패 (전송 오류 또는 거래소가 보고한 오류)

    거래소 응답의 `status`/HTTP 상태를 함께 보관합니다.
    """

    exchange_status: str | None = None
    status_code: int | None = None

    error_kind: ClassVar[ErrorKind] = ErrorKind.REMOTE
    http_status: ClassVar[int] = 500

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.exchange_status is not None:
            result["exchange_status"] = self.exchange_status
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result
