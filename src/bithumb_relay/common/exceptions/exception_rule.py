from __future__ import annotations

import asyncio
from dataclasses import dataclass

import aiohttp
import orjson
from pydantic import ValidationError as PydanticValidationError

from bithumb_relay.common.exceptions.base import RelayException
from bithumb_relay.core.types import ErrorCategory, ErrorKind, ExceptionGroup


@dataclass(frozen=True, slots=True)
class ErrorRule:
    """예외 타입 → (ErrorKind, HTTP 상태) 매핑 규칙"""

    exc: ExceptionGroup
    result: ErrorCategory


# 요청 본문 파싱/검증 오류 (호출자 입력)
REQUEST_BODY_ERRORS = (
    orjson.JSONDecodeError,
    PydanticValidationError,
)

# 거래소 전송 계층 오류
TRANSPORT_ERRORS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
)


# 1) 릴레이 예외는 스스로 분류 정보를 가짐 (classify_exception에서 우선 처리)
# 2) 요청 본문 규칙
RULES_REQUEST: list[ErrorRule] = [
    ErrorRule(exc=REQUEST_BODY_ERRORS, result=(ErrorKind.VALIDATION, 400)),
]

# 3) 전송 규칙
RULES_TRANSPORT: list[ErrorRule] = [
    ErrorRule(exc=TRANSPORT_ERRORS, result=(ErrorKind.REMOTE, 500)),
]

# 4) 전체 규칙 (구체 -> 포괄 순서 유지)
# 주의: 매칭 우선순위를 보장하기 위해 선언 순서를 유지합니다.
RULES_FOR_BOUNDARY: list[ErrorRule] = [
    *RULES_REQUEST,
    *RULES_TRANSPORT,
]

EXPECTED_EXCEPTIONS = (
    RelayException,
    *REQUEST_BODY_ERRORS,
    *TRANSPORT_ERRORS,
)


def classify_exception(err: BaseException) -> ErrorCategory:
    """예외 → (ErrorKind, HTTP 상태) 분류기 (규칙 테이블 기반)

    - RelayException은 클래스에 선언된 분류를 그대로 사용합니다.
    - 그 외에는 선언적 규칙을 순서대로 평가합니다.
    """
    if isinstance(err, RelayException):
        return (err.error_kind, err.http_status)

    for rule in RULES_FOR_BOUNDARY:
        if isinstance(err, rule.exc):
            return rule.result

    return (ErrorKind.UNKNOWN, 500)


def error_message_for(err: BaseException) -> str:
    """응답 본문에 담을 메시지"""
    if isinstance(err, RelayException):
        return err.message
    if isinstance(err, PydanticValidationError):
        first = err.errors()[0] if err.error_count() else {}
        loc = ".".join(str(part) for part in first.get("loc", ()))
        return f"잘못된 요청 본문: {loc} {first.get('msg', '')}".strip()
    if isinstance(err, orjson.JSONDecodeError):
        return "요청 본문이 올바른 JSON이 아닙니다"
    return str(err) or err.__class__.__name__
