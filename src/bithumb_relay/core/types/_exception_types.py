"""에러 분류 타입 정의 모듈.

경계(HTTP 미들웨어)에서 예외를 일관된 응답으로 변환할 때 사용합니다.
"""

from enum import StrEnum
from typing import TypeAlias


class ErrorKind(StrEnum):
    """에러 종류 분류"""

    VALIDATION = "validation"  # 호출자 입력 오류 (네트워크 호출 전 거부)
    QUOTE = "quote"  # 시세 조회 실패 (서명 전 주문 중단)
    REMOTE = "remote"  # 인증 호출 실패 (전송 오류 또는 거래소 비즈니스 오류)
    UNKNOWN = "unknown"


# (에러 종류, HTTP 상태 코드)
ErrorCategory: TypeAlias = tuple[ErrorKind, int]
ExceptionGroup: TypeAlias = type[BaseException] | tuple[type[BaseException], ...]
