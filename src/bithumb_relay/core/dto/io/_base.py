"""I/O 경계 DTO 기반 클래스"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# 프런트엔드 요청 본문용 ConfigDict
REQUEST_CONFIG = ConfigDict(
    extra="ignore",  # 프런트엔드가 덧붙이는 필드는 무시 (currency 등)
    str_strip_whitespace=True,
    frozen=True,
    populate_by_name=True,  # apiKey / api_key 모두 허용
    validate_default=True,
)


class BaseRequestDTO(BaseModel):
    """프런트엔드 → 릴레이 요청 본문 공통 베이스.

    - 불변 객체
    - camelCase 별칭 입력 허용
    """

    model_config = REQUEST_CONFIG
