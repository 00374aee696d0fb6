"""빗썸 Private API 요청 서명.

api_sign = base64(hex(HMAC-SHA512(secret, path + NUL + urlencode(params) + NUL + nonce)))

hex digest 문자열 자체를 base64로 인코딩합니다 (raw digest 아님).
빗썸 공식 Python 클라이언트와 바이트 단위로 같아야 합니다.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Iterable, Mapping
from urllib.parse import urlencode

from bithumb_relay.core.dto.internal.trade import SignedRequest
from bithumb_relay.core.types import FormParams

_SEPARATOR = chr(0)


def form_params(source: Mapping[str, object] | Iterable[tuple[str, object]]) -> FormParams:
    """매핑/(key, value) 목록을 순서가 고정된 FormParams로 변환합니다."""
    pairs = source.items() if isinstance(source, Mapping) else source
    return tuple((str(key), str(value)) for key, value in pairs)


def encode_params(params: FormParams) -> str:
    """폼 인코딩 (공백 → '+', 예약 문자 퍼센트 인코딩, '&' 연결).

    서명 문자열과 POST 본문 모두 이 함수 하나로 만듭니다.
    """
    return urlencode(params)


def hexdigest(endpoint_path: str, param_string: str, secret_key: str, nonce: str) -> str:
    message = _SEPARATOR.join((endpoint_path, param_string, nonce))
    return hmac.new(
        secret_key.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


def sign(endpoint_path: str, params: FormParams, secret_key: str, nonce: str) -> str:
    """Api-Sign 헤더 값을 계산합니다. 같은 입력이면 항상 같은 값을 반환합니다."""
    digest = hexdigest(endpoint_path, encode_params(params), secret_key, nonce)
    return base64.b64encode(digest.encode("utf-8")).decode("utf-8")


def build_signed_request(
    endpoint_path: str, params: FormParams, secret_key: str, nonce: str
) -> SignedRequest:
    """서명과 전송 본문을 한 번의 직렬화로 함께 만듭니다."""
    param_string = encode_params(params)
    digest = hexdigest(endpoint_path, param_string, secret_key, nonce)
    return SignedRequest(
        endpoint_path=endpoint_path,
        params=params,
        nonce=nonce,
        signature=base64.b64encode(digest.encode("utf-8")).decode("utf-8"),
        param_string=param_string,
    )
