"""주문 흐름 내부 도메인 객체 (요청 스코프, 불변)"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, TypeAlias

from bithumb_relay.core.types import BithumbPayload, FormParams, OrderSide


@dataclass(frozen=True, slots=True)
class Credentials:
    """호출자 API 자격 증명.

    요청 하나의 수명 동안만 존재합니다. secret_key는 repr에 노출되지 않습니다.
    """

    api_key: str
    secret_key: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """서명 완료된 인증 요청.

    param_string은 서명 계산과 POST 본문에 동일하게 사용됩니다.
    """

    endpoint_path: str
    params: FormParams
    nonce: str
    signature: str
    param_string: str

    def headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/x-www-form-urlencoded",
            "Api-Key": api_key,
            "Api-Sign": self.signature,
            "Api-Nonce": self.nonce,
        }


@dataclass(frozen=True, slots=True)
class TickerSnapshot:
    """주문 직전에 조회한 시세 (캐시하지 않음)"""

    symbol: str
    closing_price: Decimal
    raw: BithumbPayload = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class MarketBuyByAmount:
    """KRW 금액 기준 시장가 매수 (수량은 시세로 계산)"""

    krw_amount: Decimal
    side: OrderSide = "bid"


@dataclass(frozen=True, slots=True)
class MarketSellByUnits:
    """수량 기준 시장가 매도"""

    units: Decimal
    side: OrderSide = "ask"


OrderRequest: TypeAlias = MarketBuyByAmount | MarketSellByUnits


@dataclass(frozen=True, slots=True)
class PreparedOrder:
    """서명 직전 주문 내용. 결과 병합 필드는 여기 값을 그대로 사용합니다."""

    endpoint_path: str
    params: FormParams
    current_price: Decimal
    units: str
    estimated_amount: str | None = None

    def merge_into(self, response: BithumbPayload) -> dict[str, Any]:
        merged: dict[str, Any] = {
            **response,
            "currentPrice": _json_number(self.current_price),
            "units": self.units,
        }
        if self.estimated_amount is not None:
            merged["estimatedAmount"] = self.estimated_amount
        return merged


def _json_number(value: Decimal) -> int | float:
    """정수 가격은 int, 그 외는 float으로 (JSON 숫자)"""
    if value == value.to_integral_value():
        return int(value)
    return float(value)
