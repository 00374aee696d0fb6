"""주문 수량/금액 계산 (Decimal, 소수 4자리 반올림)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final

from bithumb_relay.common.exceptions.base import ValidationError

UNITS_PLACES: Final[Decimal] = Decimal("0.0001")
WHOLE_KRW: Final[Decimal] = Decimal("1")
# 기본 context(28자리) 안에서 소수 4자리 quantize가 가능한 입력 상한
MAX_INPUT: Final[Decimal] = Decimal("1e15")


def to_decimal(value: object, field_name: str) -> Decimal:
    """호출자 입력을 유한한 양수 Decimal로 변환합니다.

    Raises:
        ValidationError: 비어 있거나 숫자가 아니거나 0 이하이거나 너무 큰 경우
    """
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} 값을 입력해주세요")

    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field_name} 값이 숫자가 아닙니다: {value!r}", exc) from exc

    if not number.is_finite():
        raise ValidationError(f"{field_name} 값이 유한한 숫자가 아닙니다: {value!r}")
    if number <= 0:
        raise ValidationError(f"{field_name} 값은 0보다 커야 합니다")
    if number > MAX_INPUT:
        raise ValidationError(f"{field_name} 값이 너무 큽니다: {value!r}")
    return number


def quantize_units(units: Decimal) -> Decimal:
    try:
        return units.quantize(UNITS_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(f"주문 수량을 소수 4자리로 표현할 수 없습니다: {units}", exc) from exc


def format_units(units: Decimal) -> str:
    """수량을 소수 4자리 고정 문자열로 (4번째 자리에서 반올림)"""
    return format(quantize_units(units), "f")


def derive_buy_units(krw_amount: Decimal, closing_price: Decimal) -> str:
    """매수 금액 / 현재가 → 소수 4자리 수량 문자열"""
    return format_units(krw_amount / closing_price)


def estimate_amount(units: str, closing_price: Decimal) -> str:
    """전송한 수량 × 현재가를 원 단위로 반올림한 예상 금액"""
    try:
        amount = (Decimal(units) * closing_price).quantize(WHOLE_KRW, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(f"예상 금액을 계산할 수 없습니다: {units} × {closing_price}", exc) from exc
    return format(amount, "f")
