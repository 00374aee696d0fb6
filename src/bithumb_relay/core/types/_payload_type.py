"""빗썸 REST 페이로드 관련 타입/상수."""

from typing import Any, Final, Literal, TypeAlias

# 순서가 보존되는 (key, value) 목록. 서명 문자열과 전송 본문이 같은 순서로 직렬화됩니다.
FormParams: TypeAlias = tuple[tuple[str, str], ...]

BithumbPayload: TypeAlias = dict[str, Any]
OrderSide: TypeAlias = Literal["bid", "ask"]

SUCCESS_STATUS: Final[str] = "0000"

ORDER_CURRENCY: Final[str] = "XRP"
PAYMENT_CURRENCY: Final[str] = "KRW"

BALANCE_ENDPOINT: Final[str] = "/info/balance"
MARKET_BUY_ENDPOINT: Final[str] = "/trade/market_buy"
MARKET_SELL_ENDPOINT: Final[str] = "/trade/market_sell"
TICKER_ENDPOINT: Final[str] = "/public/ticker/{symbol}_{payment_currency}"
