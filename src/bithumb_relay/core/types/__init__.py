from bithumb_relay.core.types._exception_types import (
    ErrorCategory,
    ErrorKind,
    ExceptionGroup,
)
from bithumb_relay.core.types._payload_type import (
    BALANCE_ENDPOINT,
    MARKET_BUY_ENDPOINT,
    MARKET_SELL_ENDPOINT,
    ORDER_CURRENCY,
    PAYMENT_CURRENCY,
    SUCCESS_STATUS,
    TICKER_ENDPOINT,
    BithumbPayload,
    FormParams,
    OrderSide,
)

__all__ = [
    "BALANCE_ENDPOINT",
    "MARKET_BUY_ENDPOINT",
    "MARKET_SELL_ENDPOINT",
    "ORDER_CURRENCY",
    "PAYMENT_CURRENCY",
    "SUCCESS_STATUS",
    "TICKER_ENDPOINT",
    "BithumbPayload",
    "ErrorCategory",
    "ErrorKind",
    "ExceptionGroup",
    "FormParams",
    "OrderSide",
]
