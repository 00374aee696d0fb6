"""시장가 주문 워크플로우

시세 조회 → 수량 계산 → 서명된 주문 전송 → 결과 병합.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from bithumb_relay.common.exceptions.base import QuoteError, RemoteError, ValidationError
from bithumb_relay.common.logger import RelayLogger
from bithumb_relay.core.dto.internal.trade import (
    Credentials,
    MarketBuyByAmount,
    MarketSellByUnits,
    OrderRequest,
    PreparedOrder,
    TickerSnapshot,
)
from bithumb_relay.core.trading.quantity import (
    derive_buy_units,
    estimate_amount,
    format_units,
    to_decimal,
)
from bithumb_relay.core.types import (
    MARKET_BUY_ENDPOINT,
    MARKET_SELL_ENDPOINT,
    ORDER_CURRENCY,
    PAYMENT_CURRENCY,
    BithumbPayload,
    FormParams,
)
from bithumb_relay.infra.http.bithumb_client import BithumbClient

logger = RelayLogger.get_logger("trading_service", "application")

QUOTE_FAILED_MESSAGE = "시세 조회 실패"


class TradingService:
    """잔고/시세 조회와 XRP 시장가 매수·매도.

    요청 간 공유 상태가 없으며, 주문마다 시세를 새로 조회합니다.
    """

    def __init__(self, client: BithumbClient, order_currency: str = ORDER_CURRENCY) -> None:
        self._client = client
        self._order_currency = order_currency

    async def get_balance(self, credentials: Credentials) -> BithumbPayload:
        return await self._client.get_balance(credentials)

    async def get_ticker(self, symbol: str) -> BithumbPayload:
        return await self._client.get_ticker_payload(symbol)

    async def market_buy(self, credentials: Credentials, krw_amount: object) -> dict[str, Any]:
        order = MarketBuyByAmount(krw_amount=to_decimal(krw_amount, "매수 금액"))
        return await self.place_order(credentials, order)

    async def market_sell(self, credentials: Credentials, units: object) -> dict[str, Any]:
        order = MarketSellByUnits(units=to_decimal(units, "매도 수량"))
        return await self.place_order(credentials, order)

    async def place_order(self, credentials: Credentials, order: OrderRequest) -> dict[str, Any]:
        ticker = await self._fetch_quote()
        prepared = self._prepare(order, ticker)

        await logger.ainfo(
            "Market order prepared",
            side=order.side,
            endpoint=prepared.endpoint_path,
            current_price=str(prepared.current_price),
            units=prepared.units,
        )

        response = await self._client.private_post(
            prepared.endpoint_path, prepared.params, credentials
        )
        return prepared.merge_into(response)

    async def _fetch_quote(self) -> TickerSnapshot:
        """시세 조회 실패는 QuoteError로 바꿔 서명 전에 중단합니다."""
        try:
            return await self._client.get_ticker(self._order_currency)
        except RemoteError as exc:
            raise QuoteError(QUOTE_FAILED_MESSAGE, exc) from exc

    def _prepare(self, order: OrderRequest, ticker: TickerSnapshot) -> PreparedOrder:
        price = ticker.closing_price
        match order:
            case MarketBuyByAmount(krw_amount=krw_amount):
                units = derive_buy_units(krw_amount, price)
                return PreparedOrder(
                    endpoint_path=MARKET_BUY_ENDPOINT,
                    params=self._order_params(units, "bid"),
                    current_price=price,
                    units=units,
                )
            case MarketSellByUnits(units=raw_units):
                units = format_units(raw_units)
                return PreparedOrder(
                    endpoint_path=MARKET_SELL_ENDPOINT,
                    params=self._order_params(units, "ask"),
                    current_price=price,
                    units=units,
                    estimated_amount=estimate_amount(units, price),
                )
            case _:
                raise TypeError(f"unsupported order: {order!r}")

    def _order_params(self, units: str, side: str) -> FormParams:
        if Decimal(units) == 0:
            raise ValidationError(f"주문 수량이 0입니다 (소수 4자리 반올림 결과: {units})")
        return (
            ("order_currency", self._order_currency),
            ("payment_currency", PAYMENT_CURRENCY),
            ("units", units),
            ("type", side),
        )
