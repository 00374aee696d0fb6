"""
빗썸 REST API 클라이언트

Public(시세) GET 요청과 서명된 Private POST 요청을 수행하고,
응답/오류를 RemoteError로 정규화합니다. 재시도는 하지 않습니다.
"""

from __future__ import annotations

import asyncio
import re
from decimal import Decimal, InvalidOperation
from typing import Any

import aiohttp
import orjson

from bithumb_relay.common.exceptions.base import (
    GENERIC_REMOTE_MESSAGE,
    RemoteError,
    ValidationError,
)
from bithumb_relay.common.logger import RelayLogger, mask_key
from bithumb_relay.core.dto.internal.trade import Credentials, SignedRequest, TickerSnapshot
from bithumb_relay.core.signing.nonce import ClockNonceSource, NonceSource
from bithumb_relay.core.signing.signer import build_signed_request
from bithumb_relay.core.types import (
    BALANCE_ENDPOINT,
    PAYMENT_CURRENCY,
    SUCCESS_STATUS,
    TICKER_ENDPOINT,
    BithumbPayload,
    FormParams,
)

logger = RelayLogger.get_logger("bithumb_client", "infra")

# 시세 URL 경로에 들어가는 심볼은 영숫자만 허용
_SYMBOL_PATTERN = re.compile(r"[A-Za-z0-9]+")


def normalize_symbol(symbol: str) -> str:
    if not _SYMBOL_PATTERN.fullmatch(symbol):
        raise ValidationError(f"잘못된 심볼입니다: {symbol!r}")
    return symbol.upper()


class BithumbClient:
    """
    빗썸 REST 클라이언트

    aiohttp 세션(커넥션 풀)만 공유하며, 자격 증명/nonce/서명은 호출마다 새로 만듭니다.
    """

    def __init__(
        self,
        base_url: str = "https://api.bithumb.com",
        timeout: float = 10.0,
        nonce_source: NonceSource | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.nonce_source = nonce_source or ClockNonceSource()
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> BithumbClient:
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """HTTP 세션을 생성하거나 재사용합니다."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """직접 만든 세션만 종료합니다."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    # ------------------------------------------------------------------
    # 응답 정규화
    # ------------------------------------------------------------------
    @staticmethod
    def _decode(text: str) -> BithumbPayload | None:
        try:
            payload = orjson.loads(text)
        except orjson.JSONDecodeError:
            return None
        return payload if isinstance(payload, dict) else None

    async def _read_payload(self, response: aiohttp.ClientResponse) -> BithumbPayload:
        """HTTP 상태 + 거래소 status 필드 검사 후 JSON 페이로드 반환"""
        text = await response.text()
        payload = self._decode(text)

        if response.status >= 400:
            message = (payload or {}).get("message") or f"{GENERIC_REMOTE_MESSAGE} (HTTP {response.status})"
            raise RemoteError(
                message=str(message),
                exchange_status=(payload or {}).get("status"),
                status_code=response.status,
            )

        if payload is None:
            raise RemoteError(
                message=f"{GENERIC_REMOTE_MESSAGE} (JSON이 아닌 응답)",
                status_code=response.status,
            )

        status = payload.get("status")
        if status != SUCCESS_STATUS:
            raise RemoteError(
                message=str(payload.get("message") or f"거래소 오류 응답 (status={status})"),
                exchange_status=None if status is None else str(status),
                status_code=response.status,
            )
        return payload

    async def _send(self, method: str, path: str, **kwargs: Any) -> BithumbPayload:
        session = await self._ensure_session()
        try:
            async with session.request(method, self._url(path), **kwargs) as response:
                return await self._read_payload(response)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            detail = str(exc) or exc.__class__.__name__
            raise RemoteError(message=f"{GENERIC_REMOTE_MESSAGE}: {detail}", original_exception=exc) from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def get_ticker_payload(self, symbol: str) -> BithumbPayload:
        """`/public/ticker/{symbol}_KRW` 원본 페이로드"""
        symbol = normalize_symbol(symbol)
        path = TICKER_ENDPOINT.format(symbol=symbol, payment_currency=PAYMENT_CURRENCY)
        try:
            return await self._send("GET", path)
        except RemoteError as exc:
            await logger.awarning("Ticker fetch failed", symbol=symbol, **exc.to_dict())
            raise

    async def get_ticker(self, symbol: str) -> TickerSnapshot:
        """현재가 스냅샷 (매 호출마다 새로 조회)"""
        payload = await self.get_ticker_payload(symbol)
        data = payload.get("data")
        raw_price = data.get("closing_price") if isinstance(data, dict) else None

        try:
            closing_price = Decimal(str(raw_price))
        except (InvalidOperation, ValueError) as exc:
            raise RemoteError(
                message=f"시세 응답에 closing_price가 없습니다: {raw_price!r}",
                original_exception=exc,
            ) from exc

        if raw_price is None or not closing_price.is_finite() or closing_price <= 0:
            raise RemoteError(message=f"시세 응답의 closing_price가 올바르지 않습니다: {raw_price!r}")

        return TickerSnapshot(symbol=symbol.upper(), closing_price=closing_price, raw=payload)

    # ------------------------------------------------------------------
    # Private API
    # ------------------------------------------------------------------
    def sign_request(
        self, endpoint_path: str, params: FormParams, credentials: Credentials
    ) -> SignedRequest:
        """새 nonce로 서명합니다."""
        return build_signed_request(
            endpoint_path,
            params,
            credentials.secret_key,
            self.nonce_source.next_nonce(),
        )

    async def private_post(
        self, endpoint_path: str, params: FormParams, credentials: Credentials
    ) -> BithumbPayload:
        """서명된 인증 POST. 본문은 서명에 사용한 param_string 그대로입니다."""
        signed = self.sign_request(endpoint_path, params, credentials)

        await logger.ainfo(
            "Bithumb private API call",
            endpoint=signed.endpoint_path,
            params=dict(signed.params),
            param_string=signed.param_string,
            nonce=signed.nonce,
            api_key=mask_key(credentials.api_key),
            api_sign=signed.signature,
        )

        try:
            return await self._send(
                "POST",
                signed.endpoint_path,
                data=signed.param_string.encode("utf-8"),
                headers=signed.headers(credentials.api_key),
            )
        except RemoteError as exc:
            await logger.aerror(
                "Bithumb private API error",
                endpoint=signed.endpoint_path,
                nonce=signed.nonce,
                **exc.to_dict(),
            )
            raise

    async def get_balance(self, credentials: Credentials) -> BithumbPayload:
        """`/info/balance` (currency=ALL) 원본 페이로드"""
        return await self.private_post(BALANCE_ENDPOINT, (("currency", "ALL"),), credentials)
