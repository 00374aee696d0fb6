from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

import orjson
from aiohttp import web
from aiohttp.test_utils import TestServer

from bithumb_relay.core.dto.internal.trade import Credentials
from bithumb_relay.infra.http.bithumb_client import BithumbClient

TEST_API_KEY = "test_api_key_0123456789"
TEST_SECRET_KEY = "test_secret_key"


def build_credentials(**overrides: str) -> Credentials:
    payload = {"api_key": TEST_API_KEY, "secret_key": TEST_SECRET_KEY}
    payload.update(overrides)
    return Credentials(**payload)


def build_ticker_payload(closing_price: str = "500", status: str = "0000") -> dict[str, Any]:
    return {
        "status": status,
        "data": {
            "opening_price": "495",
            "closing_price": closing_price,
            "min_price": "490",
            "max_price": "510",
            "units_traded": "1234567.8901",
            "date": "1700000000000",
        },
    }


def build_balance_payload() -> dict[str, Any]:
    return {
        "status": "0000",
        "data": {
            "total_krw": "100000",
            "in_use_krw": "0",
            "available_krw": "100000",
            "total_xrp": "12.5",
            "available_xrp": "12.5",
        },
    }


def build_order_payload(order_id: str = "C0106000000000000001") -> dict[str, Any]:
    return {"status": "0000", "order_id": order_id}


class FixedNonceSource:
    """고정 nonce를 순서대로 반환 (마지막 값은 반복)"""

    def __init__(self, *nonces: str) -> None:
        self._nonces = list(nonces) or ["1700000000000"]
        self._index = 0

    def next_nonce(self) -> str:
        nonce = self._nonces[min(self._index, len(self._nonces) - 1)]
        self._index += 1
        return nonce


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str]
    body: str


@dataclass
class FakeBithumb:
    """인메모리 빗썸 REST 서버. 받은 요청을 순서대로 기록합니다."""

    ticker_payload: dict[str, Any] = field(default_factory=build_ticker_payload)
    ticker_http_status: int = 200
    private_payload: dict[str, Any] = field(default_factory=build_order_payload)
    private_http_status: int = 200
    private_raw_body: str | None = None
    requests: list[RecordedRequest] = field(default_factory=list)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/public/ticker/{pair}", self._ticker)
        app.router.add_post("/info/balance", self._private)
        app.router.add_post("/trade/market_buy", self._private)
        app.router.add_post("/trade/market_sell", self._private)
        return app

    async def _record(self, request: web.Request) -> None:
        body = (await request.read()).decode("utf-8")
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                headers=dict(request.headers),
                body=body,
            )
        )

    async def _ticker(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.Response(
            body=orjson.dumps(self.ticker_payload),
            status=self.ticker_http_status,
            content_type="application/json",
        )

    async def _private(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.private_raw_body is not None:
            return web.Response(text=self.private_raw_body, status=self.private_http_status)
        return web.Response(
            body=orjson.dumps(self.private_payload),
            status=self.private_http_status,
            content_type="application/json",
        )

    def paths(self) -> list[str]:
        return [r.path for r in self.requests]

    def private_requests(self) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == "POST"]


@asynccontextmanager
async def running_client(
    fake: FakeBithumb, *nonces: str
) -> AsyncIterator[BithumbClient]:
    """FakeBithumb 서버를 띄우고 그 주소를 바라보는 BithumbClient를 반환"""
    async with TestServer(fake.app()) as server:
        base_url = f"http://{server.host}:{server.port}"
        async with BithumbClient(
            base_url=base_url, timeout=5.0, nonce_source=FixedNonceSource(*nonces)
        ) as client:
            yield client
