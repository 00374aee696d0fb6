"""프런트엔드용 HTTP API (aiohttp.web)

라우트:
    POST /api/balance          {apiKey, secretKey}
    GET  /api/ticker/{currency}
    POST /api/buy              {apiKey, secretKey, amount}
    POST /api/sell             {apiKey, secretKey, units}

모든 오류는 `{status: "error", message}` 로 변환됩니다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

import orjson
from aiohttp import web

from bithumb_relay.application.trading_service import TradingService
from bithumb_relay.common.exceptions.base import RelayException
from bithumb_relay.common.exceptions.exception_rule import (
    EXPECTED_EXCEPTIONS,
    classify_exception,
    error_message_for,
)
from bithumb_relay.common.logger import RelayLogger
from bithumb_relay.core.dto.io._base import BaseRequestDTO
from bithumb_relay.core.dto.io.requests import (
    BuyRequestDTO,
    CredentialRequestDTO,
    SellRequestDTO,
)

logger = RelayLogger.get_logger("api", "application")

TRADING_SERVICE = web.AppKey("trading_service", TradingService)

DTO = TypeVar("DTO", bound=BaseRequestDTO)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,HEAD,PUT,PATCH,POST,DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}


def json_response(data: Any, status: int = 200) -> web.Response:
    return web.Response(
        body=orjson.dumps(data),
        status=status,
        content_type="application/json",
    )


async def read_body(request: web.Request, dto_class: type[DTO]) -> DTO:
    """요청 본문 JSON → DTO (파싱/검증 오류는 미들웨어에서 400으로 변환)"""
    raw = await request.read()
    payload = orjson.loads(raw) if raw else {}
    return dto_class.model_validate(payload)


# ========================================
# Middlewares
# ========================================


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    if request.method == "OPTIONS":
        return web.Response(status=204, headers=CORS_HEADERS)
    response = await handler(request)
    response.headers.update(CORS_HEADERS)
    return response


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """모든 예외를 `{status: "error", message}` 로 변환합니다. 재시도는 하지 않습니다."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except EXPECTED_EXCEPTIONS as exc:
        kind, status = classify_exception(exc)
        message = error_message_for(exc)
        await logger.awarning(
            "Request failed",
            path=request.path,
            error_kind=kind.value,
            http_status=status,
            error=message,
        )
        if isinstance(exc, RelayException):
            body = exc.to_response()
        else:
            body = {"status": "error", "message": message}
        return json_response(body, status=status)
    except Exception as exc:
        kind, status = classify_exception(exc)
        await logger.aerror(
            f"Unhandled error: {exc}",
            path=request.path,
            error_kind=kind.value,
            exc_info=exc,
        )
        return json_response({"status": "error", "message": error_message_for(exc)}, status=status)


# ========================================
# Handlers
# ========================================


async def balance(request: web.Request) -> web.Response:
    body = await read_body(request, CredentialRequestDTO)
    result = await request.app[TRADING_SERVICE].get_balance(body.credentials())
    return json_response(result)


async def ticker(request: web.Request) -> web.Response:
    result = await request.app[TRADING_SERVICE].get_ticker(request.match_info["currency"])
    return json_response(result)


async def buy(request: web.Request) -> web.Response:
    body = await read_body(request, BuyRequestDTO)
    result = await request.app[TRADING_SERVICE].market_buy(body.credentials(), body.amount)
    return json_response(result)


async def sell(request: web.Request) -> web.Response:
    body = await read_body(request, SellRequestDTO)
    result = await request.app[TRADING_SERVICE].market_sell(body.credentials(), body.units)
    return json_response(result)


def _add_static_routes(app: web.Application, static_dir: str | None) -> None:
    if not static_dir:
        return
    root = Path(static_dir)
    if not root.is_dir():
        logger.info("Static directory not found, static serving disabled", static_dir=static_dir)
        return

    index = root / "index.html"
    if index.is_file():

        async def index_handler(request: web.Request) -> web.FileResponse:
            return web.FileResponse(index)

        app.router.add_get("/", index_handler)
    app.router.add_static("/", root)


def create_app(service: TradingService, static_dir: str | None = None) -> web.Application:
    """aiohttp 애플리케이션 생성"""
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[TRADING_SERVICE] = service

    app.router.add_post("/api/balance", balance)
    app.router.add_get("/api/ticker/{currency}", ticker)
    app.router.add_post("/api/buy", buy)
    app.router.add_post("/api/sell", sell)

    _add_static_routes(app, static_dir)
    return app
