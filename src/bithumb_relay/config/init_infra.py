from contextlib import asynccontextmanager
from typing import AsyncIterator

from bithumb_relay.core.signing.nonce import NonceSource
from bithumb_relay.infra.http.bithumb_client import BithumbClient


@asynccontextmanager
async def init_bithumb_client(
    base_url: str, timeout: float, nonce_source: NonceSource
) -> AsyncIterator[BithumbClient]:
    """BithumbClient 세션 생성 및 정리"""
    async with BithumbClient(
        base_url=base_url, timeout=timeout, nonce_source=nonce_source
    ) as client:
        yield client
