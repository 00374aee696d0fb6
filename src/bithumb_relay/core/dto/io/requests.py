"""인바운드 HTTP 요청 본문 DTO"""

from __future__ import annotations

from pydantic import Field, StrictFloat, StrictInt, StrictStr

from bithumb_relay.core.dto.internal.trade import Credentials
from bithumb_relay.core.dto.io._base import BaseRequestDTO

# 수량/금액은 문자열·숫자 모두 받아 코어에서 Decimal로 검증합니다.
# strict 타입이라 JSON true/false가 1/0으로 바뀌지 않습니다.
NumericInput = StrictStr | StrictInt | StrictFloat | None


class CredentialRequestDTO(BaseRequestDTO):
    """잔고 조회 요청 `{apiKey, secretKey}`"""

    api_key: str = Field(alias="apiKey", min_length=1)
    secret_key: str = Field(alias="secretKey", min_length=1, repr=False)

    def credentials(self) -> Credentials:
        return Credentials(api_key=self.api_key, secret_key=self.secret_key)


class BuyRequestDTO(CredentialRequestDTO):
    """시장가 매수 요청 `{apiKey, secretKey, amount}` (KRW 금액)"""

    amount: NumericInput = None


class SellRequestDTO(CredentialRequestDTO):
    """시장가 매도 요청 `{apiKey, secretKey, units}`"""

    units: NumericInput = None
