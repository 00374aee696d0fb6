from __future__ import annotations

import asyncio

import aiohttp
import orjson
import pytest

from bithumb_relay.common.exceptions.base import QuoteError, RemoteError, ValidationError
from bithumb_relay.common.exceptions.exception_rule import classify_exception, error_message_for
from bithumb_relay.core.dto.io.requests import CredentialRequestDTO
from bithumb_relay.core.types import ErrorKind


@pytest.mark.parametrize(
    "err, expected",
    [
        (ValidationError("bad"), (ErrorKind.VALIDATION, 400)),
        (QuoteError("quote"), (ErrorKind.QUOTE, 400)),
        (RemoteError("remote"), (ErrorKind.REMOTE, 500)),
        (aiohttp.ClientConnectionError("down"), (ErrorKind.REMOTE, 500)),
        (asyncio.TimeoutError(), (ErrorKind.REMOTE, 500)),
        (RuntimeError("boom"), (ErrorKind.UNKNOWN, 500)),
    ],
)
def test_classify_exception(err: BaseException, expected: tuple[ErrorKind, int]) -> None:
    assert classify_exception(err) == expected


def test_request_body_errors_are_validation_kind() -> None:
    with pytest.raises(orjson.JSONDecodeError) as json_err:
        orjson.loads(b"{oops")
    assert classify_exception(json_err.value) == (ErrorKind.VALIDATION, 400)

    with pytest.raises(Exception) as pydantic_err:
        CredentialRequestDTO.model_validate({"apiKey": "k"})
    assert classify_exception(pydantic_err.value) == (ErrorKind.VALIDATION, 400)
    assert "secretKey" in error_message_for(pydantic_err.value)


def test_relay_exception_response_shape() -> None:
    err = RemoteError("Invalid Apikey", exchange_status="5300", status_code=200)

    assert str(err) == "Invalid Apikey"
    assert err.to_response() == {"status": "error", "message": "Invalid Apikey"}
    assert err.to_dict()["exchange_status"] == "5300"
    assert error_message_for(err) == "Invalid Apikey"


def test_credentials_repr_hides_secret() -> None:
    dto = CredentialRequestDTO.model_validate({"apiKey": "public", "secretKey": "hidden-secret"})

    assert "hidden-secret" not in repr(dto)
    assert "hidden-secret" not in repr(dto.credentials())
    assert dto.credentials().secret_key == "hidden-secret"
