from __future__ import annotations

import logging

import pytest

from bithumb_relay.common.logger import RelayLogger, mask_key


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abcdef1234567890", "abcd********7890"),
        ("abc", "***"),
        ("", ""),
        (None, ""),
    ],
)
def test_mask_key(value: str | None, expected: str) -> None:
    assert mask_key(value) == expected


def test_reserved_record_keys_are_prefixed(caplog: pytest.LogCaptureFixture) -> None:
    logger = RelayLogger.get_logger("test_relay", "infra", log_to_console=False)
    caplog.set_level(logging.INFO, logger="test_relay.infra")

    try:
        logger.info("reserved keys", name="shadow", endpoint="/info/balance")
    finally:
        logger.close()

    [record] = [r for r in caplog.records if r.getMessage() == "reserved keys"]
    assert record.name == "test_relay.infra"
    assert record.field_name == "shadow"
    assert record.endpoint == "/info/balance"
    assert record.component == "infra"


def test_nested_extra_is_merged(caplog: pytest.LogCaptureFixture) -> None:
    logger = RelayLogger.get_logger("test_relay", "application", log_to_console=False)
    caplog.set_level(logging.INFO, logger="test_relay.application")

    try:
        logger.warning("merged", extra={"side": "bid"}, units="1.0000")
    finally:
        logger.close()

    [record] = [r for r in caplog.records if r.getMessage() == "merged"]
    assert record.side == "bid"
    assert record.units == "1.0000"
