from __future__ import annotations

import pytest

from bithumb_relay.core.signing.nonce import (
    ClockNonceSource,
    MonotonicNonceSource,
    nonce_source_for,
)


class _StubClock:
    def __init__(self, *readings: float) -> None:
        self._readings = list(readings)

    def __call__(self) -> float:
        return self._readings.pop(0) if len(self._readings) > 1 else self._readings[0]


def test_clock_nonce_is_epoch_millis_string() -> None:
    source = ClockNonceSource(clock=_StubClock(1700000000.1235))

    assert source.next_nonce() == "1700000000123"


def test_clock_nonce_collides_within_same_millisecond() -> None:
    # 같은 밀리초 안의 두 호출은 같은 nonce를 받는다 (벽시계 nonce의 알려진 한계)
    source = ClockNonceSource(clock=_StubClock(1700000000.1231, 1700000000.1239))

    assert source.next_nonce() == source.next_nonce()


def test_monotonic_nonce_never_repeats_in_same_millisecond() -> None:
    source = MonotonicNonceSource(clock=_StubClock(1700000000.1235, 1700000000.1235, 1700000000.1235))

    nonces = [source.next_nonce() for _ in range(3)]

    assert nonces == ["1700000000123", "1700000000124", "1700000000125"]


def test_monotonic_nonce_ignores_clock_going_backwards() -> None:
    source = MonotonicNonceSource(clock=_StubClock(1700000000.5, 1700000000.1005))

    first = int(source.next_nonce())
    second = int(source.next_nonce())

    assert second == first + 1


def test_monotonic_nonce_follows_clock_when_it_advances() -> None:
    source = MonotonicNonceSource(clock=_StubClock(1700000000.1005, 1700000001.0))

    source.next_nonce()

    assert source.next_nonce() == "1700000001000"


def test_nonce_source_for_strategy() -> None:
    assert isinstance(nonce_source_for("clock"), ClockNonceSource)
    assert isinstance(nonce_source_for("monotonic"), MonotonicNonceSource)

    with pytest.raises(ValueError):
        nonce_source_for("counter")
