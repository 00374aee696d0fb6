"""Api-Nonce 생성기.

기본값은 현재 epoch 밀리초 문자열입니다. 같은 밀리초에 두 번 호출하면 같은 값이
나오는 한계가 있으며, MonotonicNonceSource는 시계가 멈춰 있으면 직전 값 + 1을 냅니다.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

Clock = Callable[[], float]


class NonceSource(Protocol):
    def next_nonce(self) -> str: ...


def epoch_millis(clock: Clock = time.time) -> int:
    return int(clock() * 1000)


class ClockNonceSource:
    """벽시계 밀리초 nonce (상태 없음)"""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock

    def next_nonce(self) -> str:
        return str(epoch_millis(self._clock))


class MonotonicNonceSource:
    """시계 + 단조 증가 카운터.

    같은 인스턴스에서 발급한 nonce는 항상 직전보다 큽니다.
    시계가 뒤로 가도 감소하지 않습니다.
    """

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._last = 0

    def next_nonce(self) -> str:
        now = epoch_millis(self._clock)
        self._last = now if now > self._last else self._last + 1
        return str(self._last)


def nonce_source_for(strategy: str, clock: Clock = time.time) -> NonceSource:
    """설정값(BITHUMB_NONCE_STRATEGY)으로 nonce 생성기를 선택합니다."""
    match strategy:
        case "clock":
            return ClockNonceSource(clock)
        case "monotonic":
            return MonotonicNonceSource(clock)
        case _:
            raise ValueError(f"unknown nonce strategy: {strategy}")
