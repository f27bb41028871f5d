"""Breaker and signal protocols for interrupting a retry sequence.

A breaker is a gate with two observable states:
    OPEN → close() → CLOSED (terminal, never reopens)

Attempts are permitted only while the gate is open. The retry loop checks
it before every attempt and waits on it while a strategy pauses, so closing
it from another thread stops the sequence at the next suspension point.

Two capability sets are distinguished:
    - Breaker: is_open() + close(), owned by the caller of run()
    - Signal: is_set() + wait(), read-only view used for waiting

threading.Event already satisfies Signal. Objects that only implement
Breaker are adapted with as_signal(), which polls is_open().
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from retrier.foundation.config import get_settings


@runtime_checkable
class Breaker(Protocol):
    """Cancellable gate controlling whether further attempts are permitted."""
    def is_open(self) -> bool: ...
    def close(self) -> None: ...


@runtime_checkable
class Signal(Protocol):
    """Read-only cancellation capability.

    is_set() reports whether the signal has fired. wait(timeout) blocks until
    the signal fires or timeout seconds elapse and returns is_set().
    """
    def is_set(self) -> bool: ...
    def wait(self, timeout: float | None = None) -> bool: ...


@dataclass(slots=True, frozen=True)
class PolledBreaker:
    """Signal view over a breaker that cannot be waited on.

    Polls is_open() every interval seconds while waiting.
    """

    breaker: Breaker
    interval: float = 0.01

    def is_set(self) -> bool:
        return not self.breaker.is_open()

    def wait(self, timeout: float | None = None) -> bool:
        end = None if timeout is None else time.monotonic() + max(timeout, 0.0)
        while not self.is_set():
            now = time.monotonic()
            if end is not None and now >= end:
                return False
            time.sleep(self.interval if end is None else min(self.interval, end - now))
        return True


def as_signal(obj: Breaker | Signal) -> Signal:
    """Return a Signal view of obj, adapting plain breakers by polling."""
    if isinstance(obj, Signal):
        return obj
    if isinstance(obj, Breaker):
        return PolledBreaker(obj, get_settings().retry.poll_interval)
    raise TypeError(f"{type(obj).__name__} is neither a Breaker nor a Signal")


def fired(obj: Breaker | Signal) -> bool:
    """Whether obj no longer permits attempts."""
    return obj.is_set() if isinstance(obj, Signal) else not obj.is_open()
