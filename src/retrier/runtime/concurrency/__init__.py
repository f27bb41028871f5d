"""Cancellation primitives for blocking retry loops.

Key Components:
    - CancelScope: thread-safe breaker/signal with deadline and parent linking
    - current_signal/bind_signal: signal of the running retry invocation
    - sleep: pause that wakes as soon as the invocation signal fires
"""

from __future__ import annotations

from .scope import (
    CANCELLED,
    DEADLINE_EXCEEDED,
    CancelScope,
    bind_signal,
    current_signal,
    sleep,
)

__all__ = [
    "CancelScope",
    "CANCELLED",
    "DEADLINE_EXCEEDED",
    "bind_signal",
    "current_signal",
    "sleep",
]
