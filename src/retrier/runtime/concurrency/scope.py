"""Thread-safe cancellation scopes for blocking retry loops.

CancelScope is the concrete breaker shipped with retrier. It is both a
Breaker (is_open/close) and a Signal (is_set/wait), can carry a deadline,
and can be linked to a parent so that cancelling the parent cancels every
child immediately.

The scope of the running retry invocation is published through a context
variable so strategies can wait on it without having it passed in.

Example:
    >>> with CancelScope(timeout=5.0) as scope:
    ...     err = run(scope, action, limit(10), backoff(Linear(0.1)))
    ...     if scope.reason == DEADLINE_EXCEEDED:
    ...         print("Timed out!")
"""

from __future__ import annotations

import contextvars
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from retrier.foundation.config import get_settings
from retrier.runtime.resilience.breaker import Breaker, Signal, as_signal, fired

if TYPE_CHECKING:
    from types import TracebackType

CANCELLED: Final = "cancelled"
DEADLINE_EXCEEDED: Final = "deadline exceeded"

# Signal of the retry invocation running in the current context
_current_signal: contextvars.ContextVar[Signal | None] = contextvars.ContextVar(
    "current_signal", default=None
)


@dataclass(slots=True, eq=False)
class CancelScope:
    """Cancellable gate with optional deadline and parent.

    Closing is idempotent and safe from any thread, including after the
    retry invocation that used the scope has returned. Once closed, a scope
    never reopens.

    Args:
        timeout: Seconds until the scope closes itself (None = no deadline)
        parent: Breaker or Signal whose firing also closes this scope
        reusable: When True, run() leaves the scope open after finishing
                  so it can gate further invocations
    """

    timeout: float | None = None
    parent: Breaker | Signal | None = field(default=None, repr=False)
    reusable: bool = False
    _event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _deadline: float | None = field(default=None, init=False, repr=False)
    _reason: str | None = field(default=None, init=False, repr=False)
    _children: list[CancelScope] = field(default_factory=list, init=False, repr=False)
    _poll: float | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.timeout is not None:
            if self.timeout < 0:
                raise ValueError(f"timeout must be >= 0, got {self.timeout}")
            self._deadline = time.monotonic() + self.timeout
        match self.parent:
            case None:
                pass
            case CancelScope() as parent:
                if parent._deadline is not None and (self._deadline is None or parent._deadline < self._deadline):
                    self._deadline = parent._deadline
                self._poll = parent._poll
                parent._adopt(self)
            case _:
                as_signal(self.parent)  # Rejects objects that can't be observed
                self._poll = get_settings().retry.poll_interval

    @classmethod
    def closed(cls) -> CancelScope:
        """A scope that is closed from the start."""
        scope = cls()
        scope.close()
        return scope

    # ─────────────────────────────────────────────────────────────────
    # Linking
    # ─────────────────────────────────────────────────────────────────

    def child(self, timeout: float | None = None, *, reusable: bool = False) -> CancelScope:
        """Create a scope that closes when this one does."""
        return CancelScope(timeout, parent=self, reusable=reusable)

    def _adopt(self, child: CancelScope) -> None:
        with self._lock:
            if self._reason is None:
                self._children.append(child)
                return
            reason = self._reason
        child._close(reason)

    def _release(self, child: CancelScope) -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def _close(self, reason: str) -> None:
        with self._lock:
            if self._reason is not None:
                return
            self._reason = reason
            children, self._children = self._children, []
        self._event.set()
        for c in children:
            c._close(reason)
        if isinstance(self.parent, CancelScope):
            self.parent._release(self)

    def _expired(self) -> bool:
        """Whether the scope is closed, closing it first if a deadline or polled ancestor says so."""
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._close(DEADLINE_EXCEEDED)
            return True
        if self._poll is None:
            return False
        # A polled ancestor closes only when checked
        parent = self.parent
        if isinstance(parent, CancelScope):
            if not parent._expired():
                return False
            self._close(parent._reason or CANCELLED)
            return True
        if fired(parent):  # type: ignore[arg-type]
            self._close(CANCELLED)
            return True
        return False

    # ─────────────────────────────────────────────────────────────────
    # Breaker / Signal API
    # ─────────────────────────────────────────────────────────────────

    def is_open(self) -> bool:
        """True while attempts are permitted."""
        return not self._expired()

    def is_set(self) -> bool:
        """True once the scope closed, was cancelled or its deadline passed."""
        return self._expired()

    def close(self) -> None:
        """Close the scope. Idempotent and thread-safe."""
        self._close(CANCELLED)

    cancel = close

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the scope closes or timeout seconds elapse.

        Returns:
            True if the scope is closed, False if the timeout elapsed first.
            A close that lands exactly at the timeout still returns True.
        """
        end = None if timeout is None else time.monotonic() + max(timeout, 0.0)
        while not self._expired():
            now = time.monotonic()
            if end is not None and now >= end:
                return False
            limits = [t - now for t in (end, self._deadline) if t is not None]
            if self._poll is not None:
                limits.append(self._poll)
            self._event.wait(min(limits) if limits else None)
        return True

    # ─────────────────────────────────────────────────────────────────
    # Observability Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def reason(self) -> str | None:
        """Why the scope closed: CANCELLED, DEADLINE_EXCEEDED, or None while open."""
        self._expired()
        return self._reason

    @property
    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def __enter__(self) -> CancelScope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


# ─────────────────────────────────────────────────────────────────────────────
# Invocation signal
# ─────────────────────────────────────────────────────────────────────────────


def current_signal() -> Signal | None:
    """Signal of the retry invocation running in this context, if any."""
    return _current_signal.get()


@contextmanager
def bind_signal(signal: Signal) -> Iterator[Signal]:
    """Publish signal as the current invocation signal for the duration of the block."""
    token = _current_signal.set(signal)
    try:
        yield signal
    finally:
        _current_signal.reset(token)


def sleep(seconds: float) -> bool:
    """Pause for seconds unless the current invocation signal fires first.

    Returns:
        True if the full pause elapsed, False if it was interrupted.
        Outside a retry invocation this is a plain time.sleep().
    """
    if (signal := _current_signal.get()) is None:
        time.sleep(max(seconds, 0.0))
        return True
    return not signal.wait(max(seconds, 0.0)) and not signal.is_set()
