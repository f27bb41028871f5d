"""Retry loop: run an action until it succeeds, a strategy gives up, or a signal fires.

Each invocation walks the same state machine:

    Gate-Check → Execute → Evaluate → (Wait →) Gate-Check | Terminal

- Gate-Check: a closed breaker or fired signal ends the loop with
  INTERRUPTED, before the first attempt too.
- Execute: the action runs inside a boundary that turns a raised exception
  into Recovered(cause). Crashes are never retried.
- Evaluate: strategies run left to right with (next attempt, failure); the
  first False ends the loop with that failure. Waiting happens inside the
  strategies themselves and wakes early when the signal fires.

Terminal outcomes are exclusive. When several apply, an interruption wins
over everything else, then a recovered crash, then success or failure.

Only the action is isolated. Exceptions raised by strategies or breakers
propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeAlias

from retrier.foundation.config import get_settings
from retrier.foundation.errors import INTERRUPTED, Recovered
from retrier.runtime.concurrency.scope import CancelScope, bind_signal
from retrier.runtime.resilience.breaker import Breaker, Signal, as_signal, fired

from .strategy import Strategy

logger = logging.getLogger("retrier.retry")

Action: TypeAlias = Callable[[int], BaseException | None]
CancellableAction: TypeAlias = Callable[[Signal, int], BaseException | None]


def run(breaker: Breaker, action: Action, *strategies: Strategy) -> BaseException | None:
    """Retry action until it succeeds, a strategy stops, or breaker closes.

    The breaker is closed when the loop ends, unless it was created with
    reusable=True (see CancelScope), so that it can gate later invocations.

    Args:
        breaker: Gate checked before every attempt and waited on by strategies
        action: Called with the 0-based attempt index; returns None on
                success or the failure as an exception instance
        *strategies: Evaluated after every failed attempt; none = one attempt

    Returns:
        None on success, the last failure, INTERRUPTED, or Recovered

    Example:
        >>> err = run(CancelScope(), lambda attempt: ping(), limit(3), delay(0.5))
        >>> if is_interrupted(err):
        ...     print("stopped from outside")
    """
    try:
        return _loop(breaker, action, strategies)
    finally:
        if not getattr(breaker, "reusable", False):
            breaker.close()


def run_cancellable(signal: Breaker | Signal, action: CancellableAction, *strategies: Strategy) -> BaseException | None:
    """Retry a signal-aware action until it succeeds, a strategy stops, or signal fires.

    The action receives a scope derived from signal. That scope also closes
    when the loop ends, so work the action started can observe the end of the
    invocation. The caller's signal itself is never closed.

    Args:
        signal: Cancellation signal (threading.Event, CancelScope, or any Breaker)
        action: Called with (scope, attempt); returns None or the failure
        *strategies: Evaluated after every failed attempt; none = one attempt

    Returns:
        None on success, the last failure, INTERRUPTED, or Recovered
    """
    with CancelScope(parent=signal) as scope:
        return _loop(scope, lambda attempt: action(scope, attempt), strategies)

def _interrupted() -> BaseException:
    # Shared sentinel: drop frames left behind by a caller that raised it
    return INTERRUPTED.with_traceback(None)


def _loop(gate: Breaker | Signal, action: Action, strategies: Sequence[Strategy]) -> BaseException | None:
    log_attempts = get_settings().retry.log_attempts
    attempt = 0
    with bind_signal(as_signal(gate)):
        while True:
            if fired(gate):
                logger.info("Interrupted before attempt %d", attempt)
                return _interrupted()

            try:
                err = action(attempt)
            except Exception as exc:
                logger.warning("Action raised at attempt %d, not retrying", attempt, exc_info=exc)
                if fired(gate):
                    logger.info("Interrupted during attempt %d", attempt)
                    return _interrupted()
                return Recovered(exc, attempt)

            if fired(gate):
                logger.info("Interrupted during attempt %d", attempt)
                return _interrupted()
            if err is None:
                return None
            if log_attempts:
                logger.debug("Attempt %d failed: %r", attempt, err)

            attempt += 1
            if not strategies:
                return err
            for strategy in strategies:
                if not strategy(attempt, err):
                    if fired(gate):
                        logger.info("Interrupted while waiting for attempt %d", attempt)
                        return _interrupted()
                    logger.debug("Giving up after %d attempts", attempt)
                    return err
