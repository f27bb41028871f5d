"""Retrier - Retry orchestration with pluggable strategies and cancellable breakers.

Runs a unit of work until it succeeds, a strategy gives up, or a breaker
closes from another thread. Errors are values: an action returns None on
success or the failure as an exception instance. An action that raises is
captured, never retried, and reported as Recovered.

Quick Start:
    >>> from retrier import CancelScope, run, limit, backoff, BinaryExponential, is_interrupted
    >>>
    >>> def fetch(attempt: int) -> Exception | None:
    ...     try:
    ...         download(url)
    ...     except OSError as e:
    ...         return e
    ...     return None
    >>>
    >>> scope = CancelScope(timeout=30.0)
    >>> err = run(scope, fetch, limit(5), backoff(BinaryExponential(0.1)))
    >>> if is_interrupted(err):
    ...     print("deadline reached or cancelled")

Cancellation-aware actions:
    >>> import threading
    >>> stop = threading.Event()
    >>> err = run_cancellable(stop, lambda signal, attempt: poll(signal), limit(10), delay(1.0))
    >>> # stop.set() from any thread interrupts the wait immediately

Classification:
    >>> err = run(CancelScope(), fetch, limit(3), retry_on(TimeoutError, ConnectionError))
"""

from __future__ import annotations

__version__ = "0.1.0"

# Outcomes
from .foundation.errors import (
    INTERRUPTED,
    Interrupted,
    Outcome,
    RetrierError,
    Recovered,
    is_interrupted,
    is_recovered,
    outcome_of,
    recovered_cause,
)

# Config
from .foundation.config import RetrierSettings, clear_settings_cache, get_settings

# Breakers & cancellation
from .runtime.resilience import Breaker, Signal, as_signal
from .runtime.concurrency import CANCELLED, DEADLINE_EXCEEDED, CancelScope, current_signal, sleep

# Retry
from .runtime.retry import (
    MAX_DELAY,
    Action,
    Algorithm,
    BinaryExponential,
    BlacklistClassifier,
    CancellableAction,
    Classifier,
    Constant,
    DefaultClassifier,
    Deviation,
    Equal,
    Exponential,
    Fibonacci,
    Full,
    Incremental,
    Linear,
    NormalDistribution,
    Strategy,
    Transformation,
    Verdict,
    WhitelistClassifier,
    backoff,
    backoff_with_jitter,
    check_error,
    delay,
    limit,
    retry_on,
    run,
    run_cancellable,
    stop_on,
    wait,
)

# Observability
from .runtime.observability import configure_logging

__all__ = [
    "__version__",
    # Entry points
    "run", "run_cancellable", "Action", "CancellableAction",
    # Outcomes
    "RetrierError", "Interrupted", "INTERRUPTED", "Recovered",
    "is_interrupted", "is_recovered", "recovered_cause", "Outcome", "outcome_of",
    # Strategies
    "Strategy", "limit", "delay", "wait", "backoff", "backoff_with_jitter",
    "check_error", "retry_on", "stop_on",
    # Backoff algorithms
    "Algorithm", "Incremental", "Linear", "Exponential", "BinaryExponential",
    "Fibonacci", "Constant", "MAX_DELAY",
    # Jitter
    "Transformation", "Full", "Equal", "Deviation", "NormalDistribution",
    # Classification
    "Verdict", "Classifier", "DefaultClassifier", "WhitelistClassifier", "BlacklistClassifier",
    # Breakers & cancellation
    "Breaker", "Signal", "as_signal", "CancelScope", "CANCELLED", "DEADLINE_EXCEEDED",
    "current_signal", "sleep",
    # Config & logging
    "RetrierSettings", "get_settings", "clear_settings_cache", "configure_logging",
]
