"""Retry loop, strategies and backoff algorithms.

Example:
    >>> from retrier.runtime.retry import run, limit, backoff, Fibonacci
    >>> from retrier.runtime.concurrency import CancelScope
    >>>
    >>> def send(attempt: int) -> Exception | None:
    ...     try:
    ...         client.send(payload)
    ...     except ConnectionError as e:
    ...         return e
    ...     return None
    >>>
    >>> err = run(CancelScope(timeout=60.0), send, limit(5), backoff(Fibonacci(0.1)))
"""

from .backoff import (
    MAX_DELAY,
    Algorithm,
    BinaryExponential,
    Constant,
    Exponential,
    Fibonacci,
    Incremental,
    Linear,
)
from .classifier import (
    DEFAULT_CLASSIFIER,
    BlacklistClassifier,
    Classifier,
    DefaultClassifier,
    Verdict,
    WhitelistClassifier,
)
from .execute import Action, CancellableAction, run, run_cancellable
from .jitter import Deviation, Equal, Full, NormalDistribution, Transformation
from .strategy import (
    Strategy,
    backoff,
    backoff_with_jitter,
    check_error,
    delay,
    limit,
    retry_on,
    stop_on,
    wait,
)

__all__ = [
    # Backoff algorithms
    "Algorithm", "Incremental", "Linear", "Exponential", "BinaryExponential",
    "Fibonacci", "Constant", "MAX_DELAY",
    # Jitter
    "Transformation", "Full", "Equal", "Deviation", "NormalDistribution",
    # Classification
    "Verdict", "Classifier", "DefaultClassifier", "WhitelistClassifier",
    "BlacklistClassifier", "DEFAULT_CLASSIFIER",
    # Strategies
    "Strategy", "limit", "delay", "wait", "backoff", "backoff_with_jitter",
    "check_error", "retry_on", "stop_on",
    # Execution
    "Action", "CancellableAction", "run", "run_cancellable",
]
