"""Runtime - Execution flow, control, and monitoring.

Contains: retry loop and strategies, breakers, cancellation scopes, observability.
"""

from __future__ import annotations

__all__ = [
    # Retry
    "run", "run_cancellable", "Action", "CancellableAction",
    "Strategy", "limit", "delay", "wait", "backoff", "backoff_with_jitter",
    "check_error", "retry_on", "stop_on",
    "Algorithm", "Incremental", "Linear", "Exponential", "BinaryExponential", "Fibonacci", "Constant",
    "Transformation", "Full", "Equal", "Deviation", "NormalDistribution",
    "Verdict", "Classifier", "DefaultClassifier", "WhitelistClassifier", "BlacklistClassifier",
    # Resilience
    "Breaker", "Signal", "as_signal",
    # Concurrency
    "CancelScope", "current_signal", "sleep",
    # Observability
    "configure_logging",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("Breaker", "Signal", "as_signal"):
        from . import resilience
        return getattr(resilience, name)

    if name in ("CancelScope", "current_signal", "sleep"):
        from . import concurrency
        return getattr(concurrency, name)

    if name == "configure_logging":
        from . import observability
        return observability.configure_logging

    if name in __all__:
        from . import retry
        return getattr(retry, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
