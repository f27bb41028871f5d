"""Foundation - Core building blocks for retrier.

Contains: outcome markers and predicates, config.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "RetrierError", "Interrupted", "INTERRUPTED", "Recovered",
    "is_interrupted", "is_recovered", "recovered_cause", "Outcome", "outcome_of",
    # Config
    "RetrierSettings", "RetrySettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("RetrierError", "Interrupted", "INTERRUPTED", "Recovered",
                "is_interrupted", "is_recovered", "recovered_cause", "Outcome", "outcome_of"):
        from . import errors
        return getattr(errors, name)

    if name in ("RetrierSettings", "RetrySettings", "LoggingSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
