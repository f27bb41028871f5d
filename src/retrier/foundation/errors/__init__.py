"""Outcome markers and predicates for retry invocations.

- Interrupted/INTERRUPTED: breaker closed or cancellation fired
- Recovered: exception raised by the action, captured with its cause
- Outcome/outcome_of: name the terminal state of an invocation
"""

from .errors import (
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

__all__ = [
    "RetrierError",
    # Markers
    "Interrupted", "INTERRUPTED", "Recovered",
    # Predicates
    "is_interrupted", "is_recovered", "recovered_cause",
    # Outcome naming
    "Outcome", "outcome_of",
]
