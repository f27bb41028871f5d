"""Terminal failure markers produced by the retry loop.

The loop treats errors as values: an action returns ``None`` on success or an
exception instance on failure. Two extra markers distinguish outcomes the
caller did not produce itself:

- Interrupted: the breaker closed or the cancellation signal fired
- Recovered: the action raised instead of returning, the cause is kept
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class RetrierError(Exception):
    """Base class for errors produced by retrier itself."""


class Interrupted(RetrierError):
    """Returned (never raised) when a retry sequence is interrupted.

    Compare with :func:`is_interrupted`, never by message.

    INTERRUPTED is one shared instance. The retry loop clears its
    ``__traceback__`` each time it returns it, so frames from a caller that
    raised it earlier do not leak into later invocations.
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("interrupted")

    def __str__(self) -> str:
        return "interrupted"

    def __repr__(self) -> str:
        return "INTERRUPTED"


INTERRUPTED: Final[Interrupted] = Interrupted()


class Recovered(RetrierError):
    """An exception raised by the action, captured by the retry loop.

    Attributes:
        cause: The original exception raised by the action
        attempt: Attempt index at which the action raised
    """

    __slots__ = ("cause", "attempt")

    def __init__(self, cause: BaseException, attempt: int = 0) -> None:
        self.cause = cause
        self.attempt = attempt
        super().__init__(f"unexpected {type(cause).__name__} at attempt {attempt}: {cause}")

    def __repr__(self) -> str:
        return f"Recovered({self.cause!r}, attempt={self.attempt})"


class Outcome(StrEnum):
    """Terminal state of one retry invocation."""
    SUCCESS = "success"
    FAILURE = "failure"
    INTERRUPTED = "interrupted"
    RECOVERED = "recovered"


def is_interrupted(err: BaseException | None) -> bool:
    """Whether err marks an interrupted retry sequence."""
    return isinstance(err, Interrupted)


def is_recovered(err: BaseException | None) -> bool:
    """Whether err wraps an exception raised by the action."""
    return isinstance(err, Recovered)


def recovered_cause(err: BaseException | None) -> BaseException | None:
    """Original exception raised by the action, or None for any other outcome."""
    return err.cause if isinstance(err, Recovered) else None


def outcome_of(err: BaseException | None) -> Outcome:
    """Name the terminal state an entry point returned."""
    if err is None:
        return Outcome.SUCCESS
    if isinstance(err, Interrupted):
        return Outcome.INTERRUPTED
    if isinstance(err, Recovered):
        return Outcome.RECOVERED
    return Outcome.FAILURE
