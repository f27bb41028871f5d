"""Strategies: predicates deciding whether the retry loop continues.

A strategy is called after a failed attempt with the index of the attempt
the loop is about to make and the failure it just got:

    strategy(attempt, err) -> bool

The loop evaluates strategies left to right and stops at the first False.
Waiting strategies pause inside the call; the pause wakes as soon as the
invocation's breaker closes or its signal fires, and the strategy then
returns False so the loop can report the interruption.

Example:
    >>> err = run(
    ...     CancelScope(timeout=30.0),
    ...     fetch,
    ...     limit(5),
    ...     check_error(WhitelistClassifier(TimeoutError, ConnectionError)),
    ...     backoff_with_jitter(BinaryExponential(0.1), Full()),
    ... )

Strategies that keep state (closures over counters, for example) belong to
one invocation at a time; build a fresh list for concurrent invocations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from retrier.runtime.concurrency.scope import sleep

from .backoff import Algorithm
from .classifier import DEFAULT_CLASSIFIER, BlacklistClassifier, Classifier, ErrorSpec, Verdict, WhitelistClassifier
from .jitter import Transformation


@runtime_checkable
class Strategy(Protocol):
    """Predicate over (attempt, last failure) deciding whether to continue."""
    def __call__(self, attempt: int, err: BaseException | None) -> bool: ...


def limit(attempts: int) -> Strategy:
    """Cap the total number of attempts at attempts."""
    if attempts < 0:
        raise ValueError(f"attempts must be >= 0, got {attempts}")

    def strategy(attempt: int, err: BaseException | None) -> bool:
        return attempt < attempts
    return strategy


def delay(seconds: float) -> Strategy:
    """Pause a fixed number of seconds before every further attempt."""
    if seconds < 0:
        raise ValueError(f"seconds must be >= 0, got {seconds}")

    def strategy(attempt: int, err: BaseException | None) -> bool:
        return sleep(seconds)
    return strategy


def wait(*seconds: float) -> Strategy:
    """Pause seconds[n] before the (n+1)-th retry; the last entry repeats.

    With no durations this never pauses.
    """
    if any(s < 0 for s in seconds):
        raise ValueError(f"durations must be >= 0, got {seconds}")

    def strategy(attempt: int, err: BaseException | None) -> bool:
        if not seconds:
            return True
        return sleep(seconds[min(max(attempt - 1, 0), len(seconds) - 1)])
    return strategy


def backoff(algorithm: Algorithm | Callable[[int], float]) -> Strategy:
    """Pause algorithm(attempt) seconds before every further attempt."""

    def strategy(attempt: int, err: BaseException | None) -> bool:
        return sleep(algorithm(attempt))
    return strategy


def backoff_with_jitter(
    algorithm: Algorithm | Callable[[int], float],
    transformation: Transformation | Callable[[float], float],
) -> Strategy:
    """Pause a jittered algorithm(attempt) seconds before every further attempt."""

    def strategy(attempt: int, err: BaseException | None) -> bool:
        return sleep(transformation(algorithm(attempt)))
    return strategy


def check_error(classifier: Classifier = DEFAULT_CLASSIFIER) -> Strategy:
    """Continue only while the classifier says the failure is worth retrying."""

    def strategy(attempt: int, err: BaseException | None) -> bool:
        return classifier.classify(err) is Verdict.RETRY
    return strategy


def retry_on(*errors: ErrorSpec) -> Strategy:
    """Continue only for the listed errors."""
    return check_error(WhitelistClassifier(*errors))


def stop_on(*errors: ErrorSpec) -> Strategy:
    """Stop on the listed errors, continue for everything else."""
    return check_error(BlacklistClassifier(*errors))
