"""Error classification consulted by check_error strategies.

A classifier maps the failure returned by an action to a verdict:
    SUCCEED: nothing to retry (no failure)
    RETRY: transient, another attempt may succeed
    FAIL: permanent, stop retrying

Error lists match by exception type (isinstance) or, for instances, by
type and message so that module-level sentinel errors can be listed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, TypeAlias, runtime_checkable

ErrorSpec: TypeAlias = "type[BaseException] | BaseException"


class Verdict(StrEnum):
    """Decision for a failed attempt."""
    SUCCEED = "succeed"
    RETRY = "retry"
    FAIL = "fail"


@runtime_checkable
class Classifier(Protocol):
    """Protocol for mapping a failure to a verdict."""
    def classify(self, err: BaseException | None) -> Verdict: ...


def _matches(err: BaseException, spec: ErrorSpec) -> bool:
    if isinstance(spec, type):
        return isinstance(err, spec)
    return err is spec or (type(err) is type(spec) and err.args == spec.args)


@dataclass(frozen=True, slots=True)
class DefaultClassifier:
    """Retry every failure."""

    def classify(self, err: BaseException | None) -> Verdict:
        return Verdict.SUCCEED if err is None else Verdict.RETRY


@dataclass(frozen=True, slots=True)
class WhitelistClassifier:
    """Retry only the listed errors; everything else fails."""

    errors: tuple[ErrorSpec, ...] = ()

    def __init__(self, *errors: ErrorSpec) -> None:
        object.__setattr__(self, "errors", errors)

    def classify(self, err: BaseException | None) -> Verdict:
        if err is None:
            return Verdict.SUCCEED
        return Verdict.RETRY if any(_matches(err, e) for e in self.errors) else Verdict.FAIL


@dataclass(frozen=True, slots=True)
class BlacklistClassifier:
    """Fail on the listed errors; retry everything else."""

    errors: tuple[ErrorSpec, ...] = ()

    def __init__(self, *errors: ErrorSpec) -> None:
        object.__setattr__(self, "errors", errors)

    def classify(self, err: BaseException | None) -> Verdict:
        if err is None:
            return Verdict.SUCCEED
        return Verdict.FAIL if any(_matches(err, e) for e in self.errors) else Verdict.RETRY


DEFAULT_CLASSIFIER = DefaultClassifier()
