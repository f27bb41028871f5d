"""Backoff algorithms: pure functions from attempt index to delay.

Each algorithm maps a 0-indexed attempt to a delay in seconds:
- Incremental: base + step * attempt
- Linear: unit * attempt
- Exponential: base * factor ^ attempt
- BinaryExponential: base * 2 ^ attempt
- Fibonacci: unit * F(attempt)
- Constant: same delay for every attempt

Algorithms are immutable and stateless, so one instance can be shared
freely. Results never raise on large attempts: they saturate at MAX_DELAY.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Final, Protocol, runtime_checkable

# Largest duration representable as signed 64-bit nanoseconds (~292 years)
MAX_DELAY: Final[float] = (2**63 - 1) / 1e9


@runtime_checkable
class Algorithm(Protocol):
    """Protocol for backoff delay calculation.

    Attempt numbers are 0-indexed. Plain functions with the same
    signature are accepted wherever an Algorithm is.
    """

    def __call__(self, attempt: int) -> float:
        """Delay in seconds for the given attempt."""
        ...


def _check(attempt: int) -> None:
    if attempt < 0:
        raise ValueError(f"attempt must be >= 0, got {attempt}")


def _saturate(delay: float) -> float:
    return MAX_DELAY if delay > MAX_DELAY else delay


def _non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True, slots=True)
class Incremental:
    """Delay = base + step * attempt.

    Attributes:
        base: Delay for attempt 0 in seconds
        step: Seconds added per attempt
    """

    base: float
    step: float

    def __post_init__(self) -> None:
        _non_negative(base=self.base, step=self.step)

    def __call__(self, attempt: int) -> float:
        _check(attempt)
        try:
            return _saturate(self.base + self.step * attempt)
        except OverflowError:
            return MAX_DELAY


@dataclass(frozen=True, slots=True)
class Linear:
    """Delay = unit * attempt (zero for attempt 0)."""

    unit: float

    def __post_init__(self) -> None:
        _non_negative(unit=self.unit)

    def __call__(self, attempt: int) -> float:
        _check(attempt)
        try:
            return _saturate(self.unit * attempt)
        except OverflowError:
            return MAX_DELAY


@dataclass(frozen=True, slots=True)
class Exponential:
    """Delay = base * factor ^ attempt.

    Attributes:
        base: Delay for attempt 0 in seconds
        factor: Growth factor per attempt
    """

    base: float
    factor: float

    def __post_init__(self) -> None:
        _non_negative(base=self.base, factor=self.factor)

    def __call__(self, attempt: int) -> float:
        _check(attempt)
        if self.base == 0:
            return 0.0
        if self.factor == 1:
            return _saturate(self.base)
        try:
            return _saturate(self.base * math.pow(self.factor, attempt))
        except OverflowError:
            if self.factor < 1:
                return 0.0
            # factor ** attempt overflows first for tiny bases
            log_base, log_factor = math.log(self.base), math.log(self.factor)
            if attempt >= (math.log(MAX_DELAY) - log_base) / log_factor:
                return MAX_DELAY
            return math.exp(log_base + attempt * log_factor)


@dataclass(frozen=True, slots=True)
class BinaryExponential(Exponential):
    """Exponential backoff doubling every attempt."""

    factor: float = field(default=2, init=False)


@dataclass(frozen=True, slots=True)
class Fibonacci:
    """Delay = unit * F(attempt), with F(0)=0, F(1)=1.

    Computed iteratively in O(attempt) time and constant space; iteration
    stops early once the delay saturates.
    """

    unit: float

    def __post_init__(self) -> None:
        _non_negative(unit=self.unit)

    def __call__(self, attempt: int) -> float:
        _check(attempt)
        if self.unit == 0:
            return 0.0
        # Exact integer bound; MAX_DELAY / unit is inf for subnormal units
        ceiling = math.floor(Fraction(MAX_DELAY) / Fraction(self.unit))
        a, b = 0, 1
        for _ in range(attempt):
            a, b = b, a + b
            if a > ceiling:
                return MAX_DELAY
        try:
            return _saturate(self.unit * a)
        except OverflowError:
            return _saturate(float(Fraction(self.unit) * a))


@dataclass(frozen=True, slots=True)
class Constant:
    """Fixed delay for every attempt."""

    seconds: float

    def __post_init__(self) -> None:
        _non_negative(seconds=self.seconds)

    def __call__(self, attempt: int) -> float:
        _check(attempt)
        return _saturate(self.seconds)
