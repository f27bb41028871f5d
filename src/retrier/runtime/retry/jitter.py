"""Jitter transformations applied to backoff delays.

Each transformation maps a delay in seconds to a randomized delay, spreading
retriers that would otherwise wake in lockstep:
- Full: uniform in [0, d]
- Equal: d/2 plus uniform in [0, d/2]
- Deviation: uniform in [d - f*d, d + f*d]
- NormalDistribution: gaussian centred on d with deviation s*d

Pass a seeded random.Random for reproducible delays.

Reference: https://aws.amazon.com/blogs/architecture/exponential-backoff-and-jitter/
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Transformation(Protocol):
    """Protocol for delay randomization."""

    def __call__(self, delay: float) -> float: ...


@dataclass(frozen=True, slots=True)
class Full:
    """Full jitter: uniform in [0, delay]."""

    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __call__(self, delay: float) -> float:
        return self.rng.uniform(0.0, delay)


@dataclass(frozen=True, slots=True)
class Equal:
    """Equal jitter: keep half the delay, randomize the other half."""

    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __call__(self, delay: float) -> float:
        half = delay / 2
        return half + self.rng.uniform(0.0, half)


@dataclass(frozen=True, slots=True)
class Deviation:
    """Uniform jitter within factor of the delay, floored at zero.

    Attributes:
        factor: Fractional deviation (0.1 = ±10%)
    """

    factor: float = 0.1
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self) -> None:
        if self.factor < 0:
            raise ValueError(f"factor must be >= 0, got {self.factor}")

    def __call__(self, delay: float) -> float:
        spread = delay * self.factor
        return max(0.0, self.rng.uniform(delay - spread, delay + spread))


@dataclass(frozen=True, slots=True)
class NormalDistribution:
    """Gaussian jitter centred on the delay, floored at zero.

    Attributes:
        stddev: Standard deviation as a fraction of the delay
    """

    stddev: float = 0.1
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self) -> None:
        if self.stddev < 0:
            raise ValueError(f"stddev must be >= 0, got {self.stddev}")

    def __call__(self, delay: float) -> float:
        return max(0.0, self.rng.gauss(delay, delay * self.stddev))
