"""Tests for backoff algorithms and jitter transformations.

Validates:
- Base case at attempt 0
- Closed-form sequences
- Saturation instead of overflow
- Jitter bounds
"""

from __future__ import annotations

import random
import time

import pytest

from retrier.runtime.retry import (
    MAX_DELAY,
    Algorithm,
    BinaryExponential,
    Constant,
    Deviation,
    Equal,
    Exponential,
    Fibonacci,
    Full,
    Incremental,
    Linear,
    NormalDistribution,
)

MS = 0.001


# ═════════════════════════════════════════════════════════════════════════════
# Algorithms
# ═════════════════════════════════════════════════════════════════════════════


def test_incremental() -> None:
    algorithm = Incremental(MS, 1e-9)
    for i in range(10):
        assert algorithm(i) == MS + 1e-9 * i


def test_linear() -> None:
    algorithm = Linear(MS)
    for i in range(10):
        assert algorithm(i) == MS * i


def test_exponential() -> None:
    algorithm = Exponential(1.0, 3)
    for i in range(10):
        assert algorithm(i) == 1.0 * 3**i


def test_exponential_integral_inputs_are_exact() -> None:
    algorithm = Exponential(5, 3)
    assert [algorithm(i) for i in range(10)] == [5 * 3**i for i in range(10)]


def test_binary_exponential() -> None:
    algorithm = BinaryExponential(1.0)
    assert algorithm.factor == 2
    for i in range(10):
        assert algorithm(i) == 1.0 * 2**i


def test_fibonacci_sequence() -> None:
    sequence = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144, 233]
    algorithm = Fibonacci(MS)
    for i, n in enumerate(sequence):
        assert algorithm(i) == MS * n


def test_fibonacci_large_attempt_is_fast() -> None:
    start = time.monotonic()
    assert Fibonacci(MS)(50) == MS * 12586269025
    assert time.monotonic() - start < 0.1


def test_constant() -> None:
    algorithm = Constant(0.25)
    assert {algorithm(i) for i in range(10)} == {0.25}


@pytest.mark.parametrize(
    ("algorithm", "expected"),
    [
        (Incremental(0.5, 0.1), 0.5),
        (Linear(0.5), 0.0),
        (Exponential(0.5, 3), 0.5),
        (BinaryExponential(0.5), 0.5),
        (Fibonacci(0.5), 0.0),
        (Constant(0.5), 0.5),
    ],
)
def test_attempt_zero_is_base_case(algorithm: Algorithm, expected: float) -> None:
    assert algorithm(0) == expected


@pytest.mark.parametrize(
    "algorithm",
    [
        Incremental(1.0, 1.0),
        Linear(1.0),
        Exponential(1.0, 3),
        BinaryExponential(1.0),
        Fibonacci(1.0),
        Exponential(5e-324, 3),
        Fibonacci(5e-324),
    ],
)
def test_huge_attempts_saturate(algorithm: Algorithm) -> None:
    assert algorithm(10**12) == MAX_DELAY
    assert algorithm(10**400) == MAX_DELAY


def test_subnormal_unit_fibonacci_stays_total() -> None:
    algorithm = Fibonacci(5e-324)
    assert algorithm(200_000) == MAX_DELAY
    # F(1550) no longer fits a float but unit * F(1550) is a few seconds
    assert 0.0 < algorithm(1550) < algorithm(1551) < MAX_DELAY


def test_subnormal_base_exponential_stays_finite() -> None:
    # 3**650 overflows a float on its own, the scaled delay does not
    delay = Exponential(5e-324, 3)(650)
    assert 0.0 < delay < 1.0


def test_shrinking_exponential_underflows_to_zero() -> None:
    assert Exponential(1.0, 0.5)(10**400) == 0.0
    assert Exponential(1.0, 1)(10**400) == 1.0


def test_zero_unit_never_grows() -> None:
    assert Fibonacci(0)(10**6) == 0.0
    assert Exponential(0, 2)(10**6) == 0.0


def test_algorithms_are_protocol_instances() -> None:
    assert isinstance(Linear(1.0), Algorithm)
    assert isinstance(Fibonacci(1.0), Algorithm)


def test_negative_attempt_rejected() -> None:
    with pytest.raises(ValueError, match="attempt"):
        Linear(1.0)(-1)


def test_negative_parameters_rejected() -> None:
    with pytest.raises(ValueError, match="base"):
        Exponential(-1.0, 2)
    with pytest.raises(ValueError, match="unit"):
        Fibonacci(-0.1)


def test_algorithms_are_immutable() -> None:
    algorithm = Linear(1.0)
    with pytest.raises(AttributeError):
        algorithm.unit = 2.0  # type: ignore[misc]


# ═════════════════════════════════════════════════════════════════════════════
# Jitter
# ═════════════════════════════════════════════════════════════════════════════


def test_full_jitter_bounds() -> None:
    jitter = Full(random.Random(1))
    assert all(0.0 <= jitter(2.0) <= 2.0 for _ in range(200))


def test_equal_jitter_bounds() -> None:
    jitter = Equal(random.Random(2))
    assert all(1.0 <= jitter(2.0) <= 2.0 for _ in range(200))


def test_deviation_bounds() -> None:
    jitter = Deviation(0.25, random.Random(3))
    assert all(1.5 <= jitter(2.0) <= 2.5 for _ in range(200))


def test_normal_distribution_never_negative() -> None:
    jitter = NormalDistribution(5.0, random.Random(4))
    assert all(jitter(1.0) >= 0.0 for _ in range(200))


def test_seeded_jitter_is_reproducible() -> None:
    a, b = Full(random.Random(42)), Full(random.Random(42))
    assert [a(1.0) for _ in range(5)] == [b(1.0) for _ in range(5)]


def test_jitter_of_zero_delay_is_zero() -> None:
    for jitter in (Full(), Equal(), Deviation(), NormalDistribution()):
        assert jitter(0.0) == 0.0
