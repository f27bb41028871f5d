"""Shared fixtures for retrier tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from retrier.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop RETRIER_* variables and reload settings around each test."""
    import os
    for key in [k for k in os.environ if k.startswith("RETRIER_")]:
        monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


class Counter:
    """Action that records attempts and returns a fixed failure."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.attempts: list[int] = []

    @property
    def total(self) -> int:
        return len(self.attempts)

    def __call__(self, attempt: int) -> BaseException | None:
        self.attempts.append(attempt)
        return self.error


@pytest.fixture
def counter() -> type[Counter]:
    return Counter
