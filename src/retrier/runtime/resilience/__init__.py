"""Breaker and signal protocols gating retry attempts."""

from .breaker import Breaker, PolledBreaker, Signal, as_signal, fired

__all__ = ["Breaker", "Signal", "PolledBreaker", "as_signal", "fired"]
