"""
Circuit breaker for per-symbol quote lookups.

A symbol whose quote feed keeps failing at the transport level is skipped for
a while instead of costing a full timeout on every refresh. The pipeline treats
a skipped symbol exactly like an unavailable quote.

States:
- CLOSED: lookups pass through
- OPEN: lookups are skipped until the recovery timeout has elapsed
- HALF_OPEN: one trial lookup decides between CLOSED and OPEN

Usage:
    breaker = QuoteCircuitBreaker(failure_threshold=5, recovery_timeout=60)

    if breaker.allows("RELIANCE"):
        result = await quote_source.get_quote("RELIANCE")
        if isinstance(result, QuoteTransportError):
            breaker.record_failure("RELIANCE", result.detail)
        else:
            breaker.record_success("RELIANCE")
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger()


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class SymbolCircuit:
    """Failure bookkeeping for one symbol."""

    state: CircuitState = CircuitState.CLOSED
    consecutive_failures: int = 0
    total_failures: int = 0
    opened_at: float = 0.0


class QuoteCircuitBreaker:
    """
    Per-symbol circuit breaker.

    Args:
        failure_threshold: Consecutive transport failures before opening
        recovery_timeout: Seconds an open circuit waits before a trial lookup
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self._clock = clock
        self._circuits: dict[str, SymbolCircuit] = {}

    def _circuit(self, symbol: str) -> SymbolCircuit:
        return self._circuits.setdefault(symbol, SymbolCircuit())

    def state(self, symbol: str) -> CircuitState:
        """Current state for symbol, promoting OPEN to HALF_OPEN when due."""
        circuit = self._circuit(symbol)
        if (
            circuit.state == CircuitState.OPEN
            and self._clock() - circuit.opened_at >= self.recovery_timeout
        ):
            circuit.state = CircuitState.HALF_OPEN
            logger.info("Quote circuit half-open", symbol=symbol)
        return circuit.state

    def allows(self, symbol: str) -> bool:
        """Whether a quote lookup for symbol should be attempted."""
        return self.state(symbol) != CircuitState.OPEN

    def record_success(self, symbol: str) -> None:
        """Record a lookup that reached the feed (found or not found)."""
        circuit = self._circuit(symbol)
        if circuit.state == CircuitState.HALF_OPEN:
            logger.info("Quote circuit closed after recovery", symbol=symbol)
        circuit.state = CircuitState.CLOSED
        circuit.consecutive_failures = 0

    def record_failure(self, symbol: str, detail: str | None = None) -> None:
        """Record a transport-level failure (error or timeout)."""
        circuit = self._circuit(symbol)
        circuit.consecutive_failures += 1
        circuit.total_failures += 1

        if circuit.state == CircuitState.HALF_OPEN or (
            circuit.state == CircuitState.CLOSED
            and circuit.consecutive_failures >= self.failure_threshold
        ):
            circuit.state = CircuitState.OPEN
            circuit.opened_at = self._clock()
            logger.warning(
                "Quote circuit opened",
                symbol=symbol,
                consecutive_failures=circuit.consecutive_failures,
                recovery_timeout=self.recovery_timeout,
                error=detail,
            )

    def get_status(self) -> dict[str, Any]:
        """State and failure counts for every tracked symbol."""
        return {
            symbol: {
                "state": self.state(symbol).value,
                "consecutive_failures": circuit.consecutive_failures,
                "total_failures": circuit.total_failures,
            }
            for symbol, circuit in self._circuits.items()
        }

    def reset(self, symbol: str | None = None) -> None:
        """Forget one symbol's history, or every symbol's."""
        if symbol is None:
            self._circuits.clear()
        else:
            self._circuits.pop(symbol, None)
