from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")
logger = logging.getLogger(__name__)


class CircuitOpenError(Exception):
    """Raised when calls are blocked by an open circuit."""


@dataclass
class CircuitBreakerState:
    failure_count: int = 0
    opened_at_seconds: float | None = None


class CircuitBreaker:
    """Guards outlet directory calls.

    Exceptions listed in ``ignored_exceptions`` describe a bad request rather
    than an unhealthy directory, so they propagate without counting as failures.
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        recovery_timeout_seconds: int = 30,
        ignored_exceptions: tuple[type[BaseException], ...] = (),
    ) -> None:
        self._failure_threshold = failure_threshold
        self._recovery_timeout_seconds = recovery_timeout_seconds
        self._ignored_exceptions = ignored_exceptions
        self._state = CircuitBreakerState()

    @property
    def is_open(self) -> bool:
        return self._state.opened_at_seconds is not None

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        now_seconds: float,
    ) -> T:
        if self._blocks(now_seconds):
            logger.warning("circuit_open", extra={"component": "outlet_directory", "now_seconds": now_seconds})
            raise CircuitOpenError("circuit is open")

        try:
            result = await operation()
        except self._ignored_exceptions:
            raise
        except Exception:
            self._record_failure(now_seconds)
            raise
        self._reset()
        return result

    def _blocks(self, now_seconds: float) -> bool:
        opened_at = self._state.opened_at_seconds
        if opened_at is None:
            return False
        if now_seconds - opened_at >= self._recovery_timeout_seconds:
            self._reset()
            logger.info("circuit_half_open", extra={"component": "outlet_directory"})
            return False
        return True

    def _record_failure(self, now_seconds: float) -> None:
        self._state.failure_count += 1
        if self._state.failure_count < self._failure_threshold:
            return
        self._state.opened_at_seconds = now_seconds
        logger.error(
            "circuit_opened",
            extra={
                "component": "outlet_directory",
                "failure_count": self._state.failure_count,
                "opened_at_seconds": now_seconds,
            },
        )

    def _reset(self) -> None:
        self._state = CircuitBreakerState()
