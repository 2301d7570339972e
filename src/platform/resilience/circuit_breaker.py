"""
Circuit Breaker

Three-state protective wrapper around an unreliable downstream call::

    CLOSED ──(failure_threshold failures within monitoring_period)──> OPEN
    OPEN ──(reset_timeout elapsed, next call)──> HALF_OPEN
    HALF_OPEN ──(success_threshold consecutive successes)──> CLOSED
    HALF_OPEN ──(any failure)──> OPEN

One instance guards one downstream resource. Instances are created by the DI
container and handed to callers explicitly.
"""

from collections.abc import Awaitable, Callable
from enum import StrEnum
import time
from typing import TypeVar

from src.platform.exception.exceptions import CircuitOpenError
from src.platform.logging.loguru_io import Logger


_T = TypeVar('_T')


class CircuitState(StrEnum):
    CLOSED = 'CLOSED'
    OPEN = 'OPEN'
    HALF_OPEN = 'HALF_OPEN'


class CircuitBreaker:
    def __init__(
        self,
        *,
        name: str,
        failure_threshold: int = 5,
        reset_timeout: float = 60.0,
        monitoring_period: float = 60.0,
        success_threshold: int = 2,
        clock: Callable[[], float] = time.monotonic,
        on_state_change: Callable[[str, CircuitState], None] | None = None,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError('failure_threshold must be at least 1')
        if success_threshold < 1:
            raise ValueError('success_threshold must be at least 1')

        self.name = name
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self.monitoring_period = monitoring_period
        self.success_threshold = success_threshold
        self._clock = clock
        self._on_state_change = on_state_change

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time: float | None = None
        self._next_attempt_time = 0.0

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    async def execute(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        if self._state == CircuitState.OPEN:
            if self._clock() < self._next_attempt_time:
                raise CircuitOpenError(self.name)
            self._transition_to(CircuitState.HALF_OPEN)

        try:
            result = await fn()
        except Exception:
            self._on_failure()
            raise

        self._on_success()
        return result

    def reset(self) -> None:
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time = None
        self._next_attempt_time = 0.0
        self._transition_to(CircuitState.CLOSED)

    def _on_success(self) -> None:
        self._failure_count = 0
        if self._state == CircuitState.HALF_OPEN:
            self._success_count += 1
            if self._success_count >= self.success_threshold:
                self._transition_to(CircuitState.CLOSED)

    def _on_failure(self) -> None:
        now = self._clock()

        # Stale failures outside the monitoring window do not count towards opening
        if (
            self._last_failure_time is not None
            and now - self._last_failure_time > self.monitoring_period
        ):
            self._failure_count = 0

        self._failure_count += 1
        self._last_failure_time = now

        if self._state == CircuitState.HALF_OPEN:
            self._open(now)
        elif self._failure_count >= self.failure_threshold:
            self._open(now)

    def _open(self, now: float) -> None:
        self._next_attempt_time = now + self.reset_timeout
        self._transition_to(CircuitState.OPEN)
        Logger.base.warning(
            f'⚡ [CIRCUIT] {self.name} OPEN after {self._failure_count} failures, '
            f'retry in {self.reset_timeout}s'
        )

    def _transition_to(self, new_state: CircuitState) -> None:
        old_state = self._state
        if old_state == new_state:
            return

        self._state = new_state
        self._success_count = 0
        if new_state == CircuitState.CLOSED:
            self._failure_count = 0

        Logger.base.info(f'🔀 [CIRCUIT] {self.name}: {old_state} -> {new_state}')
        if self._on_state_change:
            self._on_state_change(self.name, new_state)
