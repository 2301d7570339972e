from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio
import attrs

from src.platform.exception.exceptions import CustomBaseError, TransientInfrastructureError
from src.platform.logging.loguru_io import Logger


_T = TypeVar('_T')

_TRANSIENT_MESSAGE_MARKERS = ('network', 'timeout', 'timed out', 'connection reset')


def _always_retry(error: Exception) -> bool:
    return True


def is_retryable_error(error: Exception) -> bool:
    """
    Timeouts, transient network conditions and 5xx-class failures are retryable;
    validation and other 4xx-class failures are not.
    """
    if isinstance(error, (TimeoutError, ConnectionError, TransientInfrastructureError)):
        return True
    if isinstance(error, CustomBaseError):
        return error.status_code >= 500
    if isinstance(error, OSError):
        return True

    status_code = getattr(error, 'status_code', None)
    if isinstance(status_code, int):
        return status_code >= 500

    message = str(error).lower()
    return any(marker in message for marker in _TRANSIENT_MESSAGE_MARKERS)


@attrs.define(frozen=True)
class RetryPolicy:
    max_attempts: int = attrs.field(default=3, validator=attrs.validators.ge(1))
    initial_delay: float = attrs.field(default=1.0, validator=attrs.validators.ge(0))
    max_delay: float = attrs.field(default=10.0, validator=attrs.validators.ge(0))
    backoff_multiplier: float = attrs.field(default=2.0, validator=attrs.validators.ge(1))
    retryable_errors: Callable[[Exception], bool] = _always_retry

    def delay_for(self, attempt: int) -> float:
        """Backoff to wait after the given (1-based) failed attempt"""
        return min(self.max_delay, self.initial_delay * self.backoff_multiplier ** (attempt - 1))


class RetryHandler:
    """Bounded retry with exponential backoff. Holds no domain knowledge."""

    def __init__(
        self,
        *,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = anyio.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    async def execute(
        self, fn: Callable[[], Awaitable[_T]], *, policy: RetryPolicy | None = None
    ) -> _T:
        policy = policy or self.policy
        attempt = 1

        while True:
            try:
                return await fn()
            except Exception as e:
                if attempt >= policy.max_attempts or not policy.retryable_errors(e):
                    raise

                delay = policy.delay_for(attempt)
                Logger.base.warning(
                    f'🔁 [RETRY] Attempt {attempt}/{policy.max_attempts} failed '
                    f'({type(e).__name__}: {e}), retrying in {delay}s'
                )
                await self._sleep(delay)
                attempt += 1
