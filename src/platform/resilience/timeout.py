from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio


_T = TypeVar('_T')


async def with_timeout(
    fn: Callable[[], Awaitable[_T]], timeout_seconds: float, *, operation: str = 'operation'
) -> _T:
    """Run `fn` under a hard deadline; raises builtin TimeoutError when it expires."""
    try:
        with anyio.fail_after(timeout_seconds):
            return await fn()
    except TimeoutError as e:
        raise TimeoutError(f'{operation} timed out after {timeout_seconds}s') from e
