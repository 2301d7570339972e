import anyio
import pytest

from src.platform.resilience.timeout import with_timeout


pytestmark = pytest.mark.unit


async def test_returns_result_within_deadline():
    async def _fast() -> str:
        return 'done'

    assert await with_timeout(_fast, 1.0) == 'done'


async def test_raises_timeout_error_naming_the_operation():
    """
    Given: an operation that outlives its deadline
    When: run under with_timeout
    Then: builtin TimeoutError is raised with the operation name and deadline
    """

    async def _slow() -> None:
        await anyio.sleep(5)

    with pytest.raises(TimeoutError, match='email send timed out after 0.05s'):
        await with_timeout(_slow, 0.05, operation='email send')


async def test_inner_errors_propagate_unchanged():
    async def _broken() -> None:
        raise ConnectionError('refused')

    with pytest.raises(ConnectionError, match='refused'):
        await with_timeout(_broken, 1.0)
