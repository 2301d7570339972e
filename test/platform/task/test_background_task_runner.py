from unittest.mock import AsyncMock, MagicMock

import anyio
import pytest

from src.platform.task.background_task_runner import AnyioBackgroundTaskRunner


pytestmark = pytest.mark.unit


async def test_submit_runs_work_in_task_group():
    fn = AsyncMock()

    async with anyio.create_task_group() as tg:
        runner = AnyioBackgroundTaskRunner(task_group=tg)
        assert runner.submit(fn, name='notify-waitlist:test') is True

    fn.assert_awaited_once()


async def test_failing_work_does_not_cancel_siblings():
    """
    Given: two background jobs, the first one raising
    When: both run in the same task group
    Then: the failure is contained and the second job still completes
    """
    failing = AsyncMock(side_effect=RuntimeError('smtp exploded'))
    healthy = AsyncMock()

    async with anyio.create_task_group() as tg:
        runner = AnyioBackgroundTaskRunner(task_group=tg)
        runner.submit(failing, name='failing')
        runner.submit(healthy, name='healthy')

    failing.assert_awaited_once()
    healthy.assert_awaited_once()


def test_submit_without_task_group_is_dropped():
    runner = AnyioBackgroundTaskRunner(task_group=None)

    assert runner.submit(AsyncMock(), name='orphan') is False


def test_submit_to_closed_task_group_returns_false():
    task_group = MagicMock()
    task_group.start_soon = MagicMock(side_effect=RuntimeError('This task group is not active'))
    runner = AnyioBackgroundTaskRunner(task_group=task_group)

    assert runner.submit(AsyncMock(), name='late') is False
