"""
Fire-and-forget background work bound to the application task group.

The task group is created in the FastAPI lifespan and injected into the DI
container (`container.task_group.override(tg)`); request handlers submit
post-commit side effects here so the HTTP response never waits on them.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger


class IBackgroundTaskRunner(ABC):
    @abstractmethod
    def submit(self, fn: Callable[[], Awaitable[Any]], *, name: str) -> bool:
        """
        Schedule `fn` to run outside the caller's request.

        Never raises. Returns False when the work could not be scheduled.
        """
        pass


class AnyioBackgroundTaskRunner(IBackgroundTaskRunner):
    def __init__(self, *, task_group: TaskGroup | None) -> None:
        self.task_group = task_group

    def submit(self, fn: Callable[[], Awaitable[Any]], *, name: str) -> bool:
        if self.task_group is None:
            Logger.base.warning(f'⚠️  [BG-TASK] No task group available, dropped: {name}')
            return False

        async def _run() -> None:
            try:
                await fn()
            except Exception as e:
                # Failures stay inside this task, the shared task group keeps running
                Logger.base.exception(f'❌ [BG-TASK] {name} failed: {type(e).__name__}: {e}')

        try:
            self.task_group.start_soon(_run, name=name)
        except RuntimeError as e:
            # Task group already closed (shutdown in progress)
            Logger.base.warning(f'⚠️  [BG-TASK] Could not schedule {name}: {e}')
            return False

        Logger.base.debug(f'🧵 [BG-TASK] Scheduled {name}')
        return True
