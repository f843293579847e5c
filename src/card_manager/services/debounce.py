"""Cancellable delayed execution for rapid input events."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field


@dataclass
class Debouncer:
    """Run an action once input has been quiet for ``delay_seconds``.

    Each ``schedule`` call cancels the previous action if its quiet period has
    not elapsed yet. Once the period elapses the action starts and can no
    longer be cancelled, so an in-flight request is never interrupted.
    """

    delay_seconds: float
    _quiet_task: "asyncio.Task[None] | None" = field(default=None, init=False)
    _latest_task: "asyncio.Task[None] | None" = field(default=None, init=False)

    @property
    def pending(self) -> bool:
        """Whether an action is still waiting out its quiet period."""
        return self._quiet_task is not None and not self._quiet_task.done()

    def schedule(self, action: Callable[[], Awaitable[None]]) -> None:
        """Replace any pending action with ``action``."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._run(action))
        self._quiet_task = task
        self._latest_task = task

    def cancel(self) -> None:
        """Drop the pending action, if it has not started."""
        if self._quiet_task is not None and not self._quiet_task.done():
            self._quiet_task.cancel()
        self._quiet_task = None

    async def wait(self) -> None:
        """Wait until the most recently scheduled action has finished."""
        while self._latest_task is not None and not self._latest_task.done():
            await asyncio.wait({self._latest_task})

    async def _run(self, action: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(self.delay_seconds)
        self._quiet_task = None
        await action()
