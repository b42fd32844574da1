"""Debounce coroutine calls on the running event loop."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

from common.constants import PROBE_QUIET_PERIOD_SECONDS

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs a coroutine function only after its trigger has been quiet for a while.

    Each trigger replaces the pending timer. Once the quiet period has
    elapsed the call is in flight and is no longer cancelled by new
    triggers; callers discard superseded results themselves.
    """

    def __init__(
        self,
        callback: Callable[..., Awaitable[Any]],
        quiet_period: float = PROBE_QUIET_PERIOD_SECONDS,
    ):
        self.callback = callback
        self.quiet_period = quiet_period
        self._timer: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    def trigger(self, *args: Any) -> asyncio.Task:
        """Schedule the callback, replacing any call still waiting out its quiet period."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._run(args))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel(self) -> bool:
        """Cancel the pending call, if it has not started yet."""
        if self._timer is None or self._timer.done():
            self._timer = None
            return False
        self._timer.cancel()
        self._timer = None
        return True

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def close(self) -> None:
        """Cancel the pending call and any call still in flight."""
        self._timer = None
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, args):
        await asyncio.sleep(self.quiet_period)
        if self._timer is asyncio.current_task():
            self._timer = None
        return await self.callback(*args)
