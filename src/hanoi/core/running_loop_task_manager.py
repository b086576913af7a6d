"""TaskManager adapter for an event loop that somebody else is already running.

Async applications (and `unittest.IsolatedAsyncioTestCase`) own their event
loop. `RunningLoopTaskManager` simply schedules playback on that loop. It
neither starts nor stops it.
"""

import asyncio
import logging
from typing import Any, Coroutine, Optional

from .task_manager import TaskManager
from .exceptions import CoreLoopNotRunningError, CoreTaskSubmissionError

logger = logging.getLogger(__name__)


class RunningLoopTaskManager(TaskManager):
    """Schedules tasks on an externally managed asyncio event loop.

    The loop can be passed in explicitly. Otherwise the loop that is running
    when the manager is first used is captured and kept.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop: Optional[asyncio.AbstractEventLoop] = loop

    def _ensure_initialized(self) -> None:
        """Captures the currently running loop if none was given.

        Raises:
            CoreLoopNotRunningError: If called outside a running event loop
                and no loop was supplied.
        """
        if self._loop is not None:
            return
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise CoreLoopNotRunningError(
                "RunningLoopTaskManager must first be used from inside a running event loop."
            ) from e
        logger.info(f"RunningLoopTaskManager attached to event loop: {self._loop}")

    def ensure_loop_running(self) -> None:
        """Ensures the loop reference is available. The loop itself is managed elsewhere."""
        self._ensure_initialized()
        if self._loop.is_closed():
            raise CoreLoopNotRunningError("The attached event loop has been closed.")

    def is_loop_running(self) -> bool:
        """Checks whether the attached loop is currently running."""
        try:
            self._ensure_initialized()
        except CoreLoopNotRunningError:
            return False
        return self._loop.is_running()

    def get_loop(self) -> asyncio.AbstractEventLoop:
        """Returns the attached event loop."""
        self.ensure_loop_running()
        return self._loop

    def submit_task(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedules a coroutine on the attached loop.

        Raises:
            CoreTaskSubmissionError: If the task cannot be created, for example
                when called from a thread other than the loop's.
        """
        loop = self.get_loop()
        try:
            if asyncio.get_running_loop() is not loop:
                raise RuntimeError("submit_task called from a different event loop")
        except RuntimeError as e:
            coro.close()
            raise CoreTaskSubmissionError(
                "RunningLoopTaskManager only accepts tasks from its own loop's thread.", original_exception=e
            ) from e
        return loop.create_task(coro)

    def stop_loop(self) -> None:
        """Does nothing; the loop belongs to the caller."""
        logger.debug("RunningLoopTaskManager.stop_loop() called. The attached loop is not owned, so this is a no-op.")

    def wait_for_stop(self) -> None:
        """Returns immediately; the loop belongs to the caller."""
        logger.debug("RunningLoopTaskManager.wait_for_stop() called. Nothing to wait for.")
