"""The `TaskManager` interface: where auto-solve playback coroutines run.

Auto-solve playback is a repeating timed activity, and the engine models it
as an asyncio task that can be cancelled at any moment. The `TaskManager`
ABC hides where that task actually runs:

- `ThreadedTaskManager` runs its own loop in a daemon thread, so a plain
  synchronous program (or a UI toolkit with its own thread) can start and
  stop playback without being async itself.
- `RunningLoopTaskManager` borrows a loop that is already running, which is
  what async applications and the test-suite want.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Coroutine


class TaskManager(ABC):
    """Owns (or borrows) the asyncio loop that playback is scheduled on.

    Its primary role is to give `SolutionPlayer` a stable place to schedule
    playback coroutines, whatever the surrounding program looks like.
    """

    @abstractmethod
    def ensure_loop_running(self) -> None:
        """Makes sure the loop is up, starting it if this manager owns it.

        Raises:
            CoreTaskManagerError: If no usable loop can be provided.
        """
        pass

    @abstractmethod
    def get_loop(self) -> asyncio.AbstractEventLoop:
        """Returns the loop that `submit_task` schedules on.

        Implementations call `ensure_loop_running()` first, so callers can
        rely on getting a live loop.

        Raises:
            CoreLoopNotRunningError: If the loop is not accessible.
        """
        pass

    @abstractmethod
    def is_loop_running(self) -> bool:
        """Checks if the managed asyncio event loop is currently running."""
        pass

    @abstractmethod
    def submit_task(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedules `coro` as a task on the managed loop.

        The task is returned without waiting for it to run.
        `ThreadedTaskManager` accepts calls from any thread;
        `RunningLoopTaskManager` only from its loop's own thread.

        Args:
            coro (Coroutine[Any, Any, Any]): Typically a playback session.

        Returns:
            asyncio.Task: The task object, which callers can cancel.
        """
        pass

    def cancel_task(self, task: asyncio.Task) -> None:
        """Requests cancellation of a task submitted through this manager.

        `asyncio.Task.cancel` is not thread-safe, so calls made from outside
        the task's loop are forwarded with `call_soon_threadsafe`.
        """
        if task.done():
            return
        task_loop = task.get_loop()
        try:
            if asyncio.get_running_loop() is task_loop:
                task.cancel()
                return
        except RuntimeError:
            # Not inside any running loop, so we are on a foreign thread.
            pass
        try:
            task_loop.call_soon_threadsafe(task.cancel)
        except RuntimeError:
            # The loop is already closed and the task will never run again.
            pass

    @abstractmethod
    def stop_loop(self) -> None:
        """Requests the managed event loop to shut down.

        Non-blocking and thread-safe. Implementations that do not own their
        loop treat this as a no-op.
        """
        pass

    @abstractmethod
    def wait_for_stop(self) -> None:
        """Blocks until a loop stopped with `stop_loop()` has shut down completely.

        A no-op for implementations that do not own their loop.
        """
        pass
