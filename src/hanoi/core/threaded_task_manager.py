"""Thread-backed implementation of the TaskManager.

This module provides `ThreadedTaskManager`, which runs an asyncio event loop
in a dedicated daemon thread. The rest of the program stays synchronous: a
click handler can start or stop auto-solve playback and return immediately,
while the playback ticks are driven by the background loop.

Lifecycle:

- The loop thread is started by the first call that needs the loop.
- `stop_loop()` asks the loop to stop. Once `run_forever()` returns, the
  thread cancels every task it is still tracking, waits for them to unwind
  and closes the loop.
- `wait_for_stop()` joins the thread. After that the manager can be started
  again.
"""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Coroutine, Optional, Set

from .task_manager import TaskManager
from .exceptions import CoreLoopNotRunningError, CoreTaskSubmissionError, CoreTaskManagerError

logger = logging.getLogger(__name__)

_STARTUP_TIMEOUT_SECONDS = 10.0
_SUBMIT_TIMEOUT_SECONDS = 5.0


class ThreadedTaskManager(TaskManager):
    """Runs an asyncio event loop in a daemon thread and schedules tasks on it.

    Tasks created through `submit_task` are remembered until they finish, so
    that a shutdown never leaves a playback coroutine suspended on a closed
    loop.
    """

    def __init__(self, thread_name: str = "HanoiPlaybackLoop"):
        """
        Args:
            thread_name (str): Name given to the loop thread. It shows up in
                log records formatted with `%(threadName)s`.
        """
        self._thread_name = thread_name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._ready = threading.Event()
        # Only touched from the loop thread.
        self._pending: Set[asyncio.Task] = set()

    # --- Loop thread ---

    def _serve(self, loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        # run_forever() marks the loop as running before the first callback.
        loop.call_soon(self._ready.set)
        logger.info(f"Playback loop running in thread '{threading.current_thread().name}'.")
        try:
            loop.run_forever()
        finally:
            try:
                self._drain(loop)
            except Exception as e:
                logger.exception(f"Error while draining the playback loop: {e}")
            finally:
                loop.close()
                with self._lock:
                    if self._loop is loop:
                        self._loop = None
                logger.info("Playback loop closed.")

    def _drain(self, loop: asyncio.AbstractEventLoop) -> None:
        leftovers = [task for task in self._pending if not task.done()]
        self._pending.clear()
        if leftovers:
            logger.debug(f"Cancelling {len(leftovers)} unfinished task(s) before closing the loop.")
            for task in leftovers:
                task.cancel()
            loop.run_until_complete(asyncio.gather(*leftovers, return_exceptions=True))
        loop.run_until_complete(loop.shutdown_asyncgens())

    def _adopt(self, task: asyncio.Task) -> asyncio.Task:
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    # --- TaskManager ---

    def ensure_loop_running(self) -> None:
        """Starts the loop thread unless it is already running.

        Raises:
            CoreTaskManagerError: If the loop does not come up within the
                startup timeout.
        """
        with self._lock:
            if self._is_running_unlocked():
                return
            try:
                loop = asyncio.new_event_loop()
            except Exception as e:
                raise CoreTaskManagerError("Could not create the playback event loop.", original_exception=e) from e
            self._ready.clear()
            self._loop = loop
            self._loop_thread = threading.Thread(target=self._serve, args=(loop,), name=self._thread_name, daemon=True)
            self._loop_thread.start()
            thread = self._loop_thread

        if not self._ready.wait(timeout=_STARTUP_TIMEOUT_SECONDS):
            raise CoreTaskManagerError(f"Playback loop did not start within {_STARTUP_TIMEOUT_SECONDS}s.")
        if not thread.is_alive():
            raise CoreTaskManagerError("Playback loop thread exited during startup.")

    def _is_running_unlocked(self) -> bool:
        return (self._loop is not None and self._loop.is_running()
                and self._loop_thread is not None and self._loop_thread.is_alive())

    def is_loop_running(self) -> bool:
        with self._lock:
            return self._is_running_unlocked()

    def get_loop(self) -> asyncio.AbstractEventLoop:
        self.ensure_loop_running()
        with self._lock:
            loop = self._loop
        if loop is None:
            raise CoreLoopNotRunningError("The playback loop stopped while it was being requested.")
        return loop

    def submit_task(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedules `coro` on the loop thread and returns its task.

        From a foreign thread this blocks until the loop has created the task,
        which normally takes one loop iteration.

        Raises:
            CoreTaskSubmissionError: If the loop does not create the task in time.
        """
        loop = self.get_loop()
        try:
            on_loop = asyncio.get_running_loop() is loop
        except RuntimeError:
            on_loop = False
        if on_loop:
            return self._adopt(loop.create_task(coro))

        handoff: concurrent.futures.Future = concurrent.futures.Future()

        def create() -> None:
            try:
                handoff.set_result(self._adopt(loop.create_task(coro)))
            except Exception as e:
                handoff.set_exception(e)

        try:
            loop.call_soon_threadsafe(create)
            return handoff.result(timeout=_SUBMIT_TIMEOUT_SECONDS)
        except concurrent.futures.TimeoutError as e:
            coro.close()
            raise CoreTaskSubmissionError("Timed out waiting for the playback loop to accept a task.", original_exception=e) from e
        except Exception as e:
            coro.close()
            raise CoreTaskSubmissionError("The playback loop rejected a task.", original_exception=e) from e

    def stop_loop(self) -> None:
        with self._lock:
            loop = self._loop
        if loop is None or loop.is_closed():
            logger.debug("stop_loop: no playback loop to stop.")
            return
        logger.info("Stopping the playback loop.")
        try:
            loop.call_soon_threadsafe(loop.stop)
        except RuntimeError as e:
            # Closed between the check and the call.
            logger.debug(f"stop_loop: loop already closed ({e}).")

    def wait_for_stop(self) -> None:
        """Joins the loop thread. Must not be called from the loop thread itself."""
        with self._lock:
            thread = self._loop_thread
        if thread is None:
            return
        if thread is threading.current_thread():
            raise CoreTaskManagerError("wait_for_stop() cannot be called from the playback loop thread.")
        thread.join()
        with self._lock:
            if self._loop_thread is thread:
                self._loop_thread = None
        logger.info("Playback loop thread has finished.")
