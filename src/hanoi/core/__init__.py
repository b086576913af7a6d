"""Event-loop infrastructure for the hanoi package.

This sub-package (`hanoi.core`) provides the scheduling layer that the
auto-solver's timed playback runs on. It does not know anything about the
puzzle.

Key components provided by this core package include:

-   `TaskManager`: An abstraction for managing an asyncio event loop and tasks.
-   `ThreadedTaskManager`: runs a private loop in a daemon thread.
-   `RunningLoopTaskManager`: schedules on a loop that is already running.
-   `get_task_manager()`: the shared `ThreadedTaskManager`.
-   Core exceptions (e.g., `CoreTaskManagerError`).
"""

# --- Core Exceptions ---
from .exceptions import (
    CoreBaseError,
    CoreTaskManagerError,
    CoreLoopNotRunningError,
    CoreTaskSubmissionError,
)

# --- Task Managers ---
from .task_manager import TaskManager
from .threaded_task_manager import ThreadedTaskManager
from .running_loop_task_manager import RunningLoopTaskManager

# --- Factory Functions ---
from .factories import get_task_manager


__all__ = [
    # Exceptions
    'CoreBaseError',
    'CoreTaskManagerError',
    'CoreLoopNotRunningError',
    'CoreTaskSubmissionError',

    # Task managers
    'TaskManager',
    'ThreadedTaskManager',
    'RunningLoopTaskManager',

    # Factories
    'get_task_manager',
]
