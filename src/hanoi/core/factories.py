"""Factory for the process-wide TaskManager.

Auto-solve playback in a synchronous program needs a background event loop.
Rather than starting one thread per game, every `SolutionPlayer` created
without an explicit TaskManager shares the singleton returned here.
"""

import logging
import threading
from typing import Optional

from .task_manager import TaskManager
from .threaded_task_manager import ThreadedTaskManager

logger = logging.getLogger(__name__)

_task_manager_instance: Optional[TaskManager] = None
_task_manager_lock = threading.Lock()

def get_task_manager() -> TaskManager:
    """Gets the singleton `ThreadedTaskManager`, creating it on first use.

    The manager's loop thread is only started when the first playback is
    scheduled.

    Returns:
        TaskManager: The shared TaskManager instance.
    """
    global _task_manager_instance
    if _task_manager_instance is None:
        with _task_manager_lock:
            if _task_manager_instance is None:
                logger.info("Creating ThreadedTaskManager singleton instance.")
                _task_manager_instance = ThreadedTaskManager()
    return _task_manager_instance
