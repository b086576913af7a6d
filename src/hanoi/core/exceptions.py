"""Exceptions raised by the event-loop infrastructure behind auto-solve playback.

They are kept apart from the game-level exceptions in `hanoi.exceptions`:
a failure here means the scheduling machinery itself is unusable, not that
a move broke the rules.
"""

from typing import Optional


class CoreBaseError(Exception):
    """Root of the `hanoi.core` errors.

    Attributes:
        original_exception (Optional[BaseException]): The lower-level error
            that caused this one, if there was one.
    """

    def __init__(self, message: str, original_exception: Optional[BaseException] = None):
        super().__init__(message)
        self.original_exception = original_exception

    def __str__(self) -> str:
        message = super().__str__()
        cause = self.original_exception
        if cause is None:
            return message
        return f"{message} (caused by {type(cause).__name__}: {cause})"


class CoreTaskManagerError(CoreBaseError):
    """A TaskManager could not start, reach or shut down its event loop."""


class CoreLoopNotRunningError(CoreTaskManagerError, RuntimeError):
    """The operation needs a running event loop and there is none."""

    def __init__(self, message: str = "No running event loop is available for playback."):
        super().__init__(message)


class CoreTaskSubmissionError(CoreTaskManagerError):
    """A coroutine could not be scheduled on the TaskManager's loop."""

    def __init__(self, message: str = "Could not schedule the task.", original_exception: Optional[BaseException] = None):
        super().__init__(message, original_exception=original_exception)
