"""Custom application-level exceptions for the hanoi package.

Two kinds of problems can come out of the game engine, and neither of them
is fatal:

- `InvalidMoveError`: a requested move breaks the rules (empty source peg,
  a larger disk onto a smaller one, or a peg index out of range). Normal
  play never raises it; `PuzzleState.validate_move` reports the same
  condition as a `MoveCheck` value, and only strict callers get an exception.
- `DegenerateConfigurationError`: the auto-solver produced nothing to play.
  The orchestrator swallows it and simply does not start auto-play.

Errors from the event-loop plumbing live in `hanoi.core.exceptions`.
"""

from typing import Optional


class HanoiError(Exception):
    """Base class for all application-level errors raised by the hanoi package.

    Catching this exception handles anything the game engine raises on
    purpose, as distinct from general Python errors.
    """
    pass


class InvalidMoveError(HanoiError):
    """Raised when a move from one peg to another is not allowed.

    Attributes:
        source (int): The peg the disk would be taken from.
        destination (int): The peg the disk would be placed on.
        reason (str): A human-readable explanation suitable for showing to
            the player.
    """
    def __init__(self, source: int, destination: int, reason: str):
        super().__init__(reason)
        self.source = source
        self.destination = destination
        self.reason = reason

    def __str__(self) -> str:
        """Provide a more informative string representation."""
        return f"{self.reason} (move {self.source} -> {self.destination})"


class DegenerateConfigurationError(HanoiError):
    """Raised when an auto-solve session would have no moves to play.

    Only reachable at the lower boundary (zero disks), which the puzzle
    itself never produces after clamping.

    Attributes:
        disk_count (Optional[int]): The disk count the empty plan was built for.
    """
    def __init__(self, message: str = "The solution plan is empty.", disk_count: Optional[int] = None):
        super().__init__(message)
        self.disk_count = disk_count
