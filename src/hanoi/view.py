"""The rendering contract between the game engine and whatever draws it.

The engine never draws anything itself. `GameOrchestrator` pushes every
visible change through a `GameView`:

- the pegs (bottom to top) and which peg is armed,
- the move counter and the optimal move count,
- a single status message with a `MessageKind` (`normal`, `win`, `error`),
  each new message replacing the previous one,
- whether manual controls are locked because the auto-solver is playing,
- the normalised disk count, so an input widget can show what was actually used.

`LoggingView` is a complete, headless implementation that writes all of
this to a logger. `hanoi.sidekick_view.SidekickView` draws it in the
Sidekick panel.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence


class MessageKind(Enum):
    """Severity of a status message."""
    NORMAL = "normal"
    WIN = "win"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


class GameView(ABC):
    """Abstract Base Class for anything that displays a game."""

    @abstractmethod
    def render(self, pegs: Sequence[Sequence[int]], selected_peg: Optional[int]) -> None:
        """Shows the disks on each peg and highlights the armed peg.

        Args:
            pegs (Sequence[Sequence[int]]): Three stacks of disk sizes, bottom to top.
            selected_peg (Optional[int]): The armed peg, or `None`.
        """
        pass

    @abstractmethod
    def set_message(self, text: str, kind: MessageKind = MessageKind.NORMAL) -> None:
        """Replaces the status message. An empty `text` clears it."""
        pass

    @abstractmethod
    def update_move_count(self, count: int) -> None:
        pass

    @abstractmethod
    def update_optimal_moves(self, count: int) -> None:
        pass

    @abstractmethod
    def set_controls_locked(self, locked: bool) -> None:
        """Locks manual controls while the auto-solver plays, and unlocks them afterwards."""
        pass

    @abstractmethod
    def show_disk_count(self, disk_count: int) -> None:
        """Reflects the disk count actually in use back to the input control."""
        pass


class LoggingView(GameView):
    """A `GameView` that logs everything instead of drawing it.

    Handy for headless runs and for watching a session in the log output.
    The last message and its kind are kept so callers can inspect them.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger(__name__)
        self._level = level
        self.message = ""
        self.message_kind = MessageKind.NORMAL

    def render(self, pegs, selected_peg):
        for index, peg in enumerate(pegs):
            marker = "*" if index == selected_peg else " "
            disks = " ".join(str(size) for size in peg) or "-"
            self._logger.log(self._level, f"{marker}peg {index + 1}: {disks}")

    def set_message(self, text, kind=MessageKind.NORMAL):
        self.message = text
        self.message_kind = kind
        if text:
            level = logging.WARNING if kind is MessageKind.ERROR else self._level
            self._logger.log(level, f"[{kind}] {text}")

    def update_move_count(self, count):
        self._logger.log(self._level, f"Moves: {count}")

    def update_optimal_moves(self, count):
        self._logger.log(self._level, f"Optimal: {count}")

    def set_controls_locked(self, locked):
        self._logger.log(self._level, "Manual controls locked." if locked else "Manual controls unlocked.")

    def show_disk_count(self, disk_count):
        self._logger.log(self._level, f"Disks: {disk_count}")
