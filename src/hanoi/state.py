"""Authoritative puzzle state and move legality for the Tower of Hanoi.

This module provides `PuzzleState`, the single mutable object in the game
engine. It owns the three pegs, the move counter, the currently armed peg
and the auto-play flag, and it is the only place where the rules of the
puzzle are written down:

- A move takes the topmost disk of the source peg and puts it on top of the
  destination peg.
- A disk may go onto an empty peg or onto a strictly larger disk, never onto
  a smaller one.
- The puzzle is solved once every disk sits on the last peg.

Pegs are stored bottom to top, so `pegs[i][-1]` is the top disk. Disk sizes
are the integers `1..disk_count`, each present exactly once.

Rejected moves are a routine outcome of play, not a programming error, so
`validate_move` and `apply_move` report them as values. `InvalidMoveError`
is only raised when a caller explicitly asks for it.
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from .config import DEFAULT_DISK_COUNT, clamp_disk_count
from .exceptions import InvalidMoveError

logger = logging.getLogger(__name__)

PEG_COUNT = 3
SOURCE_PEG = 0
AUXILIARY_PEG = 1
TARGET_PEG = 2

# Reasons shown to the player when a move is rejected.
REASON_BAD_INDEX = "Invalid peg index."
REASON_EMPTY_SOURCE = "There are no disks on the selected peg."
REASON_SAME_PEG = "A disk cannot be moved onto the peg it is already on."
REASON_LARGER_ON_SMALLER = "Illegal move: a larger disk cannot be placed on a smaller one."


class Move(NamedTuple):
    """An ordered pair of peg indices: take the top disk of `source`, put it on `destination`."""
    source: int
    destination: int


@dataclass(frozen=True)
class MoveCheck:
    """The verdict of `PuzzleState.validate_move`.

    Attributes:
        source (int): The requested source peg.
        destination (int): The requested destination peg.
        valid (bool): Whether the move is allowed in the current position.
        reason (Optional[str]): Why the move was rejected; `None` when valid.
    """
    source: int
    destination: int
    valid: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid

    def error(self) -> Optional[InvalidMoveError]:
        """Returns the exception describing this rejection, or `None` if the move is valid."""
        if self.valid:
            return None
        return InvalidMoveError(self.source, self.destination, self.reason or "Invalid move.")


def _is_peg_index(index) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < PEG_COUNT


class PuzzleState:
    """Holds the towers, the move count, the armed peg and the auto-play flag.

    A new puzzle always begins with `reset()`, which fully replaces the state;
    the constructor simply performs the first reset.

    `PuzzleState` does not enforce the auto-play lock itself. The orchestrator
    consults `auto_playing` before it forwards any user-driven selection or
    move.

    Attributes:
        disk_count (int): Number of disks in play, within `[1, 15]`.
        move_count (int): Number of successful moves since the last reset.
        selected_peg (Optional[int]): The armed source peg, or `None`.
        auto_playing (bool): Whether the auto-solver currently owns the puzzle.
    """

    def __init__(self, disk_count: int = DEFAULT_DISK_COUNT):
        self._pegs: List[List[int]] = [[] for _ in range(PEG_COUNT)]
        self.disk_count = 0
        self.move_count = 0
        self.selected_peg: Optional[int] = None
        self.auto_playing = False
        self.reset(disk_count)

    def __repr__(self) -> str:
        return (f"PuzzleState(pegs={self.pegs!r}, disk_count={self.disk_count}, "
                f"move_count={self.move_count}, selected_peg={self.selected_peg!r}, "
                f"auto_playing={self.auto_playing})")

    @property
    def pegs(self) -> Tuple[Tuple[int, ...], ...]:
        """A read-only snapshot of the three pegs, each listed bottom to top."""
        return tuple(tuple(peg) for peg in self._pegs)

    def reset(self, disk_count: int) -> None:
        """Starts a new puzzle with every disk stacked on the first peg.

        Out-of-range counts are clamped into `[1, 15]`, never rejected. The
        move count, the selection and the auto-play flag are all cleared.

        Args:
            disk_count (int): The requested number of disks.
        """
        self.disk_count = clamp_disk_count(disk_count)
        self._pegs = [[] for _ in range(PEG_COUNT)]
        self._pegs[SOURCE_PEG].extend(range(self.disk_count, 0, -1))
        self.move_count = 0
        self.selected_peg = None
        self.auto_playing = False
        logger.debug(f"Puzzle reset with {self.disk_count} disks.")

    def optimal_move_count(self) -> int:
        """Returns the minimum number of moves for the current disk count, `2**n - 1`."""
        return 2 ** self.disk_count - 1

    def is_solved(self) -> bool:
        """True once the last peg holds every disk.

        Disks are never created or destroyed, so counting the last peg is enough.
        """
        return len(self._pegs[TARGET_PEG]) == self.disk_count

    def top_disk(self, peg_index: int) -> Optional[int]:
        """Returns the size of the top disk on a peg, or `None` if it is empty.

        Raises:
            IndexError: If `peg_index` is not 0, 1 or 2.
        """
        if not _is_peg_index(peg_index):
            raise IndexError(f"Peg index out of range: {peg_index!r}")
        peg = self._pegs[peg_index]
        return peg[-1] if peg else None

    def peg_size(self, peg_index: int) -> int:
        """Returns how many disks are on a peg.

        Raises:
            IndexError: If `peg_index` is not 0, 1 or 2.
        """
        if not _is_peg_index(peg_index):
            raise IndexError(f"Peg index out of range: {peg_index!r}")
        return len(self._pegs[peg_index])

    def validate_move(self, source: int, destination: int) -> MoveCheck:
        """Checks whether the top disk of `source` may be moved onto `destination`.

        An empty destination always accepts the disk. Otherwise the disk on top
        of the destination must be larger than the one being moved.

        A move from a peg onto itself is rejected. Selecting the armed peg a
        second time is a deselection, which the orchestrator deals with before
        any move is attempted, so players never see this reason.

        Returns:
            MoveCheck: The verdict, with a reason when the move is rejected.
        """
        if not (_is_peg_index(source) and _is_peg_index(destination)):
            return MoveCheck(source, destination, False, REASON_BAD_INDEX)
        if source == destination:
            return MoveCheck(source, destination, False, REASON_SAME_PEG)

        moving_disk = self.top_disk(source)
        if moving_disk is None:
            return MoveCheck(source, destination, False, REASON_EMPTY_SOURCE)

        destination_top = self.top_disk(destination)
        if destination_top is not None and destination_top < moving_disk:
            return MoveCheck(source, destination, False, REASON_LARGER_ON_SMALLER)

        return MoveCheck(source, destination, True)

    def apply_move(self, source: int, destination: int, strict: bool = False) -> bool:
        """Moves the top disk of `source` onto `destination` if the rules allow it.

        The move is validated again before anything changes. A rejected move
        leaves the state untouched.

        Args:
            source (int): Peg to take the disk from.
            destination (int): Peg to put the disk on.
            strict (bool): If `True`, a rejected move raises `InvalidMoveError`
                instead of returning `False`.

        Returns:
            bool: `True` if the move was applied.

        Raises:
            InvalidMoveError: Only when `strict` is set and the move is rejected.
        """
        check = self.validate_move(source, destination)
        if not check.valid:
            logger.debug(f"Rejected move {source} -> {destination}: {check.reason}")
            if strict:
                raise check.error()
            return False

        disk = self._pegs[source].pop()
        self._pegs[destination].append(disk)
        self.move_count += 1
        logger.debug(f"Moved disk {disk} from peg {source} to peg {destination} (move {self.move_count}).")
        return True

    def select_peg(self, peg_index: Optional[int]) -> None:
        """Arms a peg as the source of the next move, or clears the selection with `None`."""
        self.selected_peg = peg_index

    def set_auto_playing(self, flag: bool) -> None:
        """Sets the flag that tells the orchestrator to ignore user input."""
        self.auto_playing = bool(flag)
