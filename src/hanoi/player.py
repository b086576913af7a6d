"""Optimal solution generation and timed playback.

This module provides two things:

- `generate_solution()`: the canonical recursive solution of the three-peg
  puzzle. Moving `n` disks from A to C means moving `n - 1` disks from A to
  B (using C), moving the largest disk from A to C, then moving the `n - 1`
  disks from B to C (using A). The result has exactly `2**n - 1` moves, the
  proven minimum, and is the same every time for the same `n`.
- `SolutionPlayer`: holds one generated plan plus a cursor, and can play the
  plan back one move per tick on an asyncio loop supplied by a
  `TaskManager`.

Playback never touches the puzzle itself; it hands each move to the
`on_move` callback. Each playback run is a "session". `stop()` and a new
`start_playback()` both retire the current session, and a tick whose session
is no longer current does nothing, so no move can slip through after
`stop()` returns, even when `stop()` is called from another thread.
"""

import asyncio
import logging
import threading
from typing import Any, Callable, List, Optional, Tuple

from .config import DEFAULT_MOVE_INTERVAL
from .core import TaskManager, get_task_manager
from .state import AUXILIARY_PEG, SOURCE_PEG, TARGET_PEG, Move

logger = logging.getLogger(__name__)

MoveCallback = Callable[[int, int], Any]
CompleteCallback = Callable[[], Any]


def _solve(disk_count: int, source: int, target: int, auxiliary: int, moves: List[Move]) -> None:
    if disk_count <= 0:
        return
    if disk_count == 1:
        moves.append(Move(source, target))
        return
    _solve(disk_count - 1, source, auxiliary, target, moves)
    moves.append(Move(source, target))
    _solve(disk_count - 1, auxiliary, target, source, moves)


def generate_solution(disk_count: int,
                      source: int = SOURCE_PEG,
                      target: int = TARGET_PEG,
                      auxiliary: int = AUXILIARY_PEG) -> List[Move]:
    """Returns the minimal move sequence that transfers `disk_count` disks.

    Recursion depth equals `disk_count`, which the puzzle caps at 15.

    Args:
        disk_count (int): Number of disks to move. Zero or less gives an empty list.
        source (int): Peg the disks start on.
        target (int): Peg the disks must end on.
        auxiliary (int): The remaining peg.

    Returns:
        List[Move]: `2**disk_count - 1` moves, in playing order.

    Example:
        >>> generate_solution(2)
        [Move(source=0, destination=1), Move(source=0, destination=2), Move(source=1, destination=2)]
    """
    moves: List[Move] = []
    _solve(disk_count, source, target, auxiliary, moves)
    return moves


class SolutionPlayer:
    """Generates the optimal plan and plays it back on a timed cadence.

    Attributes:
        lock (threading.RLock): Serialises plan access and every tick. The
            orchestrator passes in its own lock so that user input and
            playback ticks share a single critical section.
    """

    def __init__(self, task_manager: Optional[TaskManager] = None, lock: Optional[threading.RLock] = None):
        """Creates an idle player with an empty plan.

        Args:
            task_manager (Optional[TaskManager]): Where playback coroutines are
                scheduled. Defaults to the shared `ThreadedTaskManager`, resolved
                on first playback.
            lock (Optional[threading.RLock]): Lock used for every tick and plan
                mutation. A private re-entrant lock is created when omitted.
        """
        self._task_manager = task_manager
        self.lock = lock if lock is not None else threading.RLock()
        self._moves: List[Move] = []
        self._cursor = 0
        self._task: Optional[asyncio.Task] = None
        self._session = 0

    @property
    def task_manager(self) -> TaskManager:
        if self._task_manager is None:
            self._task_manager = get_task_manager()
        return self._task_manager

    @property
    def moves(self) -> Tuple[Move, ...]:
        """The current plan (empty when nothing has been generated or after `stop()`)."""
        with self.lock:
            return tuple(self._moves)

    @property
    def cursor(self) -> int:
        """Index of the next move to be played."""
        with self.lock:
            return self._cursor

    @property
    def total_moves(self) -> int:
        with self.lock:
            return len(self._moves)

    def generate(self, disk_count: int) -> List[Move]:
        """Replaces the plan with the optimal solution for `disk_count` disks.

        The cursor is rewound to the first move.

        Returns:
            List[Move]: A copy of the new plan.
        """
        moves = generate_solution(disk_count)
        with self.lock:
            self._moves = moves
            self._cursor = 0
        logger.debug(f"Generated a {len(moves)}-move plan for {disk_count} disks.")
        return list(moves)

    def has_next(self) -> bool:
        with self.lock:
            return self._cursor < len(self._moves)

    def next_move(self) -> Optional[Move]:
        """Returns the move under the cursor and advances it, or `None` once exhausted."""
        with self.lock:
            if self._cursor >= len(self._moves):
                return None
            move = self._moves[self._cursor]
            self._cursor += 1
            return move

    def is_running(self) -> bool:
        """True while a playback task is scheduled."""
        with self.lock:
            return self._task is not None and not self._task.done()

    def start_playback(self,
                       on_move: MoveCallback,
                       on_complete: Optional[CompleteCallback] = None,
                       interval: float = DEFAULT_MOVE_INTERVAL) -> asyncio.Task:
        """Starts playing the plan, one move every `interval` seconds.

        Each tick hands the next move to `on_move(source, destination)`. The
        first tick that finds the plan exhausted ends playback, resets the
        player like `stop()` does and calls `on_complete()` exactly once.

        Starting while already running retires the previous session but keeps
        the plan and cursor.

        Do not call this while holding `lock`: with a thread-backed task
        manager, submission waits for the loop thread, which may itself be
        waiting for the lock.

        Args:
            on_move (MoveCallback): Called with the source and destination peg of each move.
            on_complete (Optional[CompleteCallback]): Called once when the plan runs out.
            interval (float): Seconds between ticks. Must be positive.

        Returns:
            asyncio.Task: The scheduled playback task.

        Raises:
            TypeError: If a callback is not callable.
            ValueError: If `interval` is not a positive number.
        """
        if not callable(on_move):
            raise TypeError("on_move must be a callable taking (source, destination).")
        if on_complete is not None and not callable(on_complete):
            raise TypeError("on_complete must be a callable taking no arguments.")
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise ValueError("The playback interval must be a positive number.")

        task_manager = self.task_manager
        with self.lock:
            previous_task = self._task
            self._task = None
            self._session += 1
            session = self._session
        if previous_task is not None:
            logger.warning("start_playback called while already running; replacing the previous session.")
            task_manager.cancel_task(previous_task)

        logger.info(f"Starting playback session {session} ({self.total_moves} moves, every {interval:.3f}s).")
        task = task_manager.submit_task(self._run_playback(session, on_move, on_complete, float(interval)))
        with self.lock:
            if session == self._session:
                self._task = task
                return task
        # stop() won the race while the task was being submitted.
        task_manager.cancel_task(task)
        return task

    def stop(self) -> None:
        """Cancels playback and discards the plan.

        Safe to call at any time, from any thread, any number of times. After
        it returns no further tick of the cancelled session can reach
        `on_move` or `on_complete`. A later playback needs a fresh `generate()`.
        """
        with self.lock:
            task = self._task
            was_running = task is not None and not task.done()
            self._discard()
        if task is not None:
            self.task_manager.cancel_task(task)
        if was_running:
            logger.info("Playback stopped.")

    def _discard(self) -> None:
        self._session += 1
        self._task = None
        self._moves = []
        self._cursor = 0

    def _tick(self, session: int, on_move: MoveCallback, on_complete: Optional[CompleteCallback]) -> bool:
        """Plays one move. Returns False when the session is over."""
        with self.lock:
            if session != self._session:
                return False
            move = self.next_move()
            if move is None:
                self._discard()
                logger.info(f"Playback session {session} completed.")
                if on_complete is not None:
                    self._invoke(on_complete)
                return False
            self._invoke(on_move, move.source, move.destination)
            return True

    @staticmethod
    def _invoke(callback: Callable[..., Any], *args: Any) -> None:
        try:
            callback(*args)
        except Exception as e:
            logger.exception(f"Error in playback callback '{getattr(callback, '__name__', 'unknown')}': {e}")

    async def _run_playback(self,
                            session: int,
                            on_move: MoveCallback,
                            on_complete: Optional[CompleteCallback],
                            interval: float) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                if not self._tick(session, on_move, on_complete):
                    break
        except asyncio.CancelledError:
            logger.debug(f"Playback session {session} was cancelled.")
