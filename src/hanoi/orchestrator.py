"""Mediates between the player, the auto-solver and the puzzle.

`GameOrchestrator` is the only object that mutates the `PuzzleState`. Input
from the player (peg clicks, new-game requests, the auto-solve toggle) and
ticks from the `SolutionPlayer` both come through here, under one
re-entrant lock shared with the player, so exactly one of them touches the
puzzle at a time.

Peg selection works like this:

- nothing armed, click a peg with disks: arm it;
- nothing armed, click an empty peg: error message, nothing changes;
- click the armed peg again: disarm;
- click another peg: try the move, then disarm whatever the outcome.

While the auto-solver plays, every peg click is ignored.
"""

import logging
import threading
from typing import Any, Optional

from .config import GameConfig, parse_disk_count
from .events import BaseGameEvent, NewGameEvent, PegActivateEvent, ToggleAutoSolveEvent
from .exceptions import DegenerateConfigurationError
from .player import SolutionPlayer
from .core import TaskManager
from .state import PEG_COUNT, PuzzleState
from .view import GameView, MessageKind

logger = logging.getLogger(__name__)

# --- Player-facing messages ---
MSG_INSTRUCTIONS = ("Move all disks from the first peg to the third. "
                    "Click a source peg first, then the peg to move its top disk to.")
MSG_EMPTY_PEG = "There are no disks on this peg yet. Choose a peg that has disks."
MSG_BAD_PEG = "Invalid peg index."
MSG_PEG_ARMED = "Peg {number} selected. Now choose the peg to move its top disk to."
MSG_SELECTION_CANCELLED = "Selection cancelled."
MSG_WIN = "Solved in {moves} moves! The minimum possible is {optimal}."
MSG_AUTO_SOLVE_RUNNING = "The auto-solver is demonstrating the optimal solution..."
MSG_AUTO_SOLVE_DONE = "Auto-solver finished the optimal solution in {moves} moves out of a minimum of {optimal}."
MSG_AUTO_SOLVE_STOPPED = "Auto-solver stopped. You can continue playing manually."


class GameOrchestrator:
    """Owns one puzzle, one solution player and the view they are shown on.

    Call `setup()` once the view is ready to show the first puzzle.
    """

    def __init__(self,
                 view: GameView,
                 config: Optional[GameConfig] = None,
                 player: Optional[SolutionPlayer] = None,
                 task_manager: Optional[TaskManager] = None):
        """
        Args:
            view (GameView): Where every visible change is sent.
            config (Optional[GameConfig]): Initial disk count and playback cadence.
            player (Optional[SolutionPlayer]): A prepared player. Its lock becomes
                the orchestrator's lock. If omitted, one is created on `task_manager`.
            task_manager (Optional[TaskManager]): Scheduler for a newly created
                player. Ignored when `player` is given.
        """
        self._view = view
        self._config = config if config is not None else GameConfig()
        if player is None:
            self._lock = threading.RLock()
            player = SolutionPlayer(task_manager, lock=self._lock)
        else:
            self._lock = player.lock
        self._player = player
        self._state = PuzzleState(self._config.disk_count)

    @property
    def state(self) -> PuzzleState:
        return self._state

    @property
    def player(self) -> SolutionPlayer:
        return self._player

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def is_auto_solving(self) -> bool:
        with self._lock:
            return self._state.auto_playing

    def setup(self) -> None:
        """Shows the initial puzzle."""
        self.new_game(self._config.disk_count)

    # --- Input handling ---

    def dispatch(self, event: BaseGameEvent) -> Any:
        """Routes an input event to the matching handler.

        Raises:
            TypeError: For event types the orchestrator does not know.
        """
        if isinstance(event, PegActivateEvent):
            return self.handle_peg_activation(event.peg)
        if isinstance(event, NewGameEvent):
            return self.new_game(event.disk_count)
        if isinstance(event, ToggleAutoSolveEvent):
            return self.toggle_auto_solve(event.disk_count)
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def new_game(self, raw_disk_count: Any = None) -> int:
        """Stops any auto-solve and starts a fresh puzzle.

        Args:
            raw_disk_count (Any): Requested disk count as received from the
                input control. `None` keeps the current count; anything else is
                parsed and clamped.

        Returns:
            int: The disk count actually used.
        """
        with self._lock:
            self._player.stop()
            self._state.set_auto_playing(False)
            self._view.set_controls_locked(False)

            if raw_disk_count is None:
                disk_count = self._config.disk_count
            else:
                disk_count = parse_disk_count(raw_disk_count)
            self._config.disk_count = disk_count

            self._state.reset(disk_count)
            self._view.show_disk_count(self._state.disk_count)
            self._refresh()
            self._view.set_message(MSG_INSTRUCTIONS)
            logger.info(f"New game with {self._state.disk_count} disks.")
            return self._state.disk_count

    def handle_peg_activation(self, peg_index: int) -> None:
        """Runs the selection state machine for a click on `peg_index`."""
        with self._lock:
            if self._state.auto_playing:
                logger.debug(f"Ignoring click on peg {peg_index} during auto-solve.")
                return
            if not isinstance(peg_index, int) or isinstance(peg_index, bool) or not 0 <= peg_index < PEG_COUNT:
                self._view.set_message(MSG_BAD_PEG, MessageKind.ERROR)
                return

            selected = self._state.selected_peg
            if selected is None:
                if self._state.peg_size(peg_index) == 0:
                    self._view.set_message(MSG_EMPTY_PEG, MessageKind.ERROR)
                    return
                self._state.select_peg(peg_index)
                self._view.set_message(MSG_PEG_ARMED.format(number=peg_index + 1))
                self._view.render(self._state.pegs, peg_index)
                return

            if selected == peg_index:
                self._state.select_peg(None)
                self._view.set_message(MSG_SELECTION_CANCELLED)
                self._view.render(self._state.pegs, None)
                return

            self._state.select_peg(None)
            if not self._perform_move(selected, peg_index):
                self._view.render(self._state.pegs, None)

    # --- Auto-solve ---

    def toggle_auto_solve(self, raw_disk_count: Any = None) -> bool:
        """Stops a running auto-solve (as a manual stop) or starts one.

        Args:
            raw_disk_count (Any): Disk count for a new auto-solve, as accepted
                by `new_game`. Ignored when stopping.

        Returns:
            bool: True if auto-solve is running afterwards.
        """
        with self._lock:
            if self._state.auto_playing:
                self.stop_auto_solve(manual=True)
                return False
        return self.start_auto_solve(raw_disk_count)

    def start_auto_solve(self, raw_disk_count: Any = None) -> bool:
        """Resets the puzzle and plays the optimal solution on it.

        Args:
            raw_disk_count (Any): Disk count for the new puzzle, as accepted by
                `new_game`. `None` keeps the current count.

        Returns:
            bool: True if playback started, False if there was nothing to play.
        """
        with self._lock:
            self.new_game(raw_disk_count)
            try:
                self._prepare_plan()
            except DegenerateConfigurationError as e:
                logger.debug(f"Not starting auto-solve: {e}")
                return False
            self._state.set_auto_playing(True)
            self._view.set_controls_locked(True)
            self._view.set_message(MSG_AUTO_SOLVE_RUNNING)
            logger.info(f"Auto-solve started for {self._state.disk_count} disks.")

        # Submitted outside the lock; see SolutionPlayer.start_playback.
        self._player.start_playback(self._on_solver_move, self._on_solver_complete, self._config.move_interval)
        return True

    def stop_auto_solve(self, manual: bool = False) -> None:
        """Stops playback and hands the puzzle back to the player.

        Args:
            manual (bool): True when the player pressed stop; shows a notice.
        """
        with self._lock:
            self._player.stop()
            self._state.set_auto_playing(False)
            self._view.set_controls_locked(False)
            if manual:
                self._view.set_message(MSG_AUTO_SOLVE_STOPPED)
                logger.info(f"Auto-solve stopped by user after {self._state.move_count} moves.")

    def _prepare_plan(self) -> None:
        if not self._player.generate(self._state.disk_count):
            raise DegenerateConfigurationError(disk_count=self._state.disk_count)

    def _on_solver_move(self, source: int, destination: int) -> None:
        with self._lock:
            if not self._state.auto_playing:
                return
            self._perform_move(source, destination, from_solver=True, check_win=False, clear_message=False)

    def _on_solver_complete(self) -> None:
        with self._lock:
            if not self._state.auto_playing:
                return
            self._state.set_auto_playing(False)
            self._view.set_controls_locked(False)
            self._check_win()
            self._view.set_message(
                MSG_AUTO_SOLVE_DONE.format(moves=self._state.move_count, optimal=self._state.optimal_move_count()),
                MessageKind.WIN,
            )
            logger.info(f"Auto-solve finished in {self._state.move_count} moves.")

    # --- Helpers ---

    def _perform_move(self, source: int, destination: int,
                      from_solver: bool = False, check_win: bool = True, clear_message: bool = True) -> bool:
        check = self._state.validate_move(source, destination)
        if not check.valid:
            if from_solver:
                logger.warning(f"Auto-solver move {source} -> {destination} rejected: {check.reason}")
            else:
                self._view.set_message(check.reason, MessageKind.ERROR)
            return False

        self._state.apply_move(source, destination)
        self._refresh()
        if clear_message:
            self._view.set_message("")
        if check_win:
            self._check_win()
        return True

    def _refresh(self) -> None:
        self._view.update_move_count(self._state.move_count)
        self._view.update_optimal_moves(self._state.optimal_move_count())
        self._view.render(self._state.pegs, self._state.selected_peg)

    def _check_win(self) -> bool:
        if not self._state.is_solved():
            return False
        self._view.set_message(
            MSG_WIN.format(moves=self._state.move_count, optimal=self._state.optimal_move_count()),
            MessageKind.WIN,
        )
        return True
