"""Tower of Hanoi game engine (`hanoi-py`).

This package contains the engine behind an interactive Tower of Hanoi game.
It supports manual play and an automatic demonstration of the optimal
solution:

-   `PuzzleState` holds the pegs, the move counter and the selection, and
    decides which moves are legal.
-   `SolutionPlayer` builds the optimal `2**n - 1` move sequence and plays it
    back on a timed, cancellable cadence.
-   `GameOrchestrator` connects both to a `GameView` and to input events,
    and makes sure the player and the auto-solver never act at the same time.

Getting Started:

    >>> import hanoi
    >>> game = hanoi.GameOrchestrator(hanoi.LoggingView(), hanoi.GameConfig(disk_count=3))
    >>> game.setup()
    >>> game.handle_peg_activation(0)
    >>> game.handle_peg_activation(2)
    >>> game.state.pegs
    ((3, 2), (), (1,))

A ready-made front end for the Sidekick panel lives in `hanoi.sidekick_view`
(install the `sidekick` extra) and can be started with `python -m hanoi`.
"""

import logging

# --- Version ---
from ._version import __version__

# --- Logging Setup ---
# The package logs through the 'hanoi' logger with a NullHandler attached,
# so nothing is printed unless the application configures logging, e.g.:
# logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger("hanoi")
if not logger.hasHandlers():
    logger.addHandler(logging.NullHandler())

# --- Configuration ---
from .config import (
    GameConfig,
    MIN_DISKS,
    MAX_DISKS,
    DEFAULT_DISK_COUNT,
    DEFAULT_MOVE_INTERVAL,
    clamp_disk_count,
    parse_disk_count,
)

# --- Errors ---
from .exceptions import (
    HanoiError,
    InvalidMoveError,
    DegenerateConfigurationError,
)

# --- Engine ---
from .state import PuzzleState, Move, MoveCheck, PEG_COUNT
from .player import SolutionPlayer, generate_solution
from .orchestrator import GameOrchestrator

# --- Views and input events ---
from .view import GameView, LoggingView, MessageKind
from .events import (
    BaseGameEvent,
    PegActivateEvent,
    NewGameEvent,
    ToggleAutoSolveEvent,
)


__all__ = [
    # Version
    '__version__',

    # Logger
    'logger',

    # Configuration
    'GameConfig',
    'MIN_DISKS',
    'MAX_DISKS',
    'DEFAULT_DISK_COUNT',
    'DEFAULT_MOVE_INTERVAL',
    'clamp_disk_count',
    'parse_disk_count',

    # Errors
    'HanoiError',
    'InvalidMoveError',
    'DegenerateConfigurationError',

    # Engine
    'PuzzleState',
    'Move',
    'MoveCheck',
    'PEG_COUNT',
    'SolutionPlayer',
    'generate_solution',
    'GameOrchestrator',

    # Views
    'GameView',
    'LoggingView',
    'MessageKind',

    # Events
    'BaseGameEvent',
    'PegActivateEvent',
    'NewGameEvent',
    'ToggleAutoSolveEvent',
]
