"""Structured input events accepted by `GameOrchestrator.dispatch`.

Front ends translate their own widget callbacks (a grid click, a button
press, a submitted text box) into one of these dataclasses, which keeps the
orchestrator independent of any particular UI toolkit.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class BaseGameEvent:
    """Base class for all game input events."""
    pass


@dataclass
class PegActivateEvent(BaseGameEvent):
    """
    The player activated (clicked) a peg.

    Attributes:
        peg (int): The 0-based peg index, 0 to 2.
    """
    peg: int


@dataclass
class NewGameEvent(BaseGameEvent):
    """
    The player asked for a new game.

    Attributes:
        disk_count (Any): The raw requested disk count, usually text from an
            input box. `None` keeps the current count. Values are parsed and
            clamped by the orchestrator, never rejected.
    """
    disk_count: Any = None


@dataclass
class ToggleAutoSolveEvent(BaseGameEvent):
    """
    The player pressed the auto-solve button. Starts playback, or stops it if running.

    Attributes:
        disk_count (Any): The raw disk count showing in the input box when the
            button was pressed. A fresh auto-solve uses it like `NewGameEvent`
            does; `None` keeps the current count. Ignored when stopping.
    """
    disk_count: Any = None
