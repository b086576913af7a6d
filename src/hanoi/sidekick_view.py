"""Sidekick panel front end for the game.

`SidekickView` is a `GameView` that draws the pegs on a `sidekick.Grid`,
shows the counters and the status message in `sidekick.Label`s, and offers
a disk-count `sidekick.Textbox`, a "New game" button and an auto-solve
button. `bind()` connects those widgets to a `GameOrchestrator`.

Requires the optional `sidekick` extra (`pip install hanoi-py[sidekick]`).
"""

import logging
from typing import Optional, Sequence, Tuple

import sidekick

from .config import MAX_DISKS, MIN_DISKS
from .events import NewGameEvent, PegActivateEvent, ToggleAutoSolveEvent
from .view import GameView, MessageKind

logger = logging.getLogger(__name__)

# --- Colors ---
DISK_COLORS = ["#FFADAD", "#FFD6A5", "#FDFFB6", "#CAFFBF", "#9BF6FF", "#A0C4FF", "#BDB2FF", "#FFC6FF"]
PEG_COLOR = "#cccccc"
ARMED_PEG_COLOR = "#f4a261"

SOLVE_BUTTON_IDLE = "Auto-solve (optimal solution)"
SOLVE_BUTTON_RUNNING = "Stop auto-solver"

_MESSAGE_PREFIX = {
    MessageKind.NORMAL: "",
    MessageKind.WIN: "Done! ",
    MessageKind.ERROR: "Error: ",
}


class GridLayout:
    """Cell geometry for drawing three pegs with up to `disk_count` disks."""

    base_disk_width = 3
    disk_width_factor = 2
    spacing = 5
    side_padding = 4
    top_padding = 2
    peg_extra_height = 2
    base_row_height = 1

    def __init__(self, disk_count: int):
        disk_count = max(MIN_DISKS, min(MAX_DISKS, disk_count))
        width_per_peg = self.disk_width(disk_count)
        self.width_per_peg = width_per_peg
        self.num_columns = 3 * width_per_peg + 2 * self.spacing + 2 * self.side_padding
        self.num_rows = disk_count + self.peg_extra_height + self.base_row_height + self.top_padding
        self.base_row = self.num_rows - self.base_row_height
        self.peg_centers = [
            self.side_padding + i * (width_per_peg + self.spacing) + width_per_peg // 2
            for i in range(3)
        ]

    def disk_width(self, disk_size: int) -> int:
        width = self.base_disk_width + (disk_size - 1) * self.disk_width_factor
        return width if width % 2 else width + 1

    def disk_cells(self, disk_size: int, peg_index: int, level: int) -> Tuple[int, int, int]:
        """Returns `(row, first_column, last_column)` for a disk at `level` (0 = bottom)."""
        width = self.disk_width(disk_size)
        start = self.peg_centers[peg_index] - width // 2
        return self.base_row - 1 - level, start, start + width - 1

    def peg_at(self, column: int) -> Optional[int]:
        """Maps a grid column to the peg whose band contains it, or `None` for the gaps."""
        for index, center in enumerate(self.peg_centers):
            if abs(column - center) <= self.width_per_peg // 2:
                return index
        return None


class SidekickView(GameView):
    """Shows the game in the Sidekick panel and forwards widget input."""

    def __init__(self):
        self._orchestrator = None
        self._controls_locked = False
        self.layout: Optional[GridLayout] = None
        self.grid = None
        self._moves = 0
        self._optimal = 0

        sidekick.clear_all()
        self.controls_row = sidekick.Row()
        self.disk_count_input = sidekick.Textbox(placeholder="Disks", parent=self.controls_row)
        self.new_game_button = sidekick.Button(text="New game", parent=self.controls_row)
        self.solve_button = sidekick.Button(text=SOLVE_BUTTON_IDLE, parent=self.controls_row)
        self.counters_label = sidekick.Label(text="")
        self.message_label = sidekick.Label(text="")
        logger.info("Sidekick UI components created.")

    def bind(self, orchestrator) -> None:
        """Routes widget events to `orchestrator.dispatch`."""
        self._orchestrator = orchestrator
        self.disk_count_input.on_submit(self._on_disk_count_submit)
        self.new_game_button.on_click(self._on_new_game_click)
        self.solve_button.on_click(self._on_solve_click)

    # --- Widget callbacks ---

    def _on_disk_count_submit(self, event) -> None:
        if self._controls_locked or self._orchestrator is None:
            return
        self._orchestrator.dispatch(NewGameEvent(event.value))

    def _on_new_game_click(self, event) -> None:
        if self._controls_locked or self._orchestrator is None:
            return
        self._orchestrator.dispatch(NewGameEvent(self.disk_count_input.value))

    def _on_solve_click(self, event) -> None:
        if self._orchestrator is not None:
            self._orchestrator.dispatch(ToggleAutoSolveEvent(self.disk_count_input.value))

    def _on_grid_click(self, event) -> None:
        if self._orchestrator is None or self.layout is None:
            return
        peg = self.layout.peg_at(event.x)
        if peg is not None:
            self._orchestrator.dispatch(PegActivateEvent(peg))

    # --- GameView ---

    def show_disk_count(self, disk_count: int) -> None:
        self.disk_count_input.value = str(disk_count)
        self.layout = GridLayout(disk_count)
        if self.grid is not None:
            self.grid.remove()
        self.grid = sidekick.Grid(num_columns=self.layout.num_columns, num_rows=self.layout.num_rows)
        self.grid.on_click(self._on_grid_click)
        logger.info(f"Grid created ({self.layout.num_columns}x{self.layout.num_rows}) for {disk_count} disks.")

    def render(self, pegs: Sequence[Sequence[int]], selected_peg: Optional[int]) -> None:
        if self.grid is None or self.layout is None:
            return
        layout = self.layout
        self.grid.clear()
        for x in range(layout.num_columns):
            self.grid.set_color(x, layout.base_row, PEG_COLOR)
        for index, center in enumerate(layout.peg_centers):
            color = ARMED_PEG_COLOR if index == selected_peg else PEG_COLOR
            for y in range(layout.top_padding, layout.base_row):
                self.grid.set_color(center, y, color)
        for peg_index, disks in enumerate(pegs):
            for level, size in enumerate(disks):
                row, start, end = layout.disk_cells(size, peg_index, level)
                disk_color = DISK_COLORS[(size - 1) % len(DISK_COLORS)]
                for x in range(max(start, 0), min(end, layout.num_columns - 1) + 1):
                    self.grid.set_color(x, row, disk_color)

    def set_message(self, text: str, kind: MessageKind = MessageKind.NORMAL) -> None:
        self.message_label.text = f"{_MESSAGE_PREFIX[kind]}{text}" if text else ""

    def update_move_count(self, count: int) -> None:
        self._moves = count
        self._update_counters()

    def update_optimal_moves(self, count: int) -> None:
        self._optimal = count
        self._update_counters()

    def _update_counters(self) -> None:
        self.counters_label.text = f"Moves: {self._moves}    Optimal: {self._optimal}"

    def set_controls_locked(self, locked: bool) -> None:
        self._controls_locked = locked
        self.solve_button.text = SOLVE_BUTTON_RUNNING if locked else SOLVE_BUTTON_IDLE
