import asyncio
import unittest
from unittest.mock import MagicMock

from hanoi.config import GameConfig
from hanoi.core import RunningLoopTaskManager
from hanoi.events import NewGameEvent, PegActivateEvent, ToggleAutoSolveEvent
from hanoi.orchestrator import (
    GameOrchestrator,
    MSG_AUTO_SOLVE_RUNNING,
    MSG_AUTO_SOLVE_STOPPED,
    MSG_EMPTY_PEG,
    MSG_INSTRUCTIONS,
    MSG_SELECTION_CANCELLED,
)
from hanoi.state import REASON_LARGER_ON_SMALLER
from hanoi.view import GameView, MessageKind

FAST_INTERVAL = 0.001


class RecordingView(GameView):
    """Keeps the latest value of everything the orchestrator shows."""

    def __init__(self):
        self.pegs = None
        self.selected = None
        self.message = None
        self.kind = None
        self.moves = None
        self.optimal = None
        self.locked = None
        self.disk_count = None
        self.messages = []
        self.render_calls = 0

    def render(self, pegs, selected_peg):
        self.pegs = tuple(tuple(peg) for peg in pegs)
        self.selected = selected_peg
        self.render_calls += 1

    def set_message(self, text, kind=MessageKind.NORMAL):
        self.message = text
        self.kind = kind
        self.messages.append((text, kind))

    def update_move_count(self, count):
        self.moves = count

    def update_optimal_moves(self, count):
        self.optimal = count

    def set_controls_locked(self, locked):
        self.locked = locked

    def show_disk_count(self, disk_count):
        self.disk_count = disk_count


class TestManualPlay(unittest.TestCase):
    """The peg selection state machine, without any auto-solve."""

    def setUp(self):
        self.view = RecordingView()
        self.game = GameOrchestrator(self.view, GameConfig(disk_count=3), task_manager=MagicMock())
        self.game.setup()

    def test_setup_shows_initial_puzzle(self):
        self.assertEqual(self.view.pegs, ((3, 2, 1), (), ()))
        self.assertIsNone(self.view.selected)
        self.assertEqual(self.view.moves, 0)
        self.assertEqual(self.view.optimal, 7)
        self.assertEqual(self.view.disk_count, 3)
        self.assertEqual(self.view.message, MSG_INSTRUCTIONS)
        self.assertFalse(self.view.locked)

    def test_arm_then_move(self):
        self.game.handle_peg_activation(0)
        self.assertEqual(self.game.state.selected_peg, 0)
        self.assertEqual(self.view.selected, 0)
        self.assertIn("Peg 1 selected", self.view.message)

        self.game.handle_peg_activation(2)
        self.assertIsNone(self.game.state.selected_peg)
        self.assertEqual(self.view.pegs, ((3, 2), (), (1,)))
        self.assertIsNone(self.view.selected)
        self.assertEqual(self.view.moves, 1)
        self.assertEqual(self.view.message, "")

    def test_clicking_armed_peg_again_deselects(self):
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(0)
        self.assertIsNone(self.game.state.selected_peg)
        self.assertIsNone(self.view.selected)
        self.assertEqual(self.view.message, MSG_SELECTION_CANCELLED)
        self.assertEqual(self.game.state.move_count, 0)

    def test_arming_empty_peg_is_an_error(self):
        self.game.handle_peg_activation(1)
        self.assertIsNone(self.game.state.selected_peg)
        self.assertEqual(self.view.message, MSG_EMPTY_PEG)
        self.assertEqual(self.view.kind, MessageKind.ERROR)

    def test_illegal_move_disarms_and_reports_reason(self):
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(2)   # 1 -> peg 3
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(2)   # 2 onto 1: illegal

        self.assertIsNone(self.game.state.selected_peg)
        self.assertIsNone(self.view.selected)
        self.assertEqual(self.view.message, REASON_LARGER_ON_SMALLER)
        self.assertEqual(self.view.kind, MessageKind.ERROR)
        self.assertEqual(self.game.state.move_count, 1)
        self.assertEqual(self.view.pegs, ((3, 2), (), (1,)))

    def test_out_of_range_peg_is_an_error(self):
        self.game.handle_peg_activation(5)
        self.assertEqual(self.view.kind, MessageKind.ERROR)
        self.assertIsNone(self.game.state.selected_peg)

    def test_manual_win_is_announced(self):
        self.game.new_game(1)
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(2)
        self.assertTrue(self.game.state.is_solved())
        self.assertEqual(self.view.kind, MessageKind.WIN)
        self.assertIn("1 moves", self.view.message)

    def test_clicks_ignored_while_auto_playing(self):
        self.game.state.set_auto_playing(True)
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(2)
        self.assertIsNone(self.game.state.selected_peg)
        self.assertEqual(self.game.state.move_count, 0)

    def test_new_game_parses_and_clamps(self):
        self.assertEqual(self.game.new_game("20"), 15)
        self.assertEqual(self.view.disk_count, 15)
        self.assertEqual(self.game.state.disk_count, 15)
        self.assertEqual(self.game.new_game("not a number"), 3)
        self.assertEqual(self.game.new_game(0), 1)
        self.assertEqual(self.game.config.disk_count, 1)

    def test_new_game_without_count_keeps_current(self):
        self.game.new_game(5)
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(1)
        self.assertEqual(self.game.new_game(), 5)
        self.assertEqual(self.view.pegs, ((5, 4, 3, 2, 1), (), ()))
        self.assertEqual(self.view.moves, 0)

    def test_dispatch_routes_events(self):
        self.game.dispatch(PegActivateEvent(0))
        self.game.dispatch(PegActivateEvent(1))
        self.assertEqual(self.game.state.pegs, ((3, 2), (1,), ()))
        self.game.dispatch(NewGameEvent("4"))
        self.assertEqual(self.game.state.disk_count, 4)

    def test_dispatch_rejects_unknown_events(self):
        with self.assertRaises(TypeError):
            self.game.dispatch("click")


class TestAutoSolve(unittest.IsolatedAsyncioTestCase):
    """Auto-solve playback driven by the test's running loop."""

    async def asyncSetUp(self):
        self.view = RecordingView()
        self.game = GameOrchestrator(
            self.view,
            GameConfig(disk_count=3, move_interval=FAST_INTERVAL),
            task_manager=RunningLoopTaskManager(),
        )
        self.game.setup()

    async def asyncTearDown(self):
        self.game.stop_auto_solve()

    async def wait_until_idle(self, timeout=2.0):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self.game.player.is_running():
            if loop.time() > deadline:
                self.fail("Timed out waiting for auto-solve to finish.")
            await asyncio.sleep(0.005)

    async def test_auto_solve_plays_optimal_solution(self):
        # Progress made by hand is discarded when the solver starts.
        self.game.handle_peg_activation(0)
        self.game.handle_peg_activation(1)

        self.assertTrue(self.game.start_auto_solve())
        self.assertTrue(self.game.is_auto_solving)
        self.assertTrue(self.view.locked)
        self.assertEqual(self.view.message, MSG_AUTO_SOLVE_RUNNING)

        await self.wait_until_idle()

        self.assertFalse(self.game.is_auto_solving)
        self.assertFalse(self.view.locked)
        self.assertTrue(self.game.state.is_solved())
        self.assertEqual(self.game.state.move_count, 7)
        self.assertEqual(self.view.pegs, ((), (), (3, 2, 1)))
        self.assertEqual(self.view.kind, MessageKind.WIN)
        self.assertIn("7 moves out of a minimum of 7", self.view.message)

    async def test_solver_moves_do_not_clear_message_or_announce_win_early(self):
        self.game.start_auto_solve()
        await self.wait_until_idle()
        texts = [text for text, _ in self.view.messages]
        start = texts.index(MSG_AUTO_SOLVE_RUNNING)
        self.assertNotIn("", texts[start:])
        wins = [kind for _, kind in self.view.messages[start:] if kind is MessageKind.WIN]
        # One from the final win check, one from the completion report.
        self.assertEqual(len(wins), 2)

    async def test_user_clicks_ignored_during_auto_solve(self):
        self.game.new_game(4)
        self.game.start_auto_solve()
        self.game.handle_peg_activation(0)
        self.assertIsNone(self.game.state.selected_peg)
        await self.wait_until_idle()
        self.assertEqual(self.game.state.move_count, 15)

    async def test_manual_stop_keeps_partial_progress(self):
        self.game.new_game(5)
        self.game.start_auto_solve()
        while self.game.state.move_count < 3:
            await asyncio.sleep(0.001)
        self.game.stop_auto_solve(manual=True)
        moves_at_stop = self.game.state.move_count

        self.assertFalse(self.game.player.is_running())
        self.assertFalse(self.game.is_auto_solving)
        self.assertFalse(self.view.locked)
        self.assertEqual(self.view.message, MSG_AUTO_SOLVE_STOPPED)

        await asyncio.sleep(0.03)
        self.assertEqual(self.game.state.move_count, moves_at_stop)
        self.assertFalse(self.game.state.is_solved())

        # Manual play resumes from the partial position.
        third_peg_has_disks = self.game.state.peg_size(2) > 0
        self.game.handle_peg_activation(2)
        if third_peg_has_disks:
            self.assertEqual(self.game.state.selected_peg, 2)
            self.assertEqual(self.view.selected, 2)
            self.assertIs(self.view.kind, MessageKind.NORMAL)
        else:
            self.assertIsNone(self.game.state.selected_peg)
            self.assertEqual(self.view.message, MSG_EMPTY_PEG)
            self.assertIs(self.view.kind, MessageKind.ERROR)
        self.assertEqual(self.game.state.move_count, moves_at_stop)

    async def test_toggle_starts_then_stops(self):
        self.assertTrue(self.game.dispatch(ToggleAutoSolveEvent()))
        self.assertTrue(self.game.is_auto_solving)
        self.assertFalse(self.game.dispatch(ToggleAutoSolveEvent()))
        self.assertFalse(self.game.is_auto_solving)
        self.assertEqual(self.view.message, MSG_AUTO_SOLVE_STOPPED)

    async def test_auto_solve_uses_requested_disk_count(self):
        self.assertTrue(self.game.dispatch(ToggleAutoSolveEvent("4")))
        self.assertEqual(self.game.state.disk_count, 4)
        self.assertEqual(self.view.disk_count, 4)
        self.assertEqual(self.game.player.total_moves, 15)
        await self.wait_until_idle()
        self.assertEqual(self.game.state.move_count, 15)
        self.assertTrue(self.game.state.is_solved())

    async def test_new_game_cancels_auto_solve(self):
        self.game.start_auto_solve()
        self.game.new_game(2)
        self.assertFalse(self.game.player.is_running())
        self.assertFalse(self.game.is_auto_solving)
        await asyncio.sleep(0.03)
        self.assertEqual(self.game.state.move_count, 0)
        self.assertEqual(self.view.message, MSG_INSTRUCTIONS)

    async def test_degenerate_plan_declines_silently(self):
        self.game.player.generate = MagicMock(return_value=[])
        messages_before = len(self.view.messages)

        self.assertFalse(self.game.start_auto_solve())

        self.assertFalse(self.game.is_auto_solving)
        self.assertFalse(self.game.player.is_running())
        # Only the instructions from the reset, no error.
        self.assertEqual(self.view.messages[messages_before:], [(MSG_INSTRUCTIONS, MessageKind.NORMAL)])


if __name__ == '__main__':
    unittest.main()
