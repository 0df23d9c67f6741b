import tempfile
import unittest

from pokeball.bootstrap import create_app
from pokeball.commands.router import handle_command
from pokeball.loop import render, tick
from pokeball.models import CapturePhase, Screen
from pokeball.state import new_session
from pokeball.ui.ansi import ANSI
from pokeball.ui.framebuffer import SPRITE_DEPTH
from pokeball.ui.screens import SILHOUETTE_COLOR
from tests.support import make_app_fixture


class LoopTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.tmpdir = tempfile.TemporaryDirectory()
        cls.ctx = create_app(make_app_fixture(cls.tmpdir.name))

    @classmethod
    def tearDownClass(cls):
        cls.tmpdir.cleanup()

    def setUp(self):
        settings = self.ctx.settings
        self.state = new_session(settings.width, settings.height, settings.color_mode, seed=5)

    def _screen_text(self) -> str:
        buffer = self.state.buffer
        return "\n".join(buffer.row_text(y) for y in range(buffer.height))

    def test_name_screen_frame(self):
        frame = tick(self.state, self.ctx)
        self.assertTrue(frame.startswith(ANSI.CURSOR_HOME))
        self.assertIn("POKeBALL", self._screen_text())
        self.assertIn("What is your name", self._screen_text())

    def test_prompt_echoes_last_line(self):
        handle_command("Ash", self.state, self.ctx.router_ctx)
        handle_command("dance", self.state, self.ctx.router_ctx)
        tick(self.state, self.ctx)
        last = self.state.buffer.row_text(self.state.buffer.height - 1)
        self.assertTrue(last.startswith("> dance"))
        self.assertIn("ash", self.state.buffer.row_text(0))

    def test_full_capture_cycle(self):
        handle_command("ash", self.state, self.ctx.router_ctx)
        target = self.state.scene.encounter.name
        self.assertTrue(handle_command("catch", self.state, self.ctx.router_ctx))
        seen = set()
        for _ in range(400):
            tick(self.state, self.ctx)
            seen.add(self.state.scene.phase)
            if self.state.scene.phase == CapturePhase.IDLE:
                break
        self.assertEqual(self.state.scene.phase, CapturePhase.IDLE)
        self.assertEqual(len(seen), len(CapturePhase))
        self.assertEqual(self.state.caught, {target})
        self.assertEqual(self.state.pending_saves, [target])
        self.assertIsNotNone(self.state.scene.encounter)
        self.assertNotEqual(self.state.scene.encounter.name, target)

    def test_repeat_capture_not_queued_again(self):
        handle_command("ash", self.state, self.ctx.router_ctx)
        self.state.caught = {"pikachu", "arcanine"}
        handle_command("catch", self.state, self.ctx.router_ctx)
        for _ in range(400):
            tick(self.state, self.ctx)
            if self.state.scene.phase == CapturePhase.IDLE:
                break
        self.assertEqual(self.state.pending_saves, [])

    def test_dex_screen_pauses_capture(self):
        handle_command("ash", self.state, self.ctx.router_ctx)
        handle_command("catch", self.state, self.ctx.router_ctx)
        handle_command("dex", self.state, self.ctx.router_ctx)
        x = self.state.scene.ball_x
        for _ in range(5):
            tick(self.state, self.ctx)
        self.assertEqual(self.state.scene.phase, CapturePhase.THROWING)
        self.assertEqual(self.state.scene.ball_x, x)

    def test_dex_grid_lists_caught_and_unknown(self):
        self.state.trainer = "ash"
        self.state.caught = {"pikachu"}
        self.state.screen = Screen.DEX_GRID
        render(self.state, self.ctx)
        text = self._screen_text()
        self.assertIn("002 Pikachu", text)
        self.assertIn("001 ???", text)
        self.assertIn("1/4", text)

    def test_dex_detail_shows_silhouette_when_missing(self):
        self.state.screen = Screen.DEX_DETAIL
        self.state.dex_index = 2
        render(self.state, self.ctx)
        buffer = self.state.buffer
        sprite_cells = [i for i, d in enumerate(buffer.depths) if d == SPRITE_DEPTH]
        self.assertTrue(sprite_cells)
        self.assertTrue(all(buffer.colors[i] == SILHOUETTE_COLOR for i in sprite_cells))
        self.assertIn("NOT CAUGHT", self._screen_text())

    def test_dex_detail_without_art(self):
        self.state.screen = Screen.DEX_DETAIL
        self.state.dex_index = 1
        render(self.state, self.ctx)
        self.assertIn(self.ctx.texts.get("dex", "no_art"), self._screen_text())


if __name__ == "__main__":
    unittest.main()
