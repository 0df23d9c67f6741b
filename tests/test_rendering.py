import re
import unittest

from pokeball.models import CellColor
from pokeball.ui.ansi import ANSI, rgb_to_ansi256
from pokeball.ui.framebuffer import FrameBuffer
from pokeball.ui.rendering import ANSI256, MONO, TRUECOLOR, frame_trailer, serialize_frame

SGR_RE = re.compile(r"\x1b\[[0-9;]*m")


class QuantizeTests(unittest.TestCase):
    def test_black_and_white_corners(self):
        self.assertEqual(rgb_to_ansi256(0, 0, 0), 16)
        self.assertEqual(rgb_to_ansi256(0, 0, 0), rgb_to_ansi256(0, 0, 0))
        self.assertEqual(rgb_to_ansi256(255, 255, 255), 231)

    def test_mid_gray_uses_gray_ramp(self):
        index = rgb_to_ansi256(128, 128, 128)
        self.assertEqual(index, 243)
        self.assertTrue(232 <= index <= 255)
        self.assertTrue(232 <= rgb_to_ansi256(120, 128, 131) <= 255)

    def test_saturated_colors_use_cube(self):
        self.assertEqual(rgb_to_ansi256(255, 0, 0), 196)
        self.assertEqual(rgb_to_ansi256(0, 0, 255), 21)
        self.assertEqual(rgb_to_ansi256(0, 255, 0), 46)


class SerializeTests(unittest.TestCase):
    def setUp(self):
        self.buffer = FrameBuffer(6, 3)

    def test_frame_layout(self):
        self.buffer.draw_text(0, 0, "abc")
        out = serialize_frame(self.buffer, MONO)
        self.assertTrue(out.startswith(ANSI.CURSOR_HOME))
        self.assertTrue(out.endswith(frame_trailer(3)))
        self.assertEqual(out.count("\r\n"), 2)
        body = out[len(ANSI.CURSOR_HOME):-len(frame_trailer(3))]
        self.assertEqual(body.split("\r\n"), ["abc   ", "      ", "      "])

    def test_trailer_clears_below_frame(self):
        self.assertEqual(frame_trailer(40), "\x1b[41;1H\x1b[J")

    def test_mono_has_no_color_escapes(self):
        self.buffer.draw_text(0, 0, "ab", CellColor.named(91))
        self.buffer.plot(3, 1, 1.0, "#", CellColor.from_rgb(10, 20, 30))
        out = serialize_frame(self.buffer, MONO)
        self.assertIsNone(SGR_RE.search(out))
        self.assertIn("ab", out)

    def test_color_emitted_once_per_run(self):
        red = CellColor.named(91)
        self.buffer.draw_text(0, 0, "a b c", red)
        out = serialize_frame(self.buffer, ANSI256)
        self.assertEqual(out.count("\x1b[91m"), 1)
        self.assertIn("\x1b[91ma b c", out)

    def test_color_change_emits_new_escape(self):
        self.buffer.draw_text(0, 0, "a", CellColor.named(91))
        self.buffer.draw_text(1, 0, "b", CellColor.named(97))
        out = serialize_frame(self.buffer, ANSI256)
        self.assertIn("\x1b[91ma\x1b[97mb", out)
        self.assertIn("b" + ANSI.RESET, out)

    def test_rgb_cells_per_mode(self):
        self.buffer.plot(0, 0, 1.0, "#", CellColor.from_rgb(255, 0, 0))
        self.assertIn("\x1b[38;2;255;0;0m#", serialize_frame(self.buffer, TRUECOLOR))
        self.assertIn("\x1b[38;5;196m#", serialize_frame(self.buffer, ANSI256))

    def test_unknown_mode_rejected(self):
        with self.assertRaises(ValueError):
            serialize_frame(self.buffer, "sixel")


if __name__ == "__main__":
    unittest.main()
