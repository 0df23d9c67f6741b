import random
import unittest

from pokeball.models import NO_COLOR, CellColor
from pokeball.ui.framebuffer import DEPTH_MIN, FrameBuffer

RED = CellColor.named(91)


class FrameBufferTests(unittest.TestCase):
    def test_rejects_empty_dimensions(self):
        with self.assertRaises(ValueError):
            FrameBuffer(0, 10)
        with self.assertRaises(ValueError):
            FrameBuffer(10, -1)

    def test_first_write_always_wins(self):
        buffer = FrameBuffer(4, 3)
        self.assertTrue(buffer.plot(1, 1, -1000.0, "a", RED))
        self.assertEqual(buffer.glyph_at(1, 1), "a")

    def test_equal_or_lower_depth_is_rejected(self):
        buffer = FrameBuffer(4, 3)
        buffer.plot(2, 1, 0.3, "a", RED)
        self.assertFalse(buffer.plot(2, 1, 0.3, "b", NO_COLOR))
        self.assertFalse(buffer.plot(2, 1, 0.1, "c", NO_COLOR))
        self.assertEqual(buffer.glyph_at(2, 1), "a")
        self.assertEqual(buffer.color_at(2, 1), RED)
        self.assertTrue(buffer.plot(2, 1, 0.31, "d", NO_COLOR))
        self.assertEqual(buffer.glyph_at(2, 1), "d")

    def test_stored_depth_is_running_maximum(self):
        buffer = FrameBuffer(1, 1)
        rng = random.Random(7)
        best = DEPTH_MIN
        glyph = " "
        for i in range(200):
            depth = rng.uniform(-1.0, 1.0)
            ch = chr(ord("a") + i % 26)
            accepted = buffer.plot(0, 0, depth, ch, RED)
            self.assertEqual(accepted, depth > best)
            if accepted:
                best = depth
                glyph = ch
            self.assertEqual(buffer.depth_at(0, 0), best)
            self.assertEqual(buffer.glyph_at(0, 0), glyph)

    def test_out_of_bounds_ignored(self):
        buffer = FrameBuffer(3, 2)
        for x, y in ((-1, 0), (0, -1), (3, 0), (0, 2)):
            self.assertFalse(buffer.plot(x, y, 1.0, "x", RED))
        self.assertEqual(buffer.row_text(0), "   ")

    def test_clear_resets_in_place(self):
        buffer = FrameBuffer(3, 2)
        glyphs, depths, colors = buffer.glyphs, buffer.depths, buffer.colors
        buffer.draw_text(0, 0, "abc", RED)
        buffer.clear()
        self.assertIs(buffer.glyphs, glyphs)
        self.assertIs(buffer.depths, depths)
        self.assertIs(buffer.colors, colors)
        self.assertEqual(buffer.row_text(0), "   ")
        self.assertEqual(buffer.depth_at(1, 0), DEPTH_MIN)
        self.assertEqual(buffer.color_at(2, 0), NO_COLOR)

    def test_draw_text_skips_spaces(self):
        buffer = FrameBuffer(5, 1)
        buffer.draw_text(0, 0, "a b", RED)
        self.assertEqual(buffer.row_text(0), "a b  ")
        self.assertEqual(buffer.depth_at(1, 0), DEPTH_MIN)


if __name__ == "__main__":
    unittest.main()
