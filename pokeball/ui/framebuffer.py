"""Per-session glyph/depth/color scratch buffer."""

from typing import List

from pokeball.models import NO_COLOR, CellColor, GlyphImage

DEPTH_MIN = float("-inf")

# Nominal depths for flat layers. The ball's ooz stays within [0.2, 0.43], so the
# sprite sits behind it and every overlay sits in front.
SPRITE_DEPTH = 0.1
PARTICLE_DEPTH = 0.6
STAR_DEPTH = 0.9
TEXT_DEPTH = 2.0


class FrameBuffer:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self.width = width
        self.height = height
        size = width * height
        self.glyphs: List[str] = [" "] * size
        self.depths: List[float] = [DEPTH_MIN] * size
        self.colors: List[CellColor] = [NO_COLOR] * size

    def clear(self):
        size = self.width * self.height
        glyphs = self.glyphs
        depths = self.depths
        colors = self.colors
        for i in range(size):
            glyphs[i] = " "
            depths[i] = DEPTH_MIN
            colors[i] = NO_COLOR

    def plot(self, x: int, y: int, depth: float, glyph: str, color: CellColor) -> bool:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        idx = x + y * self.width
        if depth <= self.depths[idx]:
            return False
        self.depths[idx] = depth
        self.glyphs[idx] = glyph
        self.colors[idx] = color
        return True

    def glyph_at(self, x: int, y: int) -> str:
        return self.glyphs[x + y * self.width]

    def color_at(self, x: int, y: int) -> CellColor:
        return self.colors[x + y * self.width]

    def depth_at(self, x: int, y: int) -> float:
        return self.depths[x + y * self.width]

    def row_text(self, y: int) -> str:
        start = y * self.width
        return "".join(self.glyphs[start:start + self.width])

    def draw_text(self, x: int, y: int, text: str, color: CellColor = NO_COLOR, depth: float = TEXT_DEPTH):
        for offset, ch in enumerate(text):
            if ch != " ":
                self.plot(x + offset, y, depth, ch, color)

    def draw_glyph_image(self, image: GlyphImage, left: int, top: int, depth: float = SPRITE_DEPTH):
        for x, y, ch, (r, g, b) in image.visible_cells():
            self.plot(left + x, top + y, depth, ch, CellColor.from_rgb(r, g, b))
