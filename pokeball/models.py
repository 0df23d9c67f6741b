from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class GlyphImage:
    width: int
    height: int
    chars: Tuple[str, ...]
    colors: Tuple[RGB, ...]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("glyph image dimensions must be positive")
        size = self.width * self.height
        if len(self.chars) != size or len(self.colors) != size:
            raise ValueError(
                f"glyph image expects {size} cells, got "
                f"{len(self.chars)} chars and {len(self.colors)} colors"
            )

    def visible_cells(self):
        """Yield (x, y, glyph, rgb) for every non-space cell."""
        for idx, ch in enumerate(self.chars):
            if ch != " ":
                yield idx % self.width, idx // self.width, ch, self.colors[idx]


AnimationSequence = Tuple[GlyphImage, ...]


class ColorKind(Enum):
    NONE = "none"
    NAMED = "named"
    RGB = "rgb"


@dataclass(frozen=True)
class CellColor:
    kind: ColorKind
    code: int = 0
    rgb: RGB = (0, 0, 0)

    @staticmethod
    def named(code: int) -> "CellColor":
        return CellColor(ColorKind.NAMED, code=code)

    @staticmethod
    def from_rgb(r: int, g: int, b: int) -> "CellColor":
        return CellColor(ColorKind.RGB, rgb=(r, g, b))


NO_COLOR = CellColor(ColorKind.NONE)


class CapturePhase(Enum):
    IDLE = "idle"
    THROWING = "throwing"
    OPENING = "opening"
    ABSORBING = "absorbing"
    CLOSING = "closing"
    SHAKING = "shaking"
    STAR_HOLD = "star_hold"


class Screen(Enum):
    NAME = "name"
    DEX_GRID = "dex_grid"
    DEX_DETAIL = "dex_detail"
    GAME = "game"


@dataclass
class Species:
    index: int
    name: str
    frames: AnimationSequence = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()

    @property
    def has_art(self) -> bool:
        return bool(self.frames)

    def frame_at(self, tick: int) -> Optional[GlyphImage]:
        if not self.frames:
            return None
        return self.frames[tick % len(self.frames)]
