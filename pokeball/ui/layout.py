"""Layout helpers for placing text and art on the frame grid."""

import math
from typing import Optional, Tuple

from pokeball.models import GlyphImage

SPRITE_OFFSET_X = 30
FOOTER_ROWS = 5


def center_start(text: str, width: int) -> int:
    return max(0, (width - len(text)) // 2)


def scene_center(width: int, height: int) -> Tuple[int, int]:
    return width // 2, height // 2 - 2


def sprite_origin(image: GlyphImage, width: int, height: int) -> Tuple[int, int]:
    """Top-left cell for the encounter sprite: right of center, above the footer."""
    cx, _ = scene_center(width, height)
    left = cx + SPRITE_OFFSET_X - image.width // 2
    left = max(0, min(left, width - image.width))
    top = max(1, (height - FOOTER_ROWS - image.height) // 2)
    return left, top


def detail_origin(image: GlyphImage, width: int, height: int, top: int) -> Tuple[int, int]:
    left = max(0, (width - image.width) // 2)
    avail = max(0, height - FOOTER_ROWS - top)
    return left, top + max(0, (avail - image.height) // 2)


def column_layout(count: int, width: int, max_rows: int, gap: int = 2) -> Optional[Tuple[int, int, int]]:
    """(cols, rows, col_width) for flowing entries top-to-bottom, then left-to-right."""
    if count == 0 or max_rows <= 0:
        return None
    cols = max(1, math.ceil(count / max_rows))
    rows = math.ceil(count / cols)
    col_width = max(1, (width - gap * (cols - 1)) // cols)
    return cols, rows, col_width
