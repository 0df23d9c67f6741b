"""Frame serialization into ANSI escape sequences."""

from typing import List

from pokeball.models import CellColor, ColorKind
from pokeball.ui.ansi import ANSI, ansi256_fg, rgb_to_ansi256, sgr, truecolor_fg
from pokeball.ui.framebuffer import FrameBuffer

TRUECOLOR = "truecolor"
ANSI256 = "ansi256"
MONO = "mono"
COLOR_MODES = (TRUECOLOR, ANSI256, MONO)


def color_escape(cell: CellColor, mode: str) -> str:
    if cell.kind == ColorKind.NONE:
        return ANSI.RESET
    if cell.kind == ColorKind.NAMED:
        return sgr(cell.code)
    r, g, b = cell.rgb
    if mode == TRUECOLOR:
        return truecolor_fg(r, g, b)
    return ansi256_fg(rgb_to_ansi256(r, g, b))


def frame_trailer(height: int) -> str:
    """Park the cursor below the frame and erase whatever a taller frame left."""
    return f"\033[{height + 1};1H" + ANSI.CLEAR_TO_END


def serialize_frame(buffer: FrameBuffer, mode: str = ANSI256) -> str:
    """Render the buffer row-major, emitting a color change only when it differs."""
    if mode not in COLOR_MODES:
        raise ValueError(f"unknown color mode: {mode}")
    width = buffer.width
    glyphs = buffer.glyphs
    colors = buffer.colors
    mono = mode == MONO
    out: List[str] = [ANSI.CURSOR_HOME]
    for y in range(buffer.height):
        if y:
            out.append("\r\n")
        current = None
        start = y * width
        for idx in range(start, start + width):
            ch = glyphs[idx]
            if ch == " " or mono:
                out.append(ch)
                continue
            cell = colors[idx]
            if cell != current:
                out.append(color_escape(cell, mode))
                current = cell
            out.append(ch)
        if current is not None and current.kind != ColorKind.NONE:
            out.append(ANSI.RESET)
    out.append(frame_trailer(buffer.height))
    return "".join(out)
