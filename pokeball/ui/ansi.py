"""ANSI escape helpers for the terminal UI."""


class ANSI:
    RESET = "\033[0m"
    CURSOR_HIDE = "\033[?25l"
    CURSOR_SHOW = "\033[?25h"
    CURSOR_HOME = "\033[H"
    CLEAR_SCREEN = "\033[2J"
    CLEAR_TO_END = "\033[J"
    WRAP_OFF = "\033[?7l"
    WRAP_ON = "\033[?7h"
    ALT_SCREEN_ON = "\033[?1049h"
    ALT_SCREEN_OFF = "\033[?1049l"


# SGR foreground codes used for NAMED cells.
SGR_YELLOW = 33
SGR_CYAN = 36
SGR_WHITE = 37
SGR_DARK_GRAY = 90
SGR_BRIGHT_RED = 91
SGR_BRIGHT_GREEN = 92
SGR_BRIGHT_YELLOW = 93
SGR_BRIGHT_CYAN = 96
SGR_BRIGHT_WHITE = 97

ENTER_SEQUENCE = ANSI.ALT_SCREEN_ON + ANSI.WRAP_OFF + ANSI.CLEAR_SCREEN + ANSI.CURSOR_HIDE
RESTORE_SEQUENCE = ANSI.RESET + ANSI.CURSOR_SHOW + ANSI.WRAP_ON + ANSI.ALT_SCREEN_OFF


def sgr(code: int) -> str:
    return f"\033[{code}m"


def truecolor_fg(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"


def ansi256_fg(index: int) -> str:
    return f"\033[38;5;{index}m"


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Quantize an RGB triple to the xterm-256 palette.

    Near-gray colors (channels within 12 of each other) with a mean inside
    (8, 248) use the 24-step grayscale ramp; everything else goes to the
    6x6x6 cube, whose corners 16 and 231 are pure black and white.
    """
    hi = max(r, g, b)
    lo = min(r, g, b)
    if hi - lo <= 12:
        mean = (r + g + b) / 3.0
        if 8 < mean < 248:
            return 232 + int(round((mean - 8) / 247 * 23))
        if mean <= 8:
            return 16
        return 231
    ri = int(round(r / 255 * 5))
    gi = int(round(g / 255 * 5))
    bi = int(round(b / 255 * 5))
    return 16 + 36 * ri + 6 * gi + bi

