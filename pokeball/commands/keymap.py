"""Map typed lines to command tokens."""

import re
from typing import Optional

QUIT_WORDS = ("q", "quit", "exit")
DEX_WORDS = ("pokedex", "dex")
NEXT_WORDS = ("next", "run")
CTRL_C = "\x03"

_NAME_RE = re.compile(r"^[a-z0-9_-]{1,16}$")


def parse_command(line: str) -> str:
    return line.strip().lower()


def is_quit(line: str) -> bool:
    if CTRL_C in line:
        return True
    return parse_command(line) in QUIT_WORDS


def sanitize_trainer_name(text: str) -> Optional[str]:
    name = text.strip().lower()
    if _NAME_RE.match(name):
        return name
    return None


def _is_number(token: str) -> bool:
    return token.isascii() and token.isdigit()


def parse_dex_index(token: str, limit: int) -> Optional[int]:
    if not _is_number(token):
        return None
    value = int(token)
    if 1 <= value <= limit:
        return value
    return None


def map_line_to_command(line: str) -> Optional[str]:
    token = parse_command(line)
    if not token:
        return None
    if token == "catch":
        return "CATCH"
    if token in DEX_WORDS:
        return "DEX"
    if token == "back":
        return "BACK"
    if token in NEXT_WORDS:
        return "NEXT"
    if _is_number(token):
        return "NUMBER"
    return None
