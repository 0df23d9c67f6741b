"""Filesystem and runtime configuration."""

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from pokeball.ui.rendering import ANSI256, COLOR_MODES, MONO, TRUECOLOR

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(BASE_DIR, "data")
DB_PATH = os.path.join(BASE_DIR, "pokedex.db")
ASSETS_DIR = BASE_DIR

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 2323
DEFAULT_WIDTH = 140
DEFAULT_HEIGHT = 40
TICK_SECONDS = 0.03


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    color_mode: str = ANSI256
    db_path: str = DB_PATH
    assets_dir: str = ASSETS_DIR
    data_dir: str = DATA_DIR
    log_level: str = "INFO"


def resolve_color_mode(override: Optional[str], environ: Mapping[str, str]) -> str:
    """Pick a color mode from an explicit override or the terminal's hints."""
    if override:
        mode = override.strip().lower()
        if mode not in COLOR_MODES:
            raise ValueError(f"unknown color mode: {override}")
        return mode
    colorterm = environ.get("COLORTERM", "").lower()
    if colorterm in ("truecolor", "24bit"):
        return TRUECOLOR
    term = environ.get("TERM", "").lower()
    if "256color" in term:
        return ANSI256
    if term == "dumb":
        return MONO
    return ANSI256


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokeball-server",
        description="Serve the animated Pokeball scene to terminal clients.",
    )
    parser.add_argument("--host", default=environ.get("POKEBALL_HOST", DEFAULT_HOST))
    parser.add_argument(
        "--port",
        type=_positive_int,
        default=environ.get("POKEBALL_PORT", str(DEFAULT_PORT)),
    )
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=environ.get("POKEBALL_WIDTH", str(DEFAULT_WIDTH)),
        help="frame width in cells",
    )
    parser.add_argument(
        "--height",
        type=_positive_int,
        default=environ.get("POKEBALL_HEIGHT", str(DEFAULT_HEIGHT)),
        help="frame height in cells",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=environ.get("POKEBALL_COLOR") or None,
        help="color mode; inferred from COLORTERM/TERM when omitted",
    )
    parser.add_argument("--db", default=environ.get("POKEBALL_DB", DB_PATH))
    parser.add_argument("--assets", default=environ.get("POKEBALL_ASSETS", ASSETS_DIR))
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    return parser


def load_settings(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    args = build_parser(environ).parse_args(argv)
    return Settings(
        host=args.host,
        port=args.port,
        width=args.width,
        height=args.height,
        color_mode=resolve_color_mode(args.color, environ),
        db_path=args.db,
        assets_dir=args.assets,
        log_level=args.log_level,
    )
