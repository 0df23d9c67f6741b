"""Print caught lists from the trainer database."""

import argparse
import sys
from typing import Optional, Sequence, TextIO

from pokeball.config import DB_PATH
from pokeball.data_access.trainers_data import TrainerStore


def dump_trainer(store: TrainerStore, name: str, out: TextIO):
    caught = store.get(name)
    if caught is None:
        out.write(f"trainer not found: {name}\n")
        return
    out.write(f"trainer: {name}\n")
    out.write(f"count: {len(caught)}\n")
    for entry in caught:
        out.write(f"- {entry}\n")


def dump_all(store: TrainerStore, out: TextIO):
    for name, caught in store.all():
        out.write(f"{name}: {len(caught)} caught\n")


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    parser = argparse.ArgumentParser(prog="pokedex-dump", description="Show what trainers have caught.")
    parser.add_argument("name", nargs="?", help="trainer to show; omit to list everyone")
    parser.add_argument("--db", default=DB_PATH, help="path to the trainer database")
    args = parser.parse_args(argv)
    out = out or sys.stdout
    store = TrainerStore(args.db)
    if args.name:
        dump_trainer(store, args.name.strip().lower(), out)
    else:
        dump_all(store, out)
    return 0
