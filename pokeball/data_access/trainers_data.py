"""Persist each trainer's caught species in sqlite."""

import json
import sqlite3
from contextlib import closing
from typing import Iterable, List, Optional, Set, Tuple

SCHEMA = "CREATE TABLE IF NOT EXISTS trainers (name TEXT PRIMARY KEY, pokedex TEXT NOT NULL)"


def _decode(text: str) -> List[str]:
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError):
        return []
    if not isinstance(data, list):
        return []
    return [str(entry) for entry in data]


class TrainerStore:
    """Trainer table access.

    A fresh connection is opened per call, so one store can be shared by
    worker threads without locking.
    """

    def __init__(self, path: str):
        self._path = path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path)
        conn.execute(SCHEMA)
        return conn

    def get(self, trainer: str) -> Optional[List[str]]:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT pokedex FROM trainers WHERE name = ?", (trainer,)
            ).fetchone()
        if row is None:
            return None
        return _decode(row[0])

    def all(self) -> List[Tuple[str, List[str]]]:
        with closing(self._connect()) as conn:
            rows = conn.execute("SELECT name, pokedex FROM trainers ORDER BY name").fetchall()
        return [(name, _decode(text)) for name, text in rows]

    def load_caught_set(self, trainer: str) -> Set[str]:
        return set(self.get(trainer) or [])

    def save_caught_set(self, trainer: str, caught: Iterable[str]):
        payload = json.dumps(sorted(set(caught)))
        with closing(self._connect()) as conn:
            with conn:
                conn.execute(
                    "INSERT INTO trainers (name, pokedex) VALUES (?, ?) "
                    "ON CONFLICT(name) DO UPDATE SET pokedex = excluded.pokedex",
                    (trainer, payload),
                )
