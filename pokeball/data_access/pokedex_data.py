"""Load the species manifest from JSON."""

import json
from typing import Dict, List

DEX_SIZE = 151


class PokedexData:
    def __init__(self, path: str):
        self._path = path
        self._species: List[str] = []
        self._sprites: Dict[str, dict] = {}
        self.load()

    def load(self):
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            data = {}
        if not isinstance(data, dict):
            data = {}
        species = data.get("species", [])
        self._species = [str(name).lower() for name in species] if isinstance(species, list) else []
        sprites = data.get("sprites", {})
        self._sprites = {}
        if isinstance(sprites, dict):
            for name, entry in sprites.items():
                if isinstance(entry, dict) and entry.get("path"):
                    self._sprites[str(name).lower()] = entry

    @property
    def count(self) -> int:
        return len(self._species)

    def all(self) -> List[str]:
        return list(self._species)

    def sprite_entries(self) -> Dict[str, dict]:
        return dict(self._sprites)
