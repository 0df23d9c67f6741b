"""Load user-facing message templates from JSON."""

import json
from typing import Dict

from pokeball.ui.text import format_text


class TextData:
    def __init__(self, path: str):
        self._path = path
        self._data: Dict[str, dict] = {}
        self.load()

    def load(self):
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            data = {}
        self._data = data if isinstance(data, dict) else {}

    def get(self, section: str, key: str, default: str = "") -> str:
        section_data = self._data.get(section, {})
        if isinstance(section_data, dict):
            return str(section_data.get(key, default))
        return default

    def render(self, section: str, key: str, default: str = "", **kwargs) -> str:
        return format_text(self.get(section, key, default), **kwargs)
