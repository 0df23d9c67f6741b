"""Build the shared, read-only table of converted sprite art."""

import logging
import os
from typing import Dict, List, Optional

from pokeball.data_access.pokedex_data import PokedexData
from pokeball.models import AnimationSequence, Species
from pokeball.ui.glyphs import AssetError, load_glyph_animation, load_glyph_image

logger = logging.getLogger(__name__)

SPRITE_CHARSET = "@%#*+=-:. "


class AssetTable:
    def __init__(self, frames_by_name: Dict[str, AnimationSequence]):
        self._frames = dict(frames_by_name)

    def __len__(self) -> int:
        return len(self._frames)

    def __contains__(self, name: str) -> bool:
        return name in self._frames

    def frames(self, name: str) -> AnimationSequence:
        return self._frames.get(name, ())

    def names(self) -> List[str]:
        return sorted(self._frames)


def _load_entry(path: str, entry: dict, charset: str) -> AnimationSequence:
    try:
        width = int(entry.get("width", 0))
        height = int(entry.get("height", 0))
    except (TypeError, ValueError) as exc:
        raise AssetError(f"invalid sprite size for {path}") from exc
    if width <= 0 or height <= 0:
        raise AssetError(f"invalid sprite size for {path}")
    animated = bool(entry.get("animated", False)) or path.lower().endswith(".gif")
    if animated:
        return load_glyph_animation(path, width, height, charset)
    return (load_glyph_image(path, width, height, charset),)


def load_asset_table(pokedex: PokedexData, assets_dir: str, charset: str = SPRITE_CHARSET) -> AssetTable:
    """Convert every sprite listed in the manifest; any failure aborts the load."""
    frames_by_name = {}
    for name, entry in sorted(pokedex.sprite_entries().items()):
        path = entry["path"]
        if not os.path.isabs(path):
            path = os.path.join(assets_dir, path)
        frames_by_name[name] = _load_entry(path, entry, charset)
        logger.debug("converted %s (%d frame(s))", name, len(frames_by_name[name]))
    logger.info("loaded %d sprite asset(s)", len(frames_by_name))
    return AssetTable(frames_by_name)


def build_species(pokedex: PokedexData, assets: Optional[AssetTable]) -> List[Species]:
    roster = []
    for index, name in enumerate(pokedex.all(), start=1):
        frames = assets.frames(name) if assets is not None else ()
        roster.append(Species(index=index, name=name, frames=frames))
    return roster
