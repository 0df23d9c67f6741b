"""Application bootstrap helpers."""

import os
from dataclasses import dataclass
from typing import List, Optional

from pokeball.commands.router import RouterContext
from pokeball.config import Settings
from pokeball.data_access.assets_data import AssetTable, build_species, load_asset_table
from pokeball.data_access.pokedex_data import PokedexData
from pokeball.data_access.text_data import TextData
from pokeball.data_access.trainers_data import TrainerStore
from pokeball.models import Species
from pokeball.ui.screens import ScreenContext


@dataclass
class AppContext:
    settings: Settings
    pokedex: PokedexData
    texts: TextData
    assets: AssetTable
    roster: List[Species]
    store: TrainerStore
    router_ctx: RouterContext
    screen_ctx: ScreenContext


def _load_pokedex(data_dir: str) -> PokedexData:
    return PokedexData(os.path.join(data_dir, "pokedex.json"))


def _load_texts(data_dir: str) -> TextData:
    return TextData(os.path.join(data_dir, "text.json"))


def create_app(settings: Optional[Settings] = None) -> AppContext:
    """Load manifests and convert every sprite; raises AssetError on bad art."""
    settings = settings or Settings()
    pokedex = _load_pokedex(settings.data_dir)
    texts = _load_texts(settings.data_dir)
    assets = load_asset_table(pokedex, settings.assets_dir)
    roster = build_species(pokedex, assets)
    store = TrainerStore(settings.db_path)

    router_ctx = RouterContext(pokedex=pokedex, roster=roster, texts=texts)
    screen_ctx = ScreenContext(texts=texts, roster=roster)

    return AppContext(
        settings=settings,
        pokedex=pokedex,
        texts=texts,
        assets=assets,
        roster=roster,
        store=store,
        router_ctx=router_ctx,
        screen_ctx=screen_ctx,
    )
