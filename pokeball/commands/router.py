"""Command router for screen transitions and capture actions."""

from dataclasses import dataclass
from typing import List, Optional

from pokeball.capture import set_notice, spawn_encounter, start_throw
from pokeball.commands.keymap import map_line_to_command, parse_command, parse_dex_index, sanitize_trainer_name
from pokeball.data_access.pokedex_data import PokedexData
from pokeball.data_access.text_data import TextData
from pokeball.models import Screen, Species
from pokeball.state import SessionState


@dataclass
class RouterContext:
    pokedex: PokedexData
    roster: List[Species]
    texts: TextData

    @property
    def encounter_pool(self) -> List[Species]:
        return [species for species in self.roster if species.has_art]


def roll_encounter(state: SessionState, ctx: RouterContext) -> Optional[Species]:
    pool = ctx.encounter_pool
    current = state.scene.encounter
    if len(pool) > 1 and current is not None:
        pool = [species for species in pool if species.name != current.name]
    species = state.rng.choice(pool) if pool else None
    spawn_encounter(state.scene, species)
    if species is not None:
        set_notice(state.scene, ctx.texts.render("game", "encounter", "A wild {name} appeared!", name=species.display_name))
    else:
        set_notice(state.scene, ctx.texts.get("game", "no_encounter"))
    return species


def handle_command(line: str, state: SessionState, ctx: RouterContext) -> bool:
    """Apply one typed line; returns False when the line means nothing here."""
    state.last_line = line.strip()
    if state.screen == Screen.NAME:
        return _handle_name(line, state, ctx)
    command = map_line_to_command(line)
    if command is None:
        return False
    if state.screen == Screen.GAME:
        return _handle_game(command, state, ctx)
    if state.screen in (Screen.DEX_GRID, Screen.DEX_DETAIL):
        return _handle_dex(command, line, state, ctx)
    return False


def _handle_name(line: str, state: SessionState, ctx: RouterContext) -> bool:
    name = sanitize_trainer_name(line)
    if name is None:
        if line.strip():
            set_notice(state.scene, ctx.texts.get("name", "invalid", "Invalid name."))
        return False
    state.trainer = name
    state.pending_load = True
    state.screen = Screen.GAME
    roll_encounter(state, ctx)
    return True


def _handle_game(command: str, state: SessionState, ctx: RouterContext) -> bool:
    if command == "CATCH":
        if start_throw(state.scene):
            return True
        if state.scene.busy:
            set_notice(state.scene, ctx.texts.get("game", "busy"))
        return False
    if command == "DEX":
        state.screen = Screen.DEX_GRID
        return True
    if command == "NEXT":
        if state.scene.busy:
            return False
        roll_encounter(state, ctx)
        return True
    return False


def _handle_dex(command: str, line: str, state: SessionState, ctx: RouterContext) -> bool:
    if command == "BACK":
        state.screen = Screen.GAME if state.screen == Screen.DEX_GRID else Screen.DEX_GRID
        return True
    if command == "NUMBER":
        index = parse_dex_index(parse_command(line), ctx.pokedex.count)
        if index is None:
            return False
        state.dex_index = index
        state.screen = Screen.DEX_DETAIL
        return True
    return False
