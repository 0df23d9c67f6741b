"""Per-tick orchestration: advance the scene, compose, serialize."""

import logging

from pokeball.capture import advance, advance_ambient, set_notice
from pokeball.commands.router import roll_encounter
from pokeball.models import CapturePhase, Screen, Species
from pokeball.state import SessionState
from pokeball.ui.effects import build_particle_plan
from pokeball.ui.layout import sprite_origin
from pokeball.ui.rendering import serialize_frame
from pokeball.ui.screens import compose_screen, sprite_frame

logger = logging.getLogger(__name__)


def _on_capture(state: SessionState, ctx, species: Species):
    if state.mark_caught(species.name):
        logger.info("trainer %s caught %s", state.trainer, species.name)
    else:
        set_notice(state.scene, ctx.texts.render("game", "already", "", name=species.display_name))


def _plan_builder(state: SessionState):
    buffer = state.buffer

    def build(scene):
        image = sprite_frame(scene)
        if image is None:
            return []
        left, top = sprite_origin(image, buffer.width, buffer.height)
        return build_particle_plan(image, left, top, rng=state.rng)

    return build


def advance_scene(state: SessionState, ctx):
    scene = state.scene
    if state.screen != Screen.GAME:
        advance_ambient(scene)
        return
    finishing = scene.phase == CapturePhase.STAR_HOLD
    advance(
        scene,
        on_capture=lambda species: _on_capture(state, ctx, species),
        plan_builder=_plan_builder(state),
    )
    if finishing and scene.phase == CapturePhase.IDLE:
        roll_encounter(state, ctx.router_ctx)


def render(state: SessionState, ctx) -> str:
    state.buffer.clear()
    compose_screen(state.buffer, state, ctx.screen_ctx)
    return serialize_frame(state.buffer, state.color_mode)


def tick(state: SessionState, ctx) -> str:
    """Advance exactly one tick and return the serialized frame."""
    advance_scene(state, ctx)
    return render(state, ctx)
