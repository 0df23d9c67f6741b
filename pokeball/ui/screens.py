"""Screen composition: paint each screen's layers into the session frame buffer."""

from dataclasses import dataclass
from typing import List, Optional

from pokeball.capture import SceneState
from pokeball.data_access.text_data import TextData
from pokeball.models import CapturePhase, CellColor, GlyphImage, Screen, Species
from pokeball.state import SessionState
from pokeball.ui.ansi import (
    SGR_BRIGHT_CYAN,
    SGR_BRIGHT_GREEN,
    SGR_BRIGHT_RED,
    SGR_BRIGHT_WHITE,
    SGR_BRIGHT_YELLOW,
    SGR_CYAN,
    SGR_DARK_GRAY,
    SGR_WHITE,
)
from pokeball.ui.effects import PARTICLE_SPREAD, draw_particles, draw_starburst, particle_launched
from pokeball.ui.framebuffer import SPRITE_DEPTH, FrameBuffer
from pokeball.ui.layout import center_start, column_layout, detail_origin, scene_center, sprite_origin
from pokeball.ui.sphere import BallParams, rasterize_ball

BALL_SCALE = 24.0
TITLE_BALL_SCALE = 14.0
FRAMES_PER_SPRITE_STEP = 3

TITLE_COLOR = CellColor.named(SGR_BRIGHT_YELLOW)
TEXT_COLOR = CellColor.named(SGR_WHITE)
HINT_COLOR = CellColor.named(SGR_DARK_GRAY)
NOTICE_COLOR = CellColor.named(SGR_BRIGHT_CYAN)
ERROR_COLOR = CellColor.named(SGR_BRIGHT_RED)
CAUGHT_COLOR = CellColor.named(SGR_BRIGHT_GREEN)
PROMPT_COLOR = CellColor.named(SGR_BRIGHT_WHITE)
STATUS_COLOR = CellColor.named(SGR_CYAN)
SILHOUETTE_COLOR = CellColor.named(SGR_DARK_GRAY)


@dataclass
class ScreenContext:
    texts: TextData
    roster: List[Species]

    def species(self, index: int) -> Optional[Species]:
        if 1 <= index <= len(self.roster):
            return self.roster[index - 1]
        return None


def ball_scale(height: int, base: float = BALL_SCALE) -> float:
    return max(4.0, min(base, height * 0.6))


def sprite_frame(scene: SceneState) -> Optional[GlyphImage]:
    if scene.encounter is None:
        return None
    return scene.encounter.frame_at(scene.tick // FRAMES_PER_SPRITE_STEP)


def ball_center(scene: SceneState, width: int, height: int):
    cx, cy = scene_center(width, height)
    return cx + scene.ball_x, cy + scene.ball_y


def _draw_centered(buffer: FrameBuffer, y: int, text: str, color: CellColor):
    buffer.draw_text(center_start(text, buffer.width), y, text, color)


def _draw_prompt(buffer: FrameBuffer, last_line: str):
    line = ("> " + last_line)[: max(0, buffer.width - 1)]
    buffer.draw_text(0, buffer.height - 1, line, PROMPT_COLOR)


def _draw_sprite(buffer: FrameBuffer, scene: SceneState):
    image = sprite_frame(scene)
    if image is None:
        return
    phase = scene.phase
    if phase in (CapturePhase.CLOSING, CapturePhase.SHAKING, CapturePhase.STAR_HOLD):
        return
    left, top = sprite_origin(image, buffer.width, buffer.height)
    if phase != CapturePhase.ABSORBING:
        buffer.draw_glyph_image(image, left, top, SPRITE_DEPTH)
        return
    if scene.frame >= PARTICLE_SPREAD:
        return
    # Cells whose particle already left the sprite are drawn as empty.
    gone = {
        (p.start_x, p.start_y)
        for p in scene.particles
        if particle_launched(p, scene.frame)
    }
    for x, y, ch, (r, g, b) in image.visible_cells():
        if (left + x, top + y) not in gone:
            buffer.plot(left + x, top + y, SPRITE_DEPTH, ch, CellColor.from_rgb(r, g, b))


def compose_game(buffer: FrameBuffer, state: SessionState, ctx: ScreenContext):
    """Game screen: sprite, ball, particles, starburst, status text, prompt."""
    scene = state.scene
    width, height = buffer.width, buffer.height
    bx, by = ball_center(scene, width, height)

    _draw_sprite(buffer, scene)
    rasterize_ball(
        buffer,
        BallParams(
            center_x=bx,
            center_y=by,
            spin=scene.spin,
            tilt=scene.tilt,
            open_amount=scene.open_amount,
            scale=ball_scale(height),
        ),
    )
    if scene.phase == CapturePhase.ABSORBING:
        draw_particles(buffer, scene.particles, scene.frame, bx, by)
    if scene.phase == CapturePhase.STAR_HOLD:
        draw_starburst(buffer, bx, by, scene.frame)

    status = f"{state.trainer}  {len(state.caught)}/{len(ctx.roster)}"
    buffer.draw_text(1, 0, status, STATUS_COLOR)
    if scene.encounter is not None:
        label = f"#{scene.encounter.index:03d} {scene.encounter.display_name}"
        buffer.draw_text(max(0, width - len(label) - 1), 0, label, TEXT_COLOR)
    if scene.caught_timer > 0 and scene.caught_name:
        caught = ctx.texts.render("game", "caught", "Gotcha! {name} was caught!", name=scene.caught_name)
        _draw_centered(buffer, 2, caught, TITLE_COLOR)
    if scene.notice:
        _draw_centered(buffer, height - 3, scene.notice, NOTICE_COLOR)
    buffer.draw_text(1, height - 2, ctx.texts.get("game", "hint", ""), HINT_COLOR)
    _draw_prompt(buffer, state.last_line)


def compose_name(buffer: FrameBuffer, state: SessionState, ctx: ScreenContext):
    scene = state.scene
    width, height = buffer.width, buffer.height
    _draw_centered(buffer, 1, ctx.texts.get("name", "title", ""), TITLE_COLOR)
    rasterize_ball(
        buffer,
        BallParams(
            center_x=width // 2,
            center_y=height // 2 - 2,
            spin=scene.spin,
            tilt=scene.tilt,
            scale=ball_scale(height, TITLE_BALL_SCALE),
        ),
    )
    _draw_centered(buffer, height - 5, ctx.texts.get("name", "prompt", ""), TEXT_COLOR)
    _draw_centered(buffer, height - 4, ctx.texts.get("name", "hint", ""), HINT_COLOR)
    if scene.notice:
        _draw_centered(buffer, height - 3, scene.notice, ERROR_COLOR)
    _draw_prompt(buffer, state.last_line)


def compose_dex_grid(buffer: FrameBuffer, state: SessionState, ctx: ScreenContext):
    width, height = buffer.width, buffer.height
    title = ctx.texts.render(
        "dex",
        "title",
        "POKEDEX",
        trainer=state.trainer,
        count=len(state.caught),
        total=len(ctx.roster),
    )
    _draw_centered(buffer, 0, title, TITLE_COLOR)
    unknown = ctx.texts.get("dex", "unknown", "???")
    layout = column_layout(len(ctx.roster), width - 2, height - 5)
    if layout is not None:
        _, rows, col_width = layout
        for offset, species in enumerate(ctx.roster):
            col, row = divmod(offset, rows)
            caught = species.name in state.caught
            name = species.display_name if caught else unknown
            entry = f"{species.index:03d} {name}"[:col_width]
            if species.index == state.dex_index:
                color = TITLE_COLOR
            else:
                color = CAUGHT_COLOR if caught else HINT_COLOR
            buffer.draw_text(1 + col * (col_width + 2), 2 + row, entry, color)
    buffer.draw_text(1, height - 2, ctx.texts.get("dex", "hint", ""), HINT_COLOR)
    _draw_prompt(buffer, state.last_line)


def compose_dex_detail(buffer: FrameBuffer, state: SessionState, ctx: ScreenContext):
    width, height = buffer.width, buffer.height
    species = ctx.species(state.dex_index)
    if species is None:
        compose_dex_grid(buffer, state, ctx)
        return
    caught = species.name in state.caught
    name = species.display_name if caught else ctx.texts.get("dex", "unknown", "???")
    label = ctx.texts.get("dex", "caught_label" if caught else "missing_label", "")
    header = f"#{species.index:03d}  {name}  {label}"
    _draw_centered(buffer, 0, header, CAUGHT_COLOR if caught else HINT_COLOR)

    image = species.frame_at(state.scene.tick // FRAMES_PER_SPRITE_STEP)
    if image is None:
        _draw_centered(buffer, height // 2, ctx.texts.get("dex", "no_art", ""), HINT_COLOR)
    else:
        left, top = detail_origin(image, width, height, 2)
        if caught:
            buffer.draw_glyph_image(image, left, top, SPRITE_DEPTH)
        else:
            for x, y, ch, _ in image.visible_cells():
                buffer.plot(left + x, top + y, SPRITE_DEPTH, ch, SILHOUETTE_COLOR)
    buffer.draw_text(1, height - 2, ctx.texts.get("dex", "detail_hint", ""), HINT_COLOR)
    _draw_prompt(buffer, state.last_line)


COMPOSERS = {
    Screen.NAME: compose_name,
    Screen.GAME: compose_game,
    Screen.DEX_GRID: compose_dex_grid,
    Screen.DEX_DETAIL: compose_dex_detail,
}


def compose_screen(buffer: FrameBuffer, state: SessionState, ctx: ScreenContext):
    COMPOSERS[state.screen](buffer, state, ctx)
