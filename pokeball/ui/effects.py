"""Particle stream and starburst overlays for the capture sequence."""

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from pokeball.models import CellColor, GlyphImage
from pokeball.ui.ansi import SGR_BRIGHT_YELLOW, SGR_WHITE, SGR_YELLOW
from pokeball.ui.framebuffer import PARTICLE_DEPTH, STAR_DEPTH, FrameBuffer

PARTICLE_LIMIT = 360
PARTICLE_SPREAD = 24
PARTICLE_TRAVEL = 14

STAR_RAYS = 8
STAR_GLYPHS = "*+."


@dataclass(frozen=True)
class Particle:
    start_x: int
    start_y: int
    glyph: str
    color: Tuple[int, int, int]
    delay: int


def build_particle_plan(
    image: Optional[GlyphImage],
    left: int,
    top: int,
    limit: int = PARTICLE_LIMIT,
    rng: Optional[random.Random] = None,
) -> List[Particle]:
    """One particle per visible sprite glyph, thinned evenly above ``limit``."""
    if image is None:
        return []
    rng = rng or random.Random(0)
    cells = list(image.visible_cells())
    if len(cells) > limit > 0:
        stride = len(cells) / float(limit)
        cells = [cells[int(i * stride)] for i in range(limit)]
    plan = []
    for x, y, ch, rgb in cells:
        plan.append(Particle(left + x, top + y, ch, rgb, rng.randrange(PARTICLE_SPREAD)))
    return plan


def particle_progress(particle: Particle, frame: int) -> float:
    t = (frame - particle.delay) / float(PARTICLE_TRAVEL)
    return max(0.0, min(1.0, t))


def particle_position(particle: Particle, frame: int, target_x: float, target_y: float) -> Tuple[int, int, float]:
    t = particle_progress(particle, frame)
    eased = t * t
    x = particle.start_x + (target_x - particle.start_x) * eased
    y = particle.start_y + (target_y - particle.start_y) * eased
    return int(round(x)), int(round(y)), t


def draw_particles(
    buffer: FrameBuffer,
    plan: Sequence[Particle],
    frame: int,
    target_x: float,
    target_y: float,
) -> int:
    drawn = 0
    for particle in plan:
        x, y, t = particle_position(particle, frame, target_x, target_y)
        if 0.0 < t < 1.0:
            r, g, b = particle.color
            if buffer.plot(x, y, PARTICLE_DEPTH, particle.glyph, CellColor.from_rgb(r, g, b)):
                drawn += 1
    return drawn


def particle_launched(particle: Particle, frame: int) -> bool:
    return frame > particle.delay


def draw_starburst(buffer: FrameBuffer, cx: float, cy: float, frame: int, aspect: float = 2.0) -> None:
    length = 3 + int(3 * (0.5 + 0.5 * math.sin(frame * 0.35)))
    spin = frame * 0.08
    colors = (
        CellColor.named(SGR_BRIGHT_YELLOW),
        CellColor.named(SGR_YELLOW),
        CellColor.named(SGR_WHITE),
    )
    for ray in range(STAR_RAYS):
        angle = spin + ray * (2 * math.pi / STAR_RAYS)
        dx = math.cos(angle)
        dy = math.sin(angle)
        for step in range(2, 2 + length):
            band = min(len(STAR_GLYPHS) - 1, (step - 2) * len(STAR_GLYPHS) // length)
            x = int(round(cx + dx * step * aspect))
            y = int(round(cy + dy * step))
            buffer.plot(x, y, STAR_DEPTH, STAR_GLYPHS[band], colors[band])
