"""Immediate-mode rasterizer for the Pokéball sphere.

The surface is sampled over a fixed (phi, theta) grid every frame; each sample
is textured, rotated, projected with perspective and z-tested straight into
the frame buffer. No mesh is kept between frames.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from pokeball.models import CellColor
from pokeball.ui.ansi import SGR_BRIGHT_RED, SGR_BRIGHT_WHITE, SGR_DARK_GRAY
from pokeball.ui.framebuffer import FrameBuffer

BALL_RAMP = ".,-~:;=!*#$@"
ANGLE_STEP = 0.03
CAMERA_DISTANCE = 4.0

BUTTON_CORE_RADIUS = 0.12
BUTTON_RING_RADIUS = 0.21
SEAM_HALF_WIDTH = 0.07
HINGE_GAP = 0.09
LID_LIFT = 0.55
LID_PUSH = 0.35
SPECULAR_POWER = 16

RED = CellColor.named(SGR_BRIGHT_RED)
WHITE = CellColor.named(SGR_BRIGHT_WHITE)
DARK_GRAY = CellColor.named(SGR_DARK_GRAY)


def _normalize(x: float, y: float, z: float) -> Tuple[float, float, float]:
    length = math.sqrt(x * x + y * y + z * z)
    return x / length, y / length, z / length


LIGHT_DIR = _normalize(-0.45, 0.65, -0.6)
VIEW_DIR = (0.0, 0.0, -1.0)

# Precomputed sampling grid: (sin(theta), cos(theta)) and (sin(phi), cos(phi)).
_THETAS = [
    (math.sin(i * ANGLE_STEP), math.cos(i * ANGLE_STEP))
    for i in range(int(math.ceil(math.pi / ANGLE_STEP)))
    if i * ANGLE_STEP < math.pi
]
_PHIS = [
    (math.sin(i * ANGLE_STEP), math.cos(i * ANGLE_STEP))
    for i in range(int(math.ceil(2 * math.pi / ANGLE_STEP)))
    if i * ANGLE_STEP < 2 * math.pi
]


@dataclass
class BallParams:
    center_x: float
    center_y: float
    spin: float = 0.0
    tilt: float = 0.0
    open_amount: float = 0.0
    scale: float = 24.0
    aspect: float = 2.0


def classify_surface(ox: float, oy: float, oz: float) -> Tuple[CellColor, Optional[str]]:
    """Texture lookup; a non-None glyph marks a solid region that skips lighting."""
    radial = ox * ox + oy * oy
    if oz < 0:
        if radial < BUTTON_CORE_RADIUS * BUTTON_CORE_RADIUS:
            return WHITE, "O"
        if radial < BUTTON_RING_RADIUS * BUTTON_RING_RADIUS:
            return DARK_GRAY, "#"
    if abs(oy) < SEAM_HALF_WIDTH:
        return DARK_GRAY, "="
    if oy > 0:
        return RED, None
    return WHITE, None


def is_button(ox: float, oy: float, oz: float) -> bool:
    return oz < 0 and ox * ox + oy * oy < BUTTON_RING_RADIUS * BUTTON_RING_RADIUS


def shade_for(nx: float, ny: float, nz: float) -> float:
    lx, ly, lz = LIGHT_DIR
    dot = nx * lx + ny * ly + nz * lz
    diffuse = max(0.0, dot)
    rx = 2.0 * dot * nx - lx
    ry = 2.0 * dot * ny - ly
    rz = 2.0 * dot * nz - lz
    vx, vy, vz = VIEW_DIR
    spec = max(0.0, rx * vx + ry * vy + rz * vz) ** SPECULAR_POWER
    return min(1.0, 0.12 + diffuse * 0.9 + spec * 0.6)


def ramp_index(shade: float, ramp_len: int) -> int:
    idx = int(math.floor(shade * (ramp_len - 1)))
    return max(0, min(ramp_len - 1, idx))


def max_depth(open_amount: float = 1.0) -> float:
    """Upper bound on ooz for the given lid opening.

    A displaced lid sample lies at most 1 + |(LID_LIFT, LID_PUSH)| * open from
    the center, and rotations preserve that distance.
    """
    reach = 1.0 + math.hypot(LID_LIFT, LID_PUSH) * max(0.0, min(1.0, open_amount))
    return 1.0 / (CAMERA_DISTANCE - reach)


def rasterize_ball(buffer: FrameBuffer, params: BallParams, ramp: str = BALL_RAMP) -> int:
    """Draw the ball into ``buffer``; returns the number of accepted samples."""
    cos_a, sin_a = math.cos(params.spin), math.sin(params.spin)
    cos_b, sin_b = math.cos(params.tilt), math.sin(params.tilt)
    open_amount = max(0.0, min(1.0, params.open_amount))
    sx = params.scale * params.aspect
    sy = params.scale
    ramp_len = len(ramp)
    written = 0

    for sin_p, cos_p in _PHIS:
        for sin_t, cos_t in _THETAS:
            ox = sin_t * cos_p
            oy = cos_t
            oz = sin_t * sin_p

            color, solid = classify_surface(ox, oy, oz)
            px, py, pz = ox, oy, oz
            if open_amount > 0:
                if abs(oy) < HINGE_GAP * open_amount and not is_button(ox, oy, oz):
                    continue
                if oy > 0:
                    py += LID_LIFT * open_amount
                    pz += LID_PUSH * open_amount

            # Spin about the vertical axis.
            x = px * cos_a + pz * sin_a
            z = -px * sin_a + pz * cos_a
            y = py
            # Tilt about the horizontal axis.
            y_final = y * cos_b - z * sin_b
            z_final = y * sin_b + z * cos_b

            ooz = 1.0 / (z_final + CAMERA_DISTANCE)
            xp = int(params.center_x + ooz * x * sx)
            yp = int(params.center_y - ooz * y_final * sy)

            if solid is not None:
                glyph = solid
            else:
                nx = ox * cos_a + oz * sin_a
                nz0 = -ox * sin_a + oz * cos_a
                ny = oy * cos_b - nz0 * sin_b
                nz = oy * sin_b + nz0 * cos_b
                glyph = ramp[ramp_index(shade_for(nx, ny, nz), ramp_len)]

            if buffer.plot(xp, yp, ooz, glyph, color):
                written += 1
    return written
