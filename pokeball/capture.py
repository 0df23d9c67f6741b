import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pokeball.models import CapturePhase, Species
from pokeball.ui.effects import Particle

BALL_START_X = -45.0
GROUND_Y = 8.0
HOVER_Y = 0.0
ARC_HEIGHT = 14.0
THROW_SPEED = 1.5
THROW_END_X = 12.0
OPEN_X = 15.0

OPEN_FRAMES = 16
ABSORB_FRAMES = 40
CLOSE_FRAMES = 12
SHAKE_COUNT = 3
SHAKE_FRAMES = 20
SHAKE_AMPLITUDE = 2.5
STAR_FRAMES = 45

IDLE_SPIN = 0.03
THROW_SPIN = 0.35
TILT_SPEED = 0.04
TILT_BASE = 0.3
TILT_SWING = 0.2

CAUGHT_MESSAGE_FRAMES = 90
NOTICE_FRAMES = 75

CaptureCallback = Callable[[Species], None]
PlanBuilder = Callable[["SceneState"], List[Particle]]


@dataclass
class SceneState:
    phase: CapturePhase = CapturePhase.IDLE
    frame: int = 0
    ball_x: float = BALL_START_X
    ball_y: float = GROUND_Y
    spin: float = 0.0
    tilt_phase: float = 0.0
    open_amount: float = 0.0
    particles: List[Particle] = field(default_factory=list)
    capture_recorded: bool = False
    caught_timer: int = 0
    caught_name: str = ""
    notice: str = ""
    notice_timer: int = 0
    encounter: Optional[Species] = None
    tick: int = 0

    @property
    def tilt(self) -> float:
        return TILT_BASE + TILT_SWING * math.sin(self.tilt_phase)

    @property
    def busy(self) -> bool:
        return self.phase != CapturePhase.IDLE


def spawn_encounter(scene: SceneState, species: Optional[Species]):
    scene.encounter = species
    scene.phase = CapturePhase.IDLE
    scene.frame = 0
    scene.ball_x = BALL_START_X
    scene.ball_y = GROUND_Y
    scene.open_amount = 0.0
    scene.particles = []
    scene.capture_recorded = False


def set_notice(scene: SceneState, text: str, frames: int = NOTICE_FRAMES):
    scene.notice = text
    scene.notice_timer = frames


def start_throw(scene: SceneState) -> bool:
    if scene.phase != CapturePhase.IDLE or scene.encounter is None:
        return False
    scene.phase = CapturePhase.THROWING
    scene.frame = 0
    scene.ball_x = BALL_START_X
    scene.ball_y = GROUND_Y
    scene.capture_recorded = False
    return True


def record_capture(scene: SceneState, on_capture: Optional[CaptureCallback]) -> bool:
    """Register the current encounter as caught, once per capture cycle."""
    if scene.capture_recorded or scene.encounter is None:
        return False
    scene.capture_recorded = True
    if on_capture is not None:
        on_capture(scene.encounter)
    return True


def _enter(scene: SceneState, phase: CapturePhase):
    scene.phase = phase
    scene.frame = 0


def _advance_timers(scene: SceneState):
    if scene.phase == CapturePhase.THROWING:
        scene.spin += THROW_SPIN
    elif scene.phase == CapturePhase.IDLE:
        scene.spin += IDLE_SPIN
    scene.tilt_phase += TILT_SPEED
    if scene.caught_timer > 0:
        scene.caught_timer -= 1
    if scene.notice_timer > 0:
        scene.notice_timer -= 1
        if scene.notice_timer == 0:
            scene.notice = ""


def advance(
    scene: SceneState,
    on_capture: Optional[CaptureCallback] = None,
    plan_builder: Optional[PlanBuilder] = None,
):
    """Move the scene forward by exactly one tick."""
    scene.tick += 1
    _advance_timers(scene)
    phase = scene.phase

    if phase == CapturePhase.THROWING:
        scene.ball_x += THROW_SPEED
        progress = (scene.ball_x - BALL_START_X) / (THROW_END_X - BALL_START_X)
        scene.ball_y = GROUND_Y - math.sin(min(1.0, progress) * math.pi) * ARC_HEIGHT
        if scene.ball_x > THROW_END_X:
            scene.ball_x = OPEN_X
            scene.ball_y = HOVER_Y
            scene.particles = plan_builder(scene) if plan_builder else []
            _enter(scene, CapturePhase.OPENING)
        return

    if phase == CapturePhase.IDLE:
        return

    scene.frame += 1
    if phase == CapturePhase.OPENING:
        scene.open_amount = min(1.0, scene.frame / float(OPEN_FRAMES))
        if scene.frame >= OPEN_FRAMES:
            _enter(scene, CapturePhase.ABSORBING)
    elif phase == CapturePhase.ABSORBING:
        if scene.frame >= ABSORB_FRAMES:
            record_capture(scene, on_capture)
            scene.particles = []
            _enter(scene, CapturePhase.CLOSING)
    elif phase == CapturePhase.CLOSING:
        t = min(1.0, scene.frame / float(CLOSE_FRAMES))
        scene.open_amount = 1.0 - t
        scene.ball_y = HOVER_Y + (GROUND_Y - HOVER_Y) * t
        if scene.frame >= CLOSE_FRAMES:
            scene.open_amount = 0.0
            scene.ball_y = GROUND_Y
            _enter(scene, CapturePhase.SHAKING)
    elif phase == CapturePhase.SHAKING:
        wobble = math.sin(2 * math.pi * (scene.frame % SHAKE_FRAMES) / SHAKE_FRAMES)
        scene.ball_x = OPEN_X + wobble * SHAKE_AMPLITUDE
        if scene.frame >= SHAKE_COUNT * SHAKE_FRAMES:
            scene.ball_x = OPEN_X
            scene.caught_timer = CAUGHT_MESSAGE_FRAMES
            scene.caught_name = scene.encounter.display_name if scene.encounter else ""
            _enter(scene, CapturePhase.STAR_HOLD)
    elif phase == CapturePhase.STAR_HOLD:
        if scene.frame >= STAR_FRAMES:
            scene.ball_x = BALL_START_X
            scene.ball_y = GROUND_Y
            _enter(scene, CapturePhase.IDLE)


def advance_ambient(scene: SceneState):
    """Tick spin, tilt and overlay timers while the capture sequence is paused."""
    scene.tick += 1
    _advance_timers(scene)
