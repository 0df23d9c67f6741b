"""State container for one connected session."""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from pokeball.capture import SceneState
from pokeball.models import Screen
from pokeball.ui.framebuffer import FrameBuffer


@dataclass
class SessionState:
    buffer: FrameBuffer
    color_mode: str
    screen: Screen = Screen.NAME
    trainer: str = ""
    caught: Set[str] = field(default_factory=set)
    dex_index: int = 1
    last_line: str = ""
    scene: SceneState = field(default_factory=SceneState)
    pending_saves: List[str] = field(default_factory=list)
    pending_load: bool = False
    quit_requested: bool = False
    rng: random.Random = field(default_factory=random.Random)

    def mark_caught(self, name: str) -> bool:
        """Add to the in-memory set; True only for a species not seen before."""
        if name in self.caught:
            return False
        self.caught.add(name)
        self.pending_saves.append(name)
        return True


def new_session(width: int, height: int, color_mode: str, seed: Optional[int] = None) -> SessionState:
    return SessionState(
        buffer=FrameBuffer(width, height),
        color_mode=color_mode,
        rng=random.Random(seed),
    )
