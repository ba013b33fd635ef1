
"""Key bindings and DAS/ARR controller"""
from typing import Optional
import pygame
from tetris_config import CONFIG
from tetris_engine import Command
from tetris_session import Control

KEYMAP = {
    pygame.K_LEFT: Command.LEFT,  pygame.K_a: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT, pygame.K_d: Command.RIGHT,
    pygame.K_UP: Command.ROTATE_CW, pygame.K_w: Command.ROTATE_CW,
    pygame.K_DOWN: Command.SOFT_DROP, pygame.K_s: Command.SOFT_DROP,
    pygame.K_x: Command.HARD_DROP,
    pygame.K_SPACE: Control.TOGGLE_PAUSE, pygame.K_p: Control.TOGGLE_PAUSE,
    pygame.K_r: Control.RESTART,
}

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)


def translate(key: int, state=None):
    """Map a pressed key to a Command or Control, or None if unbound.

    Left/right are left to ShiftRepeat. After game over only restart keys
    do anything.
    """
    if state is not None and state.is_over:
        return Control.RESTART if key in (pygame.K_SPACE, pygame.K_r) else None
    if key in LEFT_KEYS or key in RIGHT_KEYS:
        return None
    return KEYMAP.get(key)


class ShiftRepeat:
    """Turns held left/right keys into a stream of LEFT/RIGHT commands.

    The first frame of a press moves once; after DAS_MS of holding, one
    move is emitted every ARR_MS (every frame when ARR_MS is 0). Holding
    both keys, or switching direction, restarts the cycle.
    """
    def __init__(self):
        self.held: Optional[Command] = None
        self.held_ms = 0.0
        self.since_step_ms = 0.0

    def update(self, dt_ms: float, left: bool, right: bool) -> Optional[Command]:
        want = None if left == right else (Command.LEFT if left else Command.RIGHT)
        if want is not self.held:
            self.held, self.held_ms, self.since_step_ms = want, 0.0, 0.0
            return want
        if want is None: return None
        self.held_ms += dt_ms
        if self.held_ms < CONFIG["DAS_MS"]: return None
        if CONFIG["ARR_MS"] == 0: return want
        self.since_step_ms += dt_ms
        if self.since_step_ms < CONFIG["ARR_MS"]: return None
        self.since_step_ms = 0.0
        return want


def held(keys, codes) -> bool:
    return any(keys[k] for k in codes)
