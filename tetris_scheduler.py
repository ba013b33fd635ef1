
"""Gravity scheduler: turns level into a tick interval and says when a tick is due"""
import logging
from typing import Callable, Optional

import pygame

from tetris_config import CONFIG

log = logging.getLogger(__name__)


def gravity_interval_ms(level: int) -> int:
    base, step = CONFIG["BASE_GRAVITY_MS"], CONFIG["GRAVITY_STEP_MS"]
    return max(CONFIG["MIN_GRAVITY_MS"], base - (level - 1) * step)


class GravityScheduler:
    """Periodic gravity timer driven by polling.

    ``follow(state)`` must be called after every state transition: it stops
    the timer for paused or finished games and restarts it from the current
    time whenever the level changes. ``poll()`` reports at most one due tick
    per call and advances the deadline by one interval.
    """
    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self.clock = clock or pygame.time.get_ticks
        self.level: Optional[int] = None
        self.interval_ms = gravity_interval_ms(1)
        self.due_at: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.due_at is not None

    def start(self, level: int):
        self.level = level
        self.interval_ms = gravity_interval_ms(level)
        self.due_at = self.clock() + self.interval_ms

    def stop(self):
        self.due_at = None

    def follow(self, state):
        if state.is_over or not state.is_running:
            if self.active: self.stop()
            return
        if not self.active:
            self.start(state.level)
        elif state.level != self.level:
            log.debug("level %d -> %d, gravity %d ms", self.level, state.level,
                      gravity_interval_ms(state.level))
            self.start(state.level)

    def poll(self) -> bool:
        if self.due_at is None: return False
        if self.clock() < self.due_at: return False
        self.due_at += self.interval_ms
        return True
