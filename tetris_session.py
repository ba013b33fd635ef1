
"""Game session: one queue for gravity ticks, player commands and controls"""
import logging
from collections import deque
from enum import Enum
from typing import Deque, Optional, Union

from tetris_engine import Engine, Command, GameState
from tetris_scheduler import GravityScheduler
from tetris_store import MemoryScoreStore, ScoreStoreError

log = logging.getLogger(__name__)


class Control(Enum):
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"


class _Tick:
    def __repr__(self): return "TICK"

TICK = _Tick()

Action = Union[Command, Control, _Tick]


class GameSession:
    """Owns the live GameState and applies queued actions one at a time.

    Nothing mutates the state outside ``_step``; ``update`` is not
    re-entrant, so a tick never interleaves with a command. A restarted
    game waits paused for RESUME or TOGGLE_PAUSE; TOGGLE_PAUSE on a
    finished game restarts it.
    """

    def __init__(self, engine: Optional[Engine] = None,
                 scheduler: Optional[GravityScheduler] = None,
                 store=None, start_running: bool = True):
        self.engine = engine or Engine()
        self.scheduler = scheduler or GravityScheduler()
        self.store = store if store is not None else MemoryScoreStore()
        self.queue: Deque[Action] = deque()
        self._busy = False
        self.best_score = self._load_best()
        self.state: GameState = self.engine.new_game()
        if not start_running:
            self.state = self.engine.pause(self.state)
        self.scheduler.follow(self.state)

    @property
    def snapshot(self) -> GameState:
        return self.state

    def submit(self, action: Action):
        self.queue.append(action)

    def update(self) -> GameState:
        """Poll gravity and drain the queue; return the resulting snapshot."""
        if self._busy: return self.state
        self._busy = True
        try:
            while True:
                if self.scheduler.poll():
                    self.queue.append(TICK)
                if not self.queue: break
                self._step(self.queue.popleft())
        finally:
            self._busy = False
        return self.state

    def _step(self, action: Action):
        before = self.state
        if action is Control.TOGGLE_PAUSE and before.is_over:
            action = Control.RESTART
        if action is Control.RESTART:
            self._purge_ticks()
            self.state = self.engine.pause(self.engine.reset())
            log.info("restart")
        elif action is TICK:
            self.state = self.engine.tick(before)
        elif isinstance(action, Command):
            self.state = self.engine.apply(before, action)
        elif action is Control.PAUSE or (action is Control.TOGGLE_PAUSE and before.is_running):
            self.state = self.engine.pause(before)
        elif action is Control.RESUME or action is Control.TOGGLE_PAUSE:
            self.state = self.engine.resume(before)
        if before.is_running and not self.state.is_running and action is not Control.RESTART:
            self._purge_ticks()
            if self.state.is_over:
                log.info("game over: score %d, lines %d, level %d",
                         self.state.score, self.state.lines, self.state.level)
            else:
                log.info("paused")
        elif not before.is_running and self.state.is_running:
            log.info("resumed")
        self.scheduler.follow(self.state)
        self._record_best()

    def _purge_ticks(self):
        self.queue = deque(a for a in self.queue if a is not TICK)

    def _load_best(self) -> int:
        try:
            return self.store.get_best()
        except ScoreStoreError as e:
            log.warning("ignoring stored best score: %s", e)
            return 0

    def _record_best(self):
        if self.state.score <= self.best_score: return
        self.best_score = self.state.score
        try:
            self.store.set_best(self.best_score)
        except OSError as e:
            log.warning("could not save best score %d: %s", self.best_score, e)
        else:
            log.info("new best score %d", self.best_score)
