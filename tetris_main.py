import logging
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import Engine
from tetris_piece import COLORS
from tetris_input import ShiftRepeat, translate, held, LEFT_KEYS, RIGHT_KEYS
from tetris_scheduler import GravityScheduler
from tetris_session import GameSession
from tetris_store import JsonScoreStore

log = logging.getLogger("tetris")


def caption(state, best):
    if state.is_over:
        status = "GAME OVER (Space to restart)"
    elif not state.is_running:
        status = "PAUSED (Space to play)"
    else:
        status = f"Next {state.next.kind.value}"
    return f"Score {state.score}  Best {best}  Level {state.level}  Lines {state.lines}  {status}"


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])
    screen = pygame.display.set_mode((360, 80))
    clock = pygame.time.Clock()

    session = GameSession(Engine(), GravityScheduler(pygame.time.get_ticks),
                          JsonScoreStore(CONFIG["BEST_SCORE_PATH"]),
                          start_running=False)
    shift = ShiftRepeat()
    shown = None
    log.info("best score %d", session.best_score)

    while True:
        dt = clock.tick(60)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                action = translate(e.key, session.snapshot)
                if action is not None:
                    session.submit(action)

        keys = pygame.key.get_pressed()
        step = shift.update(dt, held(keys, LEFT_KEYS), held(keys, RIGHT_KEYS))
        if step is not None:
            session.submit(step)

        state = session.update()
        text = caption(state, session.best_score)
        if text != shown:
            pygame.display.set_caption(text)
            screen.fill((10, 13, 34) if state.is_over else COLORS[state.next.kind])
            pygame.display.flip()
            log.debug("%s\n%s", text, state)
            shown = text


if __name__ == '__main__':
    main()
