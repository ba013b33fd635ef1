
CONFIG = {
    "BASE_GRAVITY_MS": 800,
    "GRAVITY_STEP_MS": 70,
    "MIN_GRAVITY_MS": 50,
    "LINES_PER_LEVEL": 10,
    "SEVEN_BAG": False,
    "RNG_SEED": None,
    "DAS_MS": 170,
    "ARR_MS": 30,
    "BEST_SCORE_PATH": "~/.tetris/best.json",
    "LOG_LEVEL": "INFO",
}
