
COLS, ROWS = 10, 20
TOP_SPACE = 4          # spawn rows above the visible board; landing here ends the game

DELAY_MS = 400         # ms per DOWN tick at speed 0
SPEED_MAX = 200
TEST_LIMIT = 100       # pieces played in test mode

CONFIG = {
    "CELL_SIZE": 16,
    "SPEED": 75,
    "SEED": None,
    "TEST_MODE": False,
    "LOG_LEVEL": "INFO",
    "BOARD_DEBUG": False,
}
