
"""Game controller: moves the falling piece on a Board one verb at a time.

The falling piece lives in the board as an uncommitted placement. Each tick
undoes that placement, computes where the verb would take the piece, and tries
to place it there; if that fails the old placement is put back. A DOWN that
fails right after another DOWN means the piece has landed.

Everything runs on one thread: the DOWN timer and key handling must call
tick() one at a time.
"""
import logging
import time
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from tetris_board import Board, PlaceResult
from tetris_config import COLS, ROWS, TOP_SPACE, TEST_LIMIT, CONFIG
from tetris_piece import CATALOG, Piece, PieceCatalog
from tetris_rng import make_random

log = logging.getLogger(__name__)


class Verb(Enum):
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    DOWN = "down"
    DROP = "drop"


def _half(n: int) -> int:
    # truncates toward zero, so -3 -> -1
    return int(n / 2)


class Tetris:
    def __init__(self, catalog: PieceCatalog = CATALOG,
                 width: int = COLS, height: int = ROWS, top_space: int = TOP_SPACE,
                 test_mode: Optional[bool] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.catalog = catalog
        self.pieces: Sequence[Piece] = catalog.pieces()
        self.width = width
        self.height = height
        self.top_space = top_space
        self.test_mode = CONFIG["TEST_MODE"] if test_mode is None else test_mode
        self.clock = clock

        self.board = Board(width, height + top_space)
        self.rng = None
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0
        self.moved = False

        self.game_on = False
        self.lost = False
        self.count = 0            # pieces introduced this game
        self.rows_cleared = 0
        self.repaint = False      # set when a full row shows up or rows get cleared
        self.start_time = 0.0
        self.stop_time = 0.0

    # ---------- session ----------
    def start(self, rng=None):
        """Reset the board and begin a new game. rng needs only random()."""
        self.board = Board(self.width, self.height + self.top_space)
        self.rng = rng if rng is not None else make_random(CONFIG["SEED"], self.test_mode)
        self.current_piece = None
        self.moved = False
        self.count = 0
        self.rows_cleared = 0
        self.lost = False
        self.game_on = True
        self.repaint = True
        self.start_time = self.stop_time = self.clock()
        log.info("game started (test mode: %s)", self.test_mode)
        self.add_new_piece()

    def stop(self):
        if not self.game_on:
            return
        self.game_on = False
        self.stop_time = self.clock()
        log.info("game stopped after %d pieces, %d rows, %.2fs",
                 self.count, self.rows_cleared, self.elapsed())

    def elapsed(self) -> float:
        end = self.clock() if self.game_on else self.stop_time
        return end - self.start_time

    # ---------- pieces ----------
    def pick_next_piece(self) -> Piece:
        return self.pieces[int(len(self.pieces) * self.rng.random())]

    def set_current_piece(self, piece: Piece, x: int, y: int) -> PlaceResult:
        """Place piece at (x, y) and make it current; on failure the board is
        rolled back and the current piece is left alone."""
        result = self.board.place(piece, x, y)
        if result.failed:
            self.board.undo()
        else:
            self.current_piece = piece
            self.current_x = x
            self.current_y = y
        return result

    def add_new_piece(self):
        """Commit the board and drop a fresh piece in at the top center."""
        self.count += 1
        if self.test_mode and self.count == TEST_LIMIT + 1:
            self.stop()
            return

        self.board.commit()
        self.current_piece = None

        piece = self.pick_next_piece()
        px = (self.board.width - piece.width) // 2
        py = self.board.height - piece.height

        # the top space should always leave room for a new piece
        if self.set_current_piece(piece, px, py).failed:
            log.warning("no room for new %s piece at (%d, %d)", piece.name, px, py)
            self.lost = True
            self.stop()

    # ---------- moves ----------
    def compute_new_position(self, verb: Verb) -> Tuple[Piece, int, int]:
        piece, x, y = self.current_piece, self.current_x, self.current_y

        if verb is Verb.LEFT:
            x -= 1
        elif verb is Verb.RIGHT:
            x += 1
        elif verb is Verb.ROTATE:
            piece = self.catalog.next_rotation(piece)
            # keep the rotation centered on the old bounding box
            x += _half(self.current_piece.width - piece.width)
            y += _half(self.current_piece.height - piece.height)
        elif verb is Verb.DOWN:
            y -= 1
        elif verb is Verb.DROP:
            # never let a drop move the piece up
            y = min(self.board.drop_height(piece, x), self.current_y)
        else:
            raise ValueError(f"Bad verb: {verb!r}")
        return piece, x, y

    def tick(self, verb: Verb):
        """Apply one verb to the current piece."""
        if not self.game_on or self.current_piece is None:
            return

        self.board.undo()
        piece, x, y = self.compute_new_position(verb)
        result = self.set_current_piece(piece, x, y)
        if result == PlaceResult.ROW_FILLED:
            self.repaint = True

        failed = result.failed
        if failed:
            self.board.place(self.current_piece, self.current_x, self.current_y)

        if failed and verb is Verb.DOWN and not self.moved:
            self._land()

        self.moved = not failed and verb is not Verb.DOWN

    def _land(self):
        log.debug("%s landed at (%d, %d)", self.current_piece.name, self.current_x, self.current_y)
        before = self._full_rows()
        if self.board.clear_rows():
            self.rows_cleared += before
            self.repaint = True

        if self.board.get_max_height() > self.board.height - self.top_space:
            log.info("stack reached the top space: game over")
            self.lost = True
            self.stop()
        else:
            self.add_new_piece()

    def _full_rows(self) -> int:
        return sum(1 for y in range(self.board.height)
                   if self.board.get_row_width(y) == self.board.width)
