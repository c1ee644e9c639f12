
"""Board: occupancy grid with height/width caches and one level of undo.

The board knows nothing about pixels. Coordinates are (x, y) with y = 0 at
the bottom row. A place() or clear_rows() opens a transaction; commit() keeps
the result and undo() rolls the grid back to where the transaction began.
"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List

from tetris_config import CONFIG
from tetris_piece import Piece

log = logging.getLogger(__name__)


class PlaceResult(IntEnum):
    OK = 0
    ROW_FILLED = 1
    OUT_BOUNDS = 2
    BAD = 3

    @property
    def failed(self) -> bool:
        return self >= PlaceResult.OUT_BOUNDS


class BoardStateError(RuntimeError):
    """Board used out of order, or its caches disagree with the grid."""


@dataclass
class Snapshot:
    grid: List[List[bool]]
    heights: List[int]
    widths: List[int]


class Board:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._grid: List[List[bool]] = [[False] * height for _ in range(width)]
        self._heights: List[int] = [0] * width   # per column: top filled y + 1
        self._widths: List[int] = [0] * height   # per row: filled cell count
        self._backup = self._snapshot()
        self.committed = True

    # ---------- queries ----------
    def get_max_height(self) -> int:
        return max(self._heights, default=0)

    def get_column_height(self, x: int) -> int:
        self._check_column(x)
        return self._heights[x]

    def get_row_width(self, y: int) -> int:
        if y < 0 or y >= self.height:
            raise IndexError(f"row {y} outside 0..{self.height - 1}")
        return self._widths[y]

    def get_grid(self, x: int, y: int) -> bool:
        """True if the cell is filled. Anything outside the board counts as filled."""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return True
        return self._grid[x][y]

    def drop_height(self, piece: Piece, x: int) -> int:
        """y at which piece comes to rest if dropped straight down at x.
        Uses the skirt against the column heights, O(piece width)."""
        self._check_column(x)
        self._check_column(x + piece.width - 1)
        best = None
        result = x
        for i in range(x, x + piece.width):
            clearance = piece.skirt[i - x] - self._heights[i]
            if best is None or clearance < best:
                best = clearance
                result = i
        return self._heights[result] - piece.skirt[result - x]

    # ---------- mutation ----------
    def place(self, piece: Piece, x: int, y: int) -> PlaceResult:
        """Add piece's body at (x, y).

        OUT_BOUNDS and BAD leave the grid as it was; either way the board is
        uncommitted afterwards and the caller is expected to undo()."""
        if not self.committed:
            raise BoardStateError("place() on an uncommitted board")
        self.committed = False
        self._backup = self._snapshot()

        cells = [(x + bx, y + by) for bx, by in piece.body]
        for px, py in cells:
            if px < 0 or px >= self.width or py < 0 or py >= self.height:
                return PlaceResult.OUT_BOUNDS
        for px, py in cells:
            if self._grid[px][py]:
                return PlaceResult.BAD

        row_filled = False
        for px, py in cells:
            self._grid[px][py] = True
            self._widths[py] += 1
            if py + 1 > self._heights[px]:
                self._heights[px] = py + 1
            if self._widths[py] == self.width:
                row_filled = True

        self._debug_check()
        return PlaceResult.ROW_FILLED if row_filled else PlaceResult.OK

    def clear_rows(self) -> bool:
        """Remove every full row, copying the rows above down. True if any went."""
        if self.committed:
            self._backup = self._snapshot()
            self.committed = False

        to = 0
        cleared = 0
        for frm in range(self.height):
            if self._widths[frm] == self.width:
                cleared += 1
                continue
            if to != frm:
                for col in self._grid:
                    col[to] = col[frm]
                self._widths[to] = self._widths[frm]
            to += 1
        for y in range(to, self.height):
            for col in self._grid:
                col[y] = False
            self._widths[y] = 0

        if cleared:
            self._recompute_heights()
            log.debug("cleared %d row(s)", cleared)
        self._debug_check()
        return cleared > 0

    def undo(self):
        """Roll back to the start of the open transaction. No-op when committed."""
        if self.committed:
            return
        self._restore(self._backup)
        self.committed = True

    def commit(self):
        self.committed = True

    # ---------- snapshots & checks ----------
    def snapshot(self) -> Snapshot:
        """Detached copy of the current grid and caches."""
        return self._snapshot()

    def sanity_check(self):
        """Recompute both caches from the grid and compare."""
        for x in range(self.width):
            h = 0
            for y in range(self.height):
                if self._grid[x][y]:
                    h = y + 1
            if h != self._heights[x]:
                raise BoardStateError(f"column {x}: height {self._heights[x]}, grid says {h}")
        for y in range(self.height):
            w = sum(1 for x in range(self.width) if self._grid[x][y])
            if w != self._widths[y]:
                raise BoardStateError(f"row {y}: width {self._widths[y]}, grid says {w}")

    def _check_column(self, x: int):
        if x < 0 or x >= self.width:
            raise IndexError(f"column {x} outside 0..{self.width - 1}")

    def _debug_check(self):
        if CONFIG["BOARD_DEBUG"]:
            self.sanity_check()

    def _snapshot(self) -> Snapshot:
        return Snapshot([col[:] for col in self._grid], self._heights[:], self._widths[:])

    def _restore(self, snap: Snapshot):
        for col, saved in zip(self._grid, snap.grid):
            col[:] = saved
        self._heights[:] = snap.heights
        self._widths[:] = snap.widths

    def _recompute_heights(self):
        for x, col in enumerate(self._grid):
            h = 0
            for y in range(self.height - 1, -1, -1):
                if col[y]:
                    h = y + 1
                    break
            self._heights[x] = h

    def __str__(self):
        rows = []
        for y in range(self.height - 1, -1, -1):
            rows.append("|" + "".join("+" if self._grid[x][y] else " " for x in range(self.width)) + "|")
        rows.append("-" * (self.width + 2))
        return "\n".join(rows)
