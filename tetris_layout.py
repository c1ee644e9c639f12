# tetris_layout.py
from dataclasses import dataclass
from tetris_config import CONFIG, COLS, ROWS, TOP_SPACE

MARGIN = 16
PANEL_W = 160

@dataclass
class Dims:
    """Pixel geometry: a 1px framed board with the side panel to its right."""
    cell: int
    board_w: int
    board_h: int
    board_x: int = MARGIN
    board_y: int = MARGIN
    panel_w: int = PANEL_W

    @property
    def panel_x(self) -> int:
        return self.board_x + self.board_w + MARGIN

    @property
    def total_w(self) -> int:
        return self.panel_x + self.panel_w + MARGIN

    @property
    def total_h(self) -> int:
        return self.board_y + self.board_h + MARGIN

    # board y grows upward, screen y grows downward
    def x_pixel(self, x: int) -> int:
        return self.board_x + 1 + x * self.cell

    def y_pixel(self, y: int) -> int:
        return self.board_y + self.board_h - 1 - (y + 1) * self.cell

def compute_dims(cols: int = COLS, rows: int = ROWS + TOP_SPACE) -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    return Dims(cell=cell, board_w=cols * cell + 2, board_h=rows * cell + 2)
