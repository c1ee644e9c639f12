
"""
Rendering helpers for the Tetris window.

- Static background (frame, top-space separator, side panel) is pre-rendered once per Dims.
- Cell sprites (normal + full-row highlight) are pre-rendered and blitted.
- HUD text surfaces are cached and re-rendered only when their values change.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Optional
from tetris_board import Board
from tetris_config import TOP_SPACE
from tetris_layout import Dims

BG = (238, 238, 238)
FRAME = (0, 0, 0)
CELL = (20, 20, 20)
FULL_ROW = (0, 200, 0)
TEXT = (30, 30, 30)
HINT = (90, 90, 90)

@dataclass
class HudCache:
    count: int = -1
    seconds: str = ""
    speed: int = -1
    status: str = ""
    count_s: Optional[pygame.Surface] = None
    time_s: Optional[pygame.Surface] = None
    speed_s: Optional[pygame.Surface] = None
    status_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds the pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (frame + separator + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        self.board_rect = pygame.Rect(d.board_x, d.board_y, d.board_w, d.board_h)
        pygame.draw.rect(self.bg, (255, 255, 255), self.board_rect)
        pygame.draw.rect(self.bg, FRAME, self.board_rect, 1)
        # Line under the spawn area
        rows = (d.board_h - 2) // d.cell
        spacer_y = d.y_pixel(rows - TOP_SPACE - 1)
        pygame.draw.line(self.bg, FRAME, (d.board_x, spacer_y), (d.board_x + d.board_w - 1, spacer_y))
        self.panel_rect = pygame.Rect(d.panel_x, d.board_y, d.panel_w, d.board_h)

    # ---------- Cell sprites (1px white border inside each cell) ----------
    def _make_cells(self):
        c = self.dims.cell
        self.cell_surf = pygame.Surface((c - 2, c - 2))
        self.cell_surf.fill(CELL)
        self.full_surf = pygame.Surface((c - 2, c - 2))
        self.full_surf.fill(FULL_ROW)

    def redraw_static(self, screen: pygame.Surface):
        screen.blit(self.bg, (0, 0))

    # ---------- Board ----------
    def draw_board(self, screen: pygame.Surface, board: Board):
        """Paint filled cells bottom-up; rows filled all the way across show green."""
        d = self.dims
        for x in range(board.width):
            left = d.x_pixel(x)
            for y in range(board.get_column_height(x)):
                if board.get_grid(x, y):
                    surf = self.full_surf if board.get_row_width(y) == board.width else self.cell_surf
                    screen.blit(surf, (left + 1, d.y_pixel(y) + 1))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, count: int, seconds: Optional[float],
                       speed: int, status: str):
        d = self.dims
        f = self.font
        if count != self.hud.count:
            self.hud.count = count
            self.hud.count_s = f.render(f"{count} pieces", True, TEXT)
        secs = "" if seconds is None else f"{seconds:.2f} seconds"
        if secs != self.hud.seconds:
            self.hud.seconds = secs
            self.hud.time_s = f.render(secs, True, TEXT) if secs else None
        if speed != self.hud.speed:
            self.hud.speed = speed
            self.hud.speed_s = f.render(f"Speed: {speed}", True, TEXT)
        if status != self.hud.status:
            self.hud.status = status
            self.hud.status_s = f.render(status, True, TEXT)
        # Blit cached
        x = d.panel_x + 8
        screen.blit(self.hud.count_s, (x, d.board_y + 8))
        if self.hud.time_s: screen.blit(self.hud.time_s, (x, d.board_y + 30))
        screen.blit(self.hud.speed_s, (x, d.board_y + 62))
        screen.blit(self.hud.status_s, (x, d.board_y + 84))
        # Controls legend
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, TEXT),
                f.render("J/4/← Left", True, HINT),
                f.render("L/6/→ Right", True, HINT),
                f.render("K/5/↑ Rotate", True, HINT),
                f.render("N/0/Space Drop", True, HINT),
                f.render("Enter Start • Esc Stop", True, HINT),
                f.render("+/- Speed • Q Quit", True, HINT),
            ]
        y = d.board_y + 124
        for surf in self.hud.controls:
            screen.blit(surf, (x, y)); y += 20
