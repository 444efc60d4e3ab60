from dataclasses import dataclass
from typing import Tuple

from slide2048.constants import (
    GRID_COLS, GRID_ROWS, TILE_SIZE, TILE_GAP, SCORE_PANEL_HEIGHT, WINDOW_MARGIN,
)


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    tile_size: float
    gap: float
    board_left: float
    board_bottom: float
    board_size: float

    @property
    def board_top(self) -> float:
        return self.board_bottom + self.board_size

    def cell_center(self, row: float, col: float) -> Tuple[float, float]:
        """Screen centre of a (possibly fractional) cell; row 0 is the top row."""
        step = self.tile_size + self.gap
        x = self.board_left + self.gap + col * step + self.tile_size / 2
        y = self.board_top - self.gap - row * step - self.tile_size / 2
        return x, y


def default_window_size() -> Tuple[int, int]:
    board = GRID_COLS * TILE_SIZE + (GRID_COLS + 1) * TILE_GAP
    width = board + 2 * WINDOW_MARGIN
    height = board + SCORE_PANEL_HEIGHT + 2 * WINDOW_MARGIN
    return width, height


def compute_board_geometry(window_width: int, window_height: int) -> BoardGeometry:
    """Fit the board below the score panel, scaling tiles and gaps together."""
    avail_w = window_width - 2 * WINDOW_MARGIN
    avail_h = window_height - SCORE_PANEL_HEIGHT - 2 * WINDOW_MARGIN
    natural = GRID_COLS * TILE_SIZE + (GRID_COLS + 1) * TILE_GAP
    natural_h = GRID_ROWS * TILE_SIZE + (GRID_ROWS + 1) * TILE_GAP
    scale = min(avail_w / natural, avail_h / natural_h)
    if scale <= 0:
        scale = 0.1
    tile_size = TILE_SIZE * scale
    gap = TILE_GAP * scale
    board_size = natural * scale
    board_left = (window_width - board_size) / 2
    board_bottom = WINDOW_MARGIN
    return BoardGeometry(tile_size, gap, board_left, board_bottom, board_size)


def new_game_button_rect(window_width: int, window_height: int) -> Tuple[float, float, float, float]:
    """(left, right, bottom, top) of the New Game label in the score panel."""
    geometry = compute_board_geometry(window_width, window_height)
    right = geometry.board_left + geometry.board_size
    left = right - 110
    bottom = geometry.board_top + 4
    top = bottom + SCORE_PANEL_HEIGHT - 4
    return left, right, bottom, top
