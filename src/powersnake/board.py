# board.py
from dataclasses import dataclass
from typing import Tuple

from .config import TILE_SIZE, MARGIN_W, MARGIN_H


@dataclass(frozen=True)
class BoardSize:
    """Grid dimensions in cells plus the pixel size they occupy."""
    cols: int
    rows: int
    tile: int = TILE_SIZE

    @property
    def width(self) -> int:
        return self.cols * self.tile

    @property
    def height(self) -> int:
        return self.rows * self.tile

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def wrap(self, x: int, y: int) -> Tuple[int, int]:
        return x % self.cols, y % self.rows

    def center(self) -> Tuple[int, int]:
        return self.cols // 2, self.rows // 2


def board_dimensions(available_w: int, available_h: int, tile: int = TILE_SIZE) -> BoardSize:
    """floor(available / tile) on both axes; callers clamp degenerate areas first."""
    return BoardSize(cols=available_w // tile, rows=available_h // tile, tile=tile)


def board_for_window(window_w: int, window_h: int, tile: int = TILE_SIZE) -> BoardSize:
    """Geometry for a window, leaving room for the HUD and on-screen buttons."""
    available_w = max(window_w - MARGIN_W, tile)
    available_h = max(window_h - MARGIN_H, tile)
    return board_dimensions(available_w, available_h, tile)
