# render.py
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Tuple

import pygame  # type: ignore

from .board import BoardSize
from .config import (
    BG, GRID, SNAKE, SNAKE_INV, FOOD, TEXT, BUTTON, OVERLAY, POWERUP_COLORS,
    UP, DOWN, LEFT, RIGHT,
)
from .game import Direction, GameState

BODY_ALPHA = 204  # head is drawn opaque, body at 80%
BADGE_INV = (255, 0, 193)
BADGE_DOUBLE = (255, 255, 68)


# ---------- Helpers ----------
def draw_cell(surface: pygame.Surface, board: BoardSize, gx: int, gy: int,
              color: Tuple[int, ...], inset: int = 2) -> None:
    t = board.tile
    rect = pygame.Rect(gx * t + inset, gy * t + inset, t - 2 * inset, t - 2 * inset)
    pygame.draw.rect(surface, color, rect)

@dataclass(frozen=True)
class Fonts:
    hud: pygame.font.Font
    title: pygame.font.Font
    sub: pygame.font.Font

    @classmethod
    def load(cls) -> "Fonts":
        """Needs pygame.init(); built once per run."""
        return cls(
            hud=pygame.font.SysFont(None, 24),
            title=pygame.font.SysFont(None, 56, bold=True),
            sub=pygame.font.SysFont(None, 28),
        )

@lru_cache(maxsize=4)
def grid_surface(board: BoardSize) -> pygame.Surface:
    """Faint cell outlines, rebuilt only when the board size changes."""
    grid = pygame.Surface((board.width, board.height), pygame.SRCALPHA)
    for x in range(board.cols):
        for y in range(board.rows):
            pygame.draw.rect(grid, GRID, (x * board.tile, y * board.tile, board.tile, board.tile), 1)
    return grid

def _arrow(rect: pygame.Rect, direction: Direction):
    cx, cy = rect.center
    r = rect.width // 4
    dx, dy = direction
    tip = (cx + dx * r, cy + dy * r)
    # perpendicular base
    px, py = -dy, dx
    base = (cx - dx * r, cy - dy * r)
    return [tip, (base[0] + px * r, base[1] + py * r), (base[0] - px * r, base[1] - py * r)]


# ---------- Board ----------
def draw_board(surface: pygame.Surface, fonts: Fonts, board: BoardSize, state: GameState) -> None:
    """Grid, food, power-up and snake onto a surface the size of the board."""
    surface.fill(BG)
    surface.blit(grid_surface(board), (0, 0))

    # snake: translucent body first, opaque head on top
    color = SNAKE_INV if state.is_invincible else SNAKE
    body = pygame.Surface((board.width, board.height), pygame.SRCALPHA)
    for x, y in state.snake[1:]:
        draw_cell(body, board, x, y, color + (BODY_ALPHA,))
    surface.blit(body, (0, 0))
    hx, hy = state.head
    draw_cell(surface, board, hx, hy, color)

    if state.food is not None:
        draw_cell(surface, board, state.food[0], state.food[1], FOOD)

    if state.power_up is not None:
        pu = state.power_up
        draw_cell(surface, board, pu.x, pu.y, POWERUP_COLORS[pu.kind.value], inset=0)

    if state.is_game_over:
        draw_game_over(surface, fonts, board)


def draw_game_over(surface: pygame.Surface, fonts: Fonts, board: BoardSize) -> None:
    # Dim with translucent overlay
    overlay = pygame.Surface((board.width, board.height), pygame.SRCALPHA)
    overlay.fill(OVERLAY)
    surface.blit(overlay, (0, 0))

    title = fonts.title.render("GAME OVER", True, FOOD)
    sub = fonts.sub.render("Tap to Restart", True, TEXT)

    cx, cy = board.width // 2, board.height // 2
    surface.blit(title, title.get_rect(center=(cx, cy - 30)))
    surface.blit(sub, sub.get_rect(center=(cx, cy + 20)))


# ---------- HUD & controls ----------
def draw_hud(screen: pygame.Surface, font: pygame.font.Font, state: GameState, width: int) -> None:
    score = font.render(f"Points: {state.points}", True, TEXT)
    best = font.render(f"High Score: {state.high_score}", True, TEXT)
    screen.blit(score, (20, 10))
    screen.blit(best, best.get_rect(topright=(width - 20, 10)))

    badges = []
    if state.power_up is not None:
        badges.append((f"Power-up: {state.power_up.kind.value}", POWERUP_COLORS[state.power_up.kind.value]))
    if state.is_invincible:
        badges.append(("INVINCIBLE", BADGE_INV))
    if state.is_double_points:
        badges.append(("2X POINTS", BADGE_DOUBLE))

    x = 20
    for label, color in badges:
        txt = font.render(label, True, color)
        screen.blit(txt, (x, 36))
        x += txt.get_width() + 16


def draw_controls(screen: pygame.Surface, buttons: Dict[Direction, pygame.Rect]) -> None:
    for direction in (UP, LEFT, DOWN, RIGHT):
        rect = buttons.get(direction)
        if rect is None:
            continue
        pygame.draw.rect(screen, BUTTON, rect, border_radius=6)
        pygame.draw.polygon(screen, TEXT, _arrow(rect, direction))


def draw_frame(screen: pygame.Surface, fonts: Fonts, board: BoardSize,
               board_rect: pygame.Rect, buttons: Dict[Direction, pygame.Rect],
               state: GameState) -> None:
    screen.fill(BG)
    draw_hud(screen, fonts.hud, state, screen.get_width())
    board_surface = pygame.Surface((board.width, board.height))
    draw_board(board_surface, fonts, board, state)
    screen.blit(board_surface, board_rect.topleft)
    pygame.draw.rect(screen, SNAKE, board_rect.inflate(4, 4), 2)
    draw_controls(screen, buttons)
