# controls.py
from typing import Dict, Optional, Tuple

import pygame  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, SWIPE_THRESHOLD_PX
from .game import Action, ChangeDirection, Direction, GameState, StartGame

KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_w: UP,
    pygame.K_s: DOWN,
    pygame.K_a: LEFT,
    pygame.K_d: RIGHT,
}
RESTART_KEYS = (pygame.K_r, pygame.K_SPACE)

BUTTON_SIZE = 40
BUTTON_GAP = 4


def swipe_direction(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD_PX) -> Optional[Direction]:
    """Dominant axis of a drag, or None while it is still under the threshold."""
    if abs(dx) <= threshold and abs(dy) <= threshold:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


class SwipeTracker:
    """Turns one press-drag gesture into at most one direction."""

    def __init__(self, threshold: float = SWIPE_THRESHOLD_PX):
        self.threshold = threshold
        self.origin: Optional[Tuple[int, int]] = None

    def press(self, pos: Tuple[int, int]) -> None:
        self.origin = pos

    def release(self) -> None:
        self.origin = None

    def drag(self, pos: Tuple[int, int]) -> Optional[Direction]:
        if self.origin is None:
            return None
        d = swipe_direction(pos[0] - self.origin[0], pos[1] - self.origin[1], self.threshold)
        if d is not None:
            self.origin = None  # one swipe per gesture
        return d


def button_rects(board_rect: pygame.Rect) -> Dict[Direction, pygame.Rect]:
    """D-pad of four buttons centered under the board."""
    step = BUTTON_SIZE + BUTTON_GAP
    cx = board_rect.centerx - BUTTON_SIZE // 2
    top = board_rect.bottom + BUTTON_GAP * 2
    return {
        UP: pygame.Rect(cx, top, BUTTON_SIZE, BUTTON_SIZE),
        LEFT: pygame.Rect(cx - step, top + step, BUTTON_SIZE, BUTTON_SIZE),
        DOWN: pygame.Rect(cx, top + step, BUTTON_SIZE, BUTTON_SIZE),
        RIGHT: pygame.Rect(cx + step, top + step, BUTTON_SIZE, BUTTON_SIZE),
    }


class InputMapper:
    """
    Maps pygame events onto engine actions. Touch input reaches us as the
    mouse events SDL synthesizes from fingers, so both share one path.
    """

    def __init__(self, threshold: float = SWIPE_THRESHOLD_PX):
        self.swipe = SwipeTracker(threshold)
        self.board_rect = pygame.Rect(0, 0, 0, 0)
        self.buttons: Dict[Direction, pygame.Rect] = {}

    def layout(self, board_rect: pygame.Rect) -> None:
        self.board_rect = board_rect
        self.buttons = button_rects(board_rect)

    def translate(self, event: pygame.event.Event, state: GameState) -> Optional[Action]:
        if event.type == pygame.KEYDOWN:
            if event.key in KEY_DIRECTIONS:
                return ChangeDirection(KEY_DIRECTIONS[event.key])
            if event.key in RESTART_KEYS and state.is_game_over:
                return StartGame()
            return None

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for direction, rect in self.buttons.items():
                if rect.collidepoint(event.pos):
                    return ChangeDirection(direction)
            if self.board_rect.collidepoint(event.pos):
                if state.is_game_over:
                    return StartGame()
                self.swipe.press(event.pos)
            return None

        if event.type == pygame.MOUSEMOTION and not state.is_game_over:
            d = self.swipe.drag(event.pos)
            return ChangeDirection(d) if d is not None else None

        if event.type == pygame.MOUSEBUTTONUP:
            self.swipe.release()
        return None
