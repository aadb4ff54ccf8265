import os
import unittest
from unittest import mock

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore  # noqa: E402

from powersnake.board import BoardSize  # noqa: E402
from powersnake.config import RIGHT  # noqa: E402
from powersnake.controls import button_rects  # noqa: E402
from powersnake.game import GameState  # noqa: E402
from powersnake.render import Fonts, draw_frame, grid_surface  # noqa: E402


class CountingFont:
    def __init__(self):
        self.renders = 0

    def render(self, text, antialias, color):
        self.renders += 1
        return pygame.Surface((8 * len(text), 12))


def _state(**kw):
    fields = dict(
        snake=((2, 2), (1, 2)), direction=RIGHT, food=(4, 4),
        power_up=None, points=3, high_score=9, speed_ms=150,
        invincible_timer=0, double_points_timer=0, is_game_over=True,
    )
    fields.update(kw)
    return GameState(**fields)


class TestRender(unittest.TestCase):
    def setUp(self):
        self.board = BoardSize(10, 8)
        self.fonts = Fonts(hud=CountingFont(), title=CountingFont(), sub=CountingFont())
        self.screen = pygame.Surface((240, 400))
        self.board_rect = pygame.Rect(20, 64, self.board.width, self.board.height)
        self.buttons = button_rects(self.board_rect)

    def test_given_same_board_when_asking_for_grid_then_surface_reused(self):
        self.assertIs(grid_surface(self.board), grid_surface(BoardSize(10, 8)))
        self.assertIsNot(grid_surface(self.board), grid_surface(BoardSize(9, 8)))

    def test_given_game_over_frames_when_drawing_then_passed_fonts_used_and_none_built(self):
        with mock.patch("pygame.font.SysFont", side_effect=AssertionError("font built per frame")):
            for _ in range(3):
                draw_frame(self.screen, self.fonts, self.board, self.board_rect, self.buttons, _state())
        self.assertEqual(self.fonts.title.renders, 3)
        self.assertEqual(self.fonts.sub.renders, 3)
        self.assertGreaterEqual(self.fonts.hud.renders, 6)

    def test_given_full_board_without_food_when_drawing_then_no_error(self):
        draw_frame(self.screen, self.fonts, self.board, self.board_rect, self.buttons, _state(food=None))


if __name__ == '__main__':
    unittest.main(verbosity=2)
