# main.py
from typing import Callable, Optional, Tuple
import logging

import pygame  # type: ignore

from .board import BoardSize, board_for_window
from .config import WIDTH, HEIGHT, HUD_HEIGHT, CFG, Config
from .controls import InputMapper
from .game import Action, GameEngine, GameState, GameTick, ResetSpeed, StartGame
from .render import Fonts, draw_frame
from .storage import HighScoreStore, JsonHighScoreStore
from .timers import TimerSupervisor, TICK_EVENT, SPEED_RESET_EVENT

logger = logging.getLogger(__name__)


class GameShell:
    """
    Host around the engine: keeps the current snapshot, serializes every
    action through `dispatch`, and keeps geometry, layout and timers in sync.
    """

    def __init__(
        self,
        window_size: Tuple[int, int],
        store: HighScoreStore,
        cfg: Config = CFG,
        set_timer: Optional[Callable[..., None]] = None,
    ):
        self.cfg = cfg
        self.input = InputMapper(cfg.swipe_threshold_px)
        self.resize(*window_size)
        self.engine = GameEngine(lambda: self.board, store, cfg=cfg)
        self.timers = TimerSupervisor(cfg, set_timer)
        self.state: GameState = self.engine.initial_state()

    def resize(self, window_w: int, window_h: int) -> None:
        self.window_size = (window_w, window_h)
        self.board: BoardSize = board_for_window(window_w, window_h, self.cfg.tile_size)
        left = (window_w - self.board.width) // 2
        self.board_rect = pygame.Rect(left, HUD_HEIGHT, self.board.width, self.board.height)
        self.input.layout(self.board_rect)
        logger.debug("Board is %dx%d cells", self.board.cols, self.board.rows)

    def dispatch(self, action: Action) -> GameState:
        prev = self.state
        self.state = self.engine.apply(prev, action)
        self.timers.sync(prev, self.state, action)
        return self.state

    def handle(self, event: pygame.event.Event) -> bool:
        """Process one event. Returns False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        if event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
            return True
        if event.type == TICK_EVENT:
            self.dispatch(GameTick())
            return True
        if event.type == SPEED_RESET_EVENT:
            if self.timers.revert_fired(getattr(event, "grant", None)):
                self.dispatch(ResetSpeed())
            return True

        action = self.input.translate(event, self.state)
        if action is not None:
            self.dispatch(action)
        return True

    def close(self) -> None:
        self.timers.cancel_all()


def main(cfg: Config = CFG) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    fonts = Fonts.load()
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Snake 2026")
    clock = pygame.time.Clock()

    shell = GameShell(screen.get_size(), JsonHighScoreStore(cfg.store_path), cfg)
    shell.dispatch(StartGame())  # play right away
    running = True

    try:
        while running:
            # 1) input + timers, one action at a time
            for event in pygame.event.get():
                running = shell.handle(event)
                if not running:
                    break

            # 2) render the latest snapshot
            screen = pygame.display.get_surface()
            draw_frame(screen, fonts, shell.board, shell.board_rect, shell.input.buttons, shell.state)
            pygame.display.flip()
            clock.tick(60)  # movement is paced by TICK_EVENT, not the frame rate
    finally:
        shell.close()
        pygame.quit()

if __name__ == "__main__":
    main()
