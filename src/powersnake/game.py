# game.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Collection, Optional, Tuple, Union
import logging
import random

from .board import BoardSize
from .config import CFG, Config, RIGHT
from .storage import HighScoreStore

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
Direction = Tuple[int, int]


class PowerUpKind(str, Enum):
    SPEED = "speed"
    INVINCIBLE = "invincible"
    DOUBLE = "double"


@dataclass(frozen=True)
class PowerUp:
    x: int
    y: int
    kind: PowerUpKind

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)


# ---------- Helpers ----------
def spawn_cell(rng: random.Random, board: BoardSize, occupied: Collection[Coord]) -> Optional[Coord]:
    """Uniform random cell not in `occupied`, or None when the board is full."""
    free = [
        (x, y)
        for y in range(board.rows)
        for x in range(board.cols)
        if (x, y) not in occupied
    ]
    return rng.choice(free) if free else None

def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


# ---------- State ----------
@dataclass(frozen=True)
class GameState:
    snake: Tuple[Coord, ...]       # head at index 0
    direction: Direction           # heading the next tick will use
    food: Optional[Coord]          # None once the snake fills the board
    power_up: Optional[PowerUp]
    points: int
    high_score: int
    speed_ms: int
    invincible_timer: int          # ticks left
    double_points_timer: int       # ticks left
    is_game_over: bool
    picked_up: Optional[PowerUpKind] = None  # collected on the tick that produced this state

    @property
    def head(self) -> Coord:
        return self.snake[0]

    @property
    def is_invincible(self) -> bool:
        return self.invincible_timer > 0

    @property
    def is_double_points(self) -> bool:
        return self.double_points_timer > 0


# ---------- Actions ----------
@dataclass(frozen=True)
class StartGame:
    pass

@dataclass(frozen=True)
class ChangeDirection:
    direction: Direction

@dataclass(frozen=True)
class GameTick:
    pass

@dataclass(frozen=True)
class ResetSpeed:
    pass

Action = Union[StartGame, ChangeDirection, GameTick, ResetSpeed]


# ---------- Engine ----------
class GameEngine:
    """
    Reducer for GameState. Every operation takes a state and returns a new one;
    the input is never mutated. Board geometry is pulled from `geometry` on each
    call so a resized window is honoured immediately.
    """

    def __init__(
        self,
        geometry: Callable[[], BoardSize],
        store: HighScoreStore,
        rng: Optional[random.Random] = None,
        cfg: Config = CFG,
    ):
        self.geometry = geometry
        self.store = store
        self.rng = rng if rng is not None else random.Random(cfg.seed)
        self.cfg = cfg
        self._stored_high_score = store.load()

    def _fresh_state(self, high_score: int, is_game_over: bool) -> GameState:
        board = self.geometry()
        snake = (board.center(),)
        return GameState(
            snake=snake,
            direction=RIGHT,
            food=spawn_cell(self.rng, board, snake),
            power_up=None,
            points=0,
            high_score=high_score,
            speed_ms=self.cfg.normal_speed_ms,
            invincible_timer=0,
            double_points_timer=0,
            is_game_over=is_game_over,
        )

    def initial_state(self) -> GameState:
        """Pre-game snapshot: game-over posture with the stored high score."""
        return self._fresh_state(self._stored_high_score, is_game_over=True)

    def apply(self, state: GameState, action: Action) -> GameState:
        if isinstance(action, GameTick):
            return self.tick(state)
        if isinstance(action, ChangeDirection):
            return self.change_direction(state, action.direction)
        if isinstance(action, StartGame):
            return self.start(state)
        if isinstance(action, ResetSpeed):
            return self.reset_speed(state)
        raise TypeError(f"Unknown action: {action!r}")

    def start(self, state: GameState) -> GameState:
        high_score = max(state.points, state.high_score)
        if high_score > state.high_score:
            logger.info("New high score: %d", high_score)
            try:
                self.store.save(high_score)
            except OSError:
                # A read-only disk must not end the session; the score still
                # carries over in memory.
                logger.warning("High score %d was not persisted", high_score)
        logger.info("Game started")
        return self._fresh_state(high_score, is_game_over=False)

    def change_direction(self, state: GameState, requested: Direction) -> GameState:
        if is_opposite(requested, state.direction):
            return state
        return replace(state, direction=requested)

    def reset_speed(self, state: GameState) -> GameState:
        return replace(state, speed_ms=self.cfg.normal_speed_ms)

    def tick(self, state: GameState) -> GameState:
        """Advance the game by one cell. Returns the state unchanged when game over."""
        if state.is_game_over:
            return state

        board = self.geometry()
        hx, hy = state.head
        dx, dy = state.direction
        head = (hx + dx, hy + dy)

        wall = not board.contains(*head)
        self_hit = head in state.snake

        if not state.is_invincible and (wall or self_hit):
            logger.info("Game over with %d points", state.points)
            return replace(
                state,
                is_game_over=True,
                speed_ms=self.cfg.normal_speed_ms,
                picked_up=None,
            )

        if wall:
            head = board.wrap(*head)

        snake = (head,) + state.snake
        points = state.points
        food = state.food
        power_up = state.power_up

        if head == food:
            points += 2 if state.is_double_points else 1
            food = spawn_cell(self.rng, board, snake)
            if food is None:
                # Snake covers every cell: nothing left to eat.
                logger.info("Board filled with %d points", points)
                return replace(
                    state,
                    snake=snake,
                    food=None,
                    points=points,
                    is_game_over=True,
                    speed_ms=self.cfg.normal_speed_ms,
                    picked_up=None,
                )
            if self.rng.random() < self.cfg.powerup_chance and power_up is None:
                kind = self.rng.choice(list(PowerUpKind))
                cell = spawn_cell(self.rng, board, set(snake) | {food})
                if cell is not None:
                    power_up = PowerUp(cell[0], cell[1], kind)
        else:
            snake = snake[:-1]

        speed_ms = state.speed_ms
        invincible_timer = max(0, state.invincible_timer - 1)
        double_points_timer = max(0, state.double_points_timer - 1)
        picked_up = None

        if power_up is not None and head == power_up.pos:
            picked_up = power_up.kind
            if picked_up is PowerUpKind.SPEED:
                speed_ms = self.cfg.fast_speed_ms
            elif picked_up is PowerUpKind.INVINCIBLE:
                invincible_timer = self.cfg.powerup_duration_ticks
            elif picked_up is PowerUpKind.DOUBLE:
                double_points_timer = self.cfg.powerup_duration_ticks
            power_up = None
            logger.debug("Picked up %s power-up", picked_up.value)

        return replace(
            state,
            snake=snake,
            food=food,
            power_up=power_up,
            points=points,
            speed_ms=speed_ms,
            invincible_timer=invincible_timer,
            double_points_timer=double_points_timer,
            picked_up=picked_up,
        )
