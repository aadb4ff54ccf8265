# timers.py
from typing import Callable, Optional
import logging

import pygame  # type: ignore

from .config import CFG, Config
from .game import Action, GameState, GameTick, PowerUpKind, StartGame

logger = logging.getLogger(__name__)

# Custom event types posted by the two timers
TICK_EVENT = pygame.USEREVENT + 1
SPEED_RESET_EVENT = pygame.USEREVENT + 2


class TimerSupervisor:
    """
    Owns the tick interval and the one-shot fast-speed revert.

    Both are pygame timers that post an event into the queue; the main loop
    turns those events into GameTick / ResetSpeed actions. `set_timer` is
    injectable so the scheduling rules can be checked without a display.
    """

    def __init__(self, cfg: Config = CFG, set_timer: Optional[Callable[..., None]] = None):
        self.cfg = cfg
        self._set_timer = set_timer if set_timer is not None else pygame.time.set_timer
        self.tick_interval: Optional[int] = None   # ms, None when stopped
        self.revert_pending = False
        self.grant = 0  # bumped per speed pickup; stamped on the revert event

    # --- tick interval ---
    def _restart_tick(self, interval_ms: int) -> None:
        self._set_timer(TICK_EVENT, 0)
        self._set_timer(TICK_EVENT, interval_ms)
        self.tick_interval = interval_ms

    def _stop_tick(self) -> None:
        if self.tick_interval is not None:
            self._set_timer(TICK_EVENT, 0)
            self.tick_interval = None

    # --- speed revert ---
    def _schedule_revert(self) -> None:
        self._cancel_revert()
        self.grant += 1
        event = pygame.event.Event(SPEED_RESET_EVENT, grant=self.grant)
        self._set_timer(event, self.cfg.fast_speed_duration_ms, loops=1)
        self.revert_pending = True

    def _cancel_revert(self) -> None:
        if self.revert_pending:
            self._set_timer(SPEED_RESET_EVENT, 0)
            self.revert_pending = False

    def revert_fired(self, grant: Optional[int]) -> bool:
        """
        Whether a SPEED_RESET_EVENT stamped with `grant` should reset the speed.
        Events already queued when their timer was cancelled or replaced are stale.
        """
        if not self.revert_pending or grant != self.grant:
            logger.debug("Dropping stale speed reset (grant %s, current %d)", grant, self.grant)
            return False
        self.revert_pending = False
        return True

    def sync(self, prev: Optional[GameState], state: GameState, action: Optional[Action] = None) -> None:
        """Bring both timers in line with the transition prev -> state caused by `action`."""
        if state.is_game_over:
            self._stop_tick()
            self._cancel_revert()
            return

        if isinstance(action, StartGame):
            self._cancel_revert()

        changed = (
            prev is None
            or prev.is_game_over
            or prev.speed_ms != state.speed_ms
            or self.tick_interval is None
        )
        if changed:
            logger.debug("Tick interval -> %d ms", state.speed_ms)
            self._restart_tick(state.speed_ms)

        if isinstance(action, GameTick) and state.picked_up is PowerUpKind.SPEED:
            self._schedule_revert()

    def cancel_all(self) -> None:
        self._stop_tick()
        self._cancel_revert()
