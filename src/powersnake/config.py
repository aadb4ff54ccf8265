# config.py
from dataclasses import dataclass, field
from typing import Optional
import os

# ----- Window & grid -----
WIDTH, HEIGHT = 640, 720
TILE_SIZE = 20
MARGIN_W = 40    # horizontal slack around the board
MARGIN_H = 200   # room for HUD above and buttons below the board
HUD_HEIGHT = 64

# ----- Colors -----
BG        = (13, 13, 26)
GRID      = (0, 240, 255, 26)
SNAKE     = (0, 240, 255)
SNAKE_INV = (255, 0, 193)
FOOD      = (255, 68, 68)
TEXT      = (255, 255, 255)
BUTTON    = (40, 40, 72)
OVERLAY   = (0, 0, 0, 178)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Speeds (tick interval in ms) -----
INITIAL_SPEED_MS = 150
FAST_SPEED_MS = 75
FAST_SPEED_DURATION_MS = 5000

# ----- Power-ups -----
POWERUP_CHANCE = 0.2
POWERUP_DURATION_TICKS = 50
POWERUP_COLORS = {
    "speed": (68, 255, 68),
    "invincible": (255, 68, 255),
    "double": (255, 255, 68),
}

# ----- Input -----
SWIPE_THRESHOLD_PX = 30

# ----- Persistence -----
HIGH_SCORE_KEY = "snake2026_highScore"


def default_store_path() -> str:
    home = os.getenv("POWERSNAKE_HOME") or os.path.join(os.path.expanduser("~"), ".powersnake")
    return os.path.join(home, "highscore.json")


# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None  # None -> fresh randomness every run
    tile_size: int = TILE_SIZE
    normal_speed_ms: int = INITIAL_SPEED_MS
    fast_speed_ms: int = FAST_SPEED_MS
    fast_speed_duration_ms: int = FAST_SPEED_DURATION_MS
    powerup_chance: float = POWERUP_CHANCE
    powerup_duration_ticks: int = POWERUP_DURATION_TICKS
    swipe_threshold_px: int = SWIPE_THRESHOLD_PX
    store_path: str = field(default_factory=default_store_path)

CFG = Config()
