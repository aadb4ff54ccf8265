"""Grid snake with power-ups: pure game engine plus a pygame host shell."""

from powersnake.game import GameEngine, GameState, PowerUp, PowerUpKind

__all__ = ["GameEngine", "GameState", "PowerUp", "PowerUpKind"]
