"""
Arcade framework shared by the games in this repository.

Provides:
- logging: per-module console logging and structured record sinks
- events: HitResult, the answer a game gives for a hit query
- games: BaseGame, GameState and the input abstraction layer
"""

from arcade.logging import get_logger

__all__ = ['get_logger']
