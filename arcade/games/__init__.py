"""
Arcade Game Framework.

Provides:
- base_game: BaseGame class that all games inherit from
- game_state: Standard GameState enum for launcher compatibility
- input: Common input event handling
"""

from arcade.games.game_state import GameState
from arcade.games.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
]
