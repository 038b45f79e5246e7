"""
Input abstraction layer for arcade games.

Games receive InputEvents in screen coordinates regardless of whether the
activation came from a mouse click or a touch.
"""

from arcade.games.input.input_event import InputEvent
from arcade.games.input.input_manager import InputManager

__all__ = ['InputEvent', 'InputManager']
