"""
Input source implementations.
"""

from arcade.games.input.sources.base import InputSource
from arcade.games.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'MouseInputSource']
