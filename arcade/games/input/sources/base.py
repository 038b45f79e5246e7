"""
InputSource - what the InputManager pulls activations from.
"""
from abc import ABC, abstractmethod
from typing import List

from arcade.games.input.input_event import InputEvent


class InputSource(ABC):
    """A device (or a script) producing InputEvents in screen coordinates."""

    @abstractmethod
    def poll_events(self) -> List[InputEvent]:
        """Hand over the events gathered so far and forget them."""

    @abstractmethod
    def update(self, dt: float) -> None:
        """Gather new events; called once per frame with dt in seconds."""
