"""
Input Manager - the one place a game loop collects pointer activations from.
"""
from typing import List, Optional

from arcade.games.input.input_event import InputEvent
from arcade.games.input.sources.base import InputSource


class InputManager:
    """Front for whichever InputSource is plugged in.

    The game loop calls update() once per frame and hands get_events() to
    the game. Tests plug in a scripted source; the standalone game plugs in
    MouseInputSource.

    Raises:
        TypeError: If something other than an InputSource is plugged in
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source: Optional[InputSource] = None
        if source is not None:
            self.set_source(source)

    def set_source(self, source: InputSource) -> None:
        if not isinstance(source, InputSource):
            raise TypeError(f"source must be an InputSource, got {type(source).__name__}")
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        return self._source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Activations collected since the previous call (empty without a source)."""
        return self._source.poll_events() if self._source is not None else []

    def clear_events(self) -> None:
        """Discard pending activations, e.g. clicks made while a round was over."""
        self.get_events()
