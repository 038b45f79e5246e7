"""
Pointer Input Source - Mouse clicks and touch presses.
"""
import time
from typing import List, Optional, Tuple

import pygame

from models import Point2D
from arcade.games.input.input_event import InputEvent
from arcade.games.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Pointer input source.

    Converts left mouse button presses and finger-down touch events into
    InputEvents in window coordinates. Mouse events that SDL synthesizes from
    touches are skipped so a tap counts once. Other events are re-posted to
    the pygame event queue for the main loop.
    """

    def __init__(self, window_size: Optional[Tuple[int, int]] = None):
        """
        Args:
            window_size: Size used to scale normalized touch coordinates;
                defaults to the current display surface size.
        """
        self._event_queue: List[InputEvent] = []
        self._window_size = window_size

    def poll_events(self) -> List[InputEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def _get_window_size(self) -> Tuple[int, int]:
        if self._window_size is not None:
            return self._window_size
        surface = pygame.display.get_surface()
        if surface is None:
            return (0, 0)
        return surface.get_size()

    def update(self, dt: float) -> None:
        """Process pygame events and collect pointer activations."""
        deferred = []
        for event in pygame.event.get():
            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1 and not getattr(event, 'touch', False):
                    pos_x, pos_y = event.pos
                    self._push(float(pos_x), float(pos_y), 'mouse')
            elif event.type == pygame.FINGERDOWN:
                width, height = self._get_window_size()
                self._push(event.x * width, event.y * height, 'touch')
            elif event.type not in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP,
                                    pygame.FINGERMOTION, pygame.FINGERUP):
                deferred.append(event)

        for event in deferred:
            pygame.event.post(event)

    def _push(self, x: float, y: float, source: str) -> None:
        self._event_queue.append(InputEvent(
            position=Point2D(x=x, y=y),
            timestamp=time.monotonic(),
            source=source,
        ))

    def clear(self) -> None:
        self._event_queue.clear()
