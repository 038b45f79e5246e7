"""
Input Event - Represents a single pointer or touch activation.

Plain frozen dataclass; events are created every frame so they skip
pydantic validation except for the timestamp check below.
"""
from dataclasses import dataclass

from models import Point2D


@dataclass(frozen=True)
class InputEvent:
    """Immutable input event from any source.

    All input sources must convert their events to this common format.

    Attributes:
        position: Where the activation occurred (screen coordinates)
        timestamp: When it occurred (seconds, from monotonic clock)
        source: Name of the device that produced it ('mouse', 'touch', ...)
    """
    position: Point2D
    timestamp: float
    source: str = 'mouse'

    def __post_init__(self):
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    def __str__(self) -> str:
        return (f"InputEvent(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"t={self.timestamp:.3f}, source={self.source})")
