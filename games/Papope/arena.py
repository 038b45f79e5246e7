"""
Arena geometry and the screen <-> arena coordinate mapping.

The simulation only knows arena coordinates: (0, 0) is the arena's top-left
corner and (width, height) its bottom-right. Whatever draws the arena on
screen owns an ArenaViewport to translate pointer positions into that space.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from models import Point2D


@dataclass(frozen=True)
class Arena:
    """Fixed rectangular bounds the heads move in."""
    width: float
    height: float

    @property
    def center(self) -> Point2D:
        return Point2D(x=self.width / 2, y=self.height / 2)

    def contains(self, point: Point2D) -> bool:
        """True if the point lies inside the arena (edges included)."""
        return 0 <= point.x <= self.width and 0 <= point.y <= self.height

    def contains_circle(self, x: float, y: float, radius: float, tolerance: float = 1e-9) -> bool:
        """True if a circle lies entirely inside the arena."""
        return (
            x - radius >= -tolerance
            and y - radius >= -tolerance
            and x + radius <= self.width + tolerance
            and y + radius <= self.height + tolerance
        )


@dataclass(frozen=True)
class ArenaViewport:
    """Placement of an arena on screen.

    Attributes:
        arena: The arena being displayed
        offset_x: Screen x of the arena's left edge
        offset_y: Screen y of the arena's top edge
        scale: Screen pixels per arena pixel
    """
    arena: Arena
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f'Viewport scale must be positive, got {self.scale}')

    @classmethod
    def fit(cls, arena: Arena, rect: Tuple[float, float, float, float]) -> 'ArenaViewport':
        """Letterbox the arena into a screen rectangle, centered.

        Args:
            arena: Arena to place
            rect: (x, y, width, height) of the available screen area
        """
        x, y, width, height = rect
        scale = min(width / arena.width, height / arena.height)
        return cls(
            arena=arena,
            offset_x=x + (width - arena.width * scale) / 2,
            offset_y=y + (height - arena.height * scale) / 2,
            scale=scale,
        )

    def to_arena(self, screen_point: Point2D) -> Optional[Point2D]:
        """Map a screen position into arena coordinates.

        Returns:
            The arena point, or None if the position falls outside the arena
        """
        point = Point2D(
            x=(screen_point.x - self.offset_x) / self.scale,
            y=(screen_point.y - self.offset_y) / self.scale,
        )
        if not self.arena.contains(point):
            return None
        return point

    def to_screen(self, point: Point2D) -> Point2D:
        """Map an arena position to screen coordinates."""
        return Point2D(
            x=self.offset_x + point.x * self.scale,
            y=self.offset_y + point.y * self.scale,
        )

    def screen_rect(self) -> Tuple[int, int, int, int]:
        """The arena's on-screen rectangle as integers (pygame.Rect-compatible)."""
        return (
            int(round(self.offset_x)),
            int(round(self.offset_y)),
            int(round(self.arena.width * self.scale)),
            int(round(self.arena.height * self.scale)),
        )
