"""
Shared primitive data types.

Basic geometric types used by the simulation, the input layer and the
renderer.
"""

import math

from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions, velocities, and coordinates.

    Coordinates can be positive, negative, or zero, so the same type serves
    for screen positions, arena positions and offsets.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> pos.distance_to(Point2D(x=103.0, y=204.0))
        5.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"
