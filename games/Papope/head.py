"""
Head entity for Papope.

A head is a bouncing circle. Heads are owned and mutated in place by
HeadSimulation; everything outside the simulation sees HeadSnapshots.

Motion is expressed per reference frame (1/60 s), so a velocity of 3.5
moves 3.5 px in 16.7 ms and 7 px in 33.3 ms.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional

from models import HeadSnapshot

from games.Papope.arena import Arena

REFERENCE_FRAME_MS = 1000.0 / 60.0

# Spawn randomisation
SPEED_JITTER = (0.8, 1.2)        # multiplier range applied to the requested speed
MAX_ROTATION_SPEED = 2.0         # degrees per reference frame, either direction


@dataclass
class Head:
    """A clickable bouncing head.

    Attributes:
        id: Unique within its simulation, never reused
        x, y: Center (arena px)
        vx, vy: Velocity (px per reference frame)
        size: Diameter (px)
        rotation: Angle in degrees (visual only)
        rotation_speed: Degrees per reference frame (visual only)
        flash_until: Simulation time (ms) the hit flash ends, None when not flashing
    """
    id: int
    x: float
    y: float
    vx: float
    vy: float
    size: float
    rotation: float = 0.0
    rotation_speed: float = 0.0
    flash_until: Optional[float] = None

    @classmethod
    def spawn(
        cls,
        head_id: int,
        x: float,
        y: float,
        size: float,
        speed: float,
        rng: random.Random,
    ) -> 'Head':
        """
        Create a head with a random heading.

        Args:
            head_id: Identifier assigned by the owning simulation
            x, y: Spawn center
            size: Diameter
            speed: Base speed; the actual speed is jittered by SPEED_JITTER
            rng: Random source

        Returns:
            New Head
        """
        angle = rng.random() * 2 * math.pi
        low, high = SPEED_JITTER
        actual_speed = speed * (low + rng.random() * (high - low))
        return cls(
            id=head_id,
            x=x,
            y=y,
            vx=math.cos(angle) * actual_speed,
            vy=math.sin(angle) * actual_speed,
            size=size,
            rotation=rng.random() * 360,
            rotation_speed=(rng.random() - 0.5) * 2 * MAX_ROTATION_SPEED,
        )

    @property
    def radius(self) -> float:
        return self.size / 2

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.x, y - self.y)

    def contains_point(self, x: float, y: float) -> bool:
        """Strict point-in-circle test; a point on the rim is a miss."""
        return self.distance_to(x, y) < self.radius

    def advance(self, frames: float) -> None:
        """Move and spin by `frames` reference frames."""
        self.x += self.vx * frames
        self.y += self.vy * frames
        self.rotation = (self.rotation + self.rotation_speed * frames) % 360

    def bounce(self, arena: Arena) -> None:
        """Reflect off arena edges, clamping once per axis."""
        r = self.radius

        if self.x - r < 0:
            self.x = r
            self.vx = abs(self.vx)
        if self.x + r > arena.width:
            self.x = arena.width - r
            self.vx = -abs(self.vx)
        if self.y - r < 0:
            self.y = r
            self.vy = abs(self.vy)
        if self.y + r > arena.height:
            self.y = arena.height - r
            self.vy = -abs(self.vy)

    def flash(self, until: float) -> None:
        self.flash_until = until

    def is_flashing(self, now: float) -> bool:
        return self.flash_until is not None and now < self.flash_until

    def expire_flash(self, now: float) -> None:
        if self.flash_until is not None and now >= self.flash_until:
            self.flash_until = None

    def snapshot(self, now: float) -> HeadSnapshot:
        return HeadSnapshot(
            id=self.id,
            x=self.x,
            y=self.y,
            size=self.size,
            vx=self.vx,
            vy=self.vy,
            rotation=self.rotation,
            flashing=self.is_flashing(now),
        )
