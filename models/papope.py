"""
Papope data models.

Session configuration and the read-only snapshots handed to renderers.
The simulation keeps its own mutable head records; these models are what
leaves it.
"""

import math
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class ConfigurationError(ValueError):
    """Raised when session settings would produce a degenerate simulation."""


class SessionPhase(Enum):
    """Lifecycle of one timed session. ENDED is terminal."""
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


class SessionConfig(BaseModel):
    """Tunable parameters for one session.

    Distances are in arena pixels, durations in milliseconds, speeds in
    pixels per reference frame (1/60 s).

    Examples:
        >>> config = SessionConfig(arena_width=400, arena_height=400, max_heads=4)
        >>> config.child_size(30) == config.min_size
        True
    """
    arena_width: float = 1280
    arena_height: float = 720
    duration_ms: float = 30000
    initial_size: float = 90
    base_speed: float = 3.5
    max_heads: int = 80
    child_size_factor: float = 0.82
    min_size: float = 40
    child_speed_factor: float = 1.1
    spawn_jitter: float = 10
    flash_ms: float = 120

    model_config = ConfigDict(frozen=True)

    @field_validator('arena_width', 'arena_height', 'duration_ms', 'initial_size', 'min_size')
    @classmethod
    def validate_positive(cls, v: float, info) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError(f'{info.field_name} must be a positive finite number, got {v}')
        return v

    @field_validator('base_speed', 'child_speed_factor', 'spawn_jitter', 'flash_ms')
    @classmethod
    def validate_non_negative(cls, v: float, info) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f'{info.field_name} must be a non-negative finite number, got {v}')
        return v

    @field_validator('child_size_factor')
    @classmethod
    def validate_shrink_factor(cls, v: float) -> float:
        if not math.isfinite(v) or not 0 < v <= 1:
            raise ValueError(f'child_size_factor must be in (0, 1], got {v}')
        return v

    @field_validator('max_heads')
    @classmethod
    def validate_max_heads(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f'max_heads must be at least 1, got {v}')
        return v

    @model_validator(mode='after')
    def validate_sizes(self) -> 'SessionConfig':
        if self.min_size > self.initial_size:
            raise ValueError(
                f'min_size ({self.min_size}) cannot exceed initial_size ({self.initial_size})'
            )
        if self.initial_size > min(self.arena_width, self.arena_height):
            raise ValueError(
                f'initial_size ({self.initial_size}) does not fit in a '
                f'{self.arena_width}x{self.arena_height} arena'
            )
        return self

    def child_size(self, parent_size: float) -> float:
        """Diameter of a child spawned from a head of `parent_size`."""
        return max(self.min_size, parent_size * self.child_size_factor)

    @property
    def child_speed(self) -> float:
        return self.base_speed * self.child_speed_factor


class HeadSnapshot(BaseModel):
    """Read-only view of one head for the renderer."""
    id: int
    x: float
    y: float
    size: float
    vx: float = 0.0
    vy: float = 0.0
    rotation: float = 0.0
    flashing: bool = False

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def radius(self) -> float:
        return self.size / 2


class SessionSnapshot(BaseModel):
    """Everything a renderer needs for one frame.

    Heads are in insertion order: oldest first, so drawing them in order
    leaves the newest on top.
    """
    phase: SessionPhase
    score: int = Field(default=0, ge=0)
    remaining_ms: float = Field(default=0.0, ge=0)
    duration_ms: float = Field(default=0.0, ge=0)
    heads: Tuple[HeadSnapshot, ...] = ()

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def head_count(self) -> int:
        return len(self.heads)

    @computed_field
    @property
    def seconds_remaining(self) -> int:
        """Whole seconds left, rounded up (what the HUD shows)."""
        return math.ceil(self.remaining_ms / 1000)

    @computed_field
    @property
    def progress(self) -> float:
        """Fraction of the session still to play, in [0, 1]."""
        if self.duration_ms <= 0:
            return 0.0
        return max(0.0, min(1.0, self.remaining_ms / self.duration_ms))

    @computed_field
    @property
    def is_urgent(self) -> bool:
        """True in the last three seconds of an active session."""
        return self.phase == SessionPhase.ACTIVE and self.seconds_remaining <= 3
