"""
Pydantic data models shared across the arcade framework and games.

- Primitives: Point2D
- Papope: session configuration, lifecycle phase and renderer snapshots

Usage:
    >>> from models import Point2D, SessionConfig
    >>> from models.papope import SessionSnapshot
"""

from .primitives import Point2D

from .papope import (
    ConfigurationError,
    SessionPhase,
    SessionConfig,
    HeadSnapshot,
    SessionSnapshot,
)

__all__ = [
    'Point2D',
    'ConfigurationError',
    'SessionPhase',
    'SessionConfig',
    'HeadSnapshot',
    'SessionSnapshot',
]
