"""
Papope - Configuration loader.

Loads settings from .env.local then .env in the game directory; real
environment variables always win.
"""
import os
from pathlib import Path
from typing import Any, Dict, Tuple

from dotenv import load_dotenv

from models import SessionConfig

GAME_DIR = Path(__file__).parent

# First load wins since load_dotenv never overrides an existing variable
load_dotenv(GAME_DIR / '.env.local')
load_dotenv(GAME_DIR / '.env')


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes', 'on')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH: int = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT: int = _get_int('SCREEN_HEIGHT', 720)
HUD_HEIGHT: int = _get_int('HUD_HEIGHT', 64)
TARGET_FPS: int = _get_int('TARGET_FPS', 60)
FULLSCREEN: bool = _get_bool('FULLSCREEN', False)

# Session
GAME_DURATION_MS: float = _get_float('GAME_DURATION_MS', 30000)

# Heads
HEAD_SIZE: float = _get_float('HEAD_SIZE', 90)  # diameter in px
BASE_SPEED: float = _get_float('BASE_SPEED', 3.5)  # px per 1/60 s
MAX_HEADS: int = _get_int('MAX_HEADS', 80)
CHILD_SIZE_FACTOR: float = _get_float('CHILD_SIZE_FACTOR', 0.82)
MIN_SIZE: float = _get_float('MIN_SIZE', 40)
CHILD_SPEED_FACTOR: float = _get_float('CHILD_SPEED_FACTOR', 1.1)
SPAWN_JITTER: float = _get_float('SPAWN_JITTER', 10)  # +/- px per axis
FLASH_MS: float = _get_float('FLASH_MS', 120)

# Feedback
SCORE_MARKER_LIFETIME: float = _get_float('SCORE_MARKER_LIFETIME', 0.7)  # seconds

# Colors (not configurable via .env)
BACKGROUND_COLOR: Tuple[int, int, int] = (17, 17, 20)
ARENA_COLOR: Tuple[int, int, int] = (28, 28, 34)
HEAD_COLOR: Tuple[int, int, int] = (214, 48, 49)
HEAD_FLASH_COLOR: Tuple[int, int, int] = (255, 170, 160)
FACE_COLOR: Tuple[int, int, int] = (20, 10, 10)
TEXT_COLOR: Tuple[int, int, int] = (245, 240, 225)
ACCENT_COLOR: Tuple[int, int, int] = (255, 214, 10)
URGENT_COLOR: Tuple[int, int, int] = (214, 48, 49)


def session_settings(arena_width: float, arena_height: float, **overrides) -> Dict[str, Any]:
    """Session settings from the environment-driven defaults, unvalidated.

    Args:
        arena_width: Playable width in px
        arena_height: Playable height in px
        **overrides: Any SessionConfig field; None values are ignored

    Returns:
        Mapping of SessionConfig fields, validated when a session starts
    """
    settings = {
        'arena_width': arena_width,
        'arena_height': arena_height,
        'duration_ms': GAME_DURATION_MS,
        'initial_size': HEAD_SIZE,
        'base_speed': BASE_SPEED,
        'max_heads': MAX_HEADS,
        'child_size_factor': CHILD_SIZE_FACTOR,
        'min_size': MIN_SIZE,
        'child_speed_factor': CHILD_SPEED_FACTOR,
        'spawn_jitter': SPAWN_JITTER,
        'flash_ms': FLASH_MS,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return settings


def default_session_config(arena_width: float = SCREEN_WIDTH,
                           arena_height: float = SCREEN_HEIGHT - HUD_HEIGHT) -> SessionConfig:
    """Validated SessionConfig for the default window layout."""
    return SessionConfig(**session_settings(arena_width, arena_height))
