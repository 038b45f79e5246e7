"""Pytest fixtures for Papope tests."""
import os
import random

# Headless pygame for the game mode tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from arcade.logging import close_all_sinks
from models import SessionConfig


@pytest.fixture
def rng():
    """Seeded random source so spawns are repeatable."""
    return random.Random(1234)


@pytest.fixture
def small_config():
    """400x400 arena with a cap of 4 heads."""
    return SessionConfig(
        arena_width=400,
        arena_height=400,
        duration_ms=10000,
        initial_size=90,
        base_speed=3.5,
        max_heads=4,
        child_size_factor=0.82,
        min_size=40,
    )


@pytest.fixture(autouse=True)
def clean_sinks():
    """Make sure no structured sink leaks between tests."""
    yield
    close_all_sinks()
