"""
Tests for Arena bounds and ArenaViewport coordinate mapping.
"""

import pytest

from models import Point2D
from games.Papope.arena import Arena, ArenaViewport


class TestArena:
    """Test Arena geometry."""

    def test_center(self):
        assert Arena(400, 300).center == Point2D(x=200, y=150)

    def test_contains_edges(self):
        arena = Arena(400, 300)
        assert arena.contains(Point2D(x=0, y=0))
        assert arena.contains(Point2D(x=400, y=300))
        assert not arena.contains(Point2D(x=400.1, y=10))
        assert not arena.contains(Point2D(x=10, y=-0.1))

    def test_contains_circle(self):
        arena = Arena(400, 300)
        assert arena.contains_circle(20, 20, 20)
        assert not arena.contains_circle(19, 20, 20)
        assert not arena.contains_circle(200, 290, 20)


class TestArenaViewport:
    """Test screen <-> arena mapping."""

    def test_identity_viewport(self):
        viewport = ArenaViewport(Arena(400, 300))
        assert viewport.to_arena(Point2D(x=12, y=34)) == Point2D(x=12, y=34)

    def test_offset_viewport(self):
        viewport = ArenaViewport(Arena(400, 300), offset_y=64)
        assert viewport.to_arena(Point2D(x=100, y=164)) == Point2D(x=100, y=100)

    def test_outside_arena_returns_none(self):
        viewport = ArenaViewport(Arena(400, 300), offset_y=64)
        assert viewport.to_arena(Point2D(x=100, y=10)) is None
        assert viewport.to_arena(Point2D(x=401, y=100)) is None

    def test_scaled_round_trip(self):
        viewport = ArenaViewport(Arena(400, 300), offset_x=10, offset_y=20, scale=2)
        point = Point2D(x=50, y=75)
        screen = viewport.to_screen(point)
        assert screen == Point2D(x=110, y=170)
        assert viewport.to_arena(screen) == point

    def test_fit_letterboxes_wide_rect(self):
        viewport = ArenaViewport.fit(Arena(400, 300), (0, 60, 1000, 600))
        assert viewport.scale == 2
        assert viewport.offset_x == 100
        assert viewport.offset_y == 60

    def test_fit_exact_rect(self):
        viewport = ArenaViewport.fit(Arena(400, 300), (0, 64, 400, 300))
        assert (viewport.offset_x, viewport.offset_y, viewport.scale) == (0, 64, 1)
        assert viewport.screen_rect() == (0, 64, 400, 300)

    def test_non_positive_scale_rejected(self):
        with pytest.raises(ValueError):
            ArenaViewport(Arena(400, 300), scale=0)
