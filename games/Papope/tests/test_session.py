"""
Tests for SessionController.

Tests cover:
- Lifecycle transitions (not started -> active -> ended)
- Configuration validation at start
- Countdown and exactly-once termination callback
- Inert behaviour outside the active phase
- Snapshots handed to renderers
"""

import math
from typing import Any, Dict, List

import pytest

from arcade.logging import LogSink, register_sink
from models import ConfigurationError, Point2D, SessionConfig, SessionPhase
from games.Papope.session import SessionController


class RecordingSink(LogSink):
    """Sink that keeps records in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append(dict(record, module=module))

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


@pytest.fixture
def scores():
    return []


@pytest.fixture
def session(small_config, rng, scores):
    return SessionController(small_config, on_end=scores.append, rng=rng)


@pytest.fixture
def active(session):
    assert session.start()
    return session


# ============================================================================
# Lifecycle
# ============================================================================


class TestLifecycle:
    """Test phase transitions."""

    def test_initial_phase(self, session):
        assert session.phase == SessionPhase.NOT_STARTED
        assert session.score == 0
        assert session.simulation is None
        assert session.config is None

    def test_start_activates_and_seeds_center(self, session):
        assert session.start() is True
        snapshot = session.snapshot()
        assert session.phase == SessionPhase.ACTIVE
        assert snapshot.head_count == 1
        assert (snapshot.heads[0].x, snapshot.heads[0].y) == (200.0, 200.0)
        assert snapshot.heads[0].size == 90

    def test_start_uses_config_duration(self, active):
        assert active.remaining_ms == 10000

    def test_start_duration_override(self, session):
        session.start(duration=2500)
        assert session.remaining_ms == 2500
        assert session.config.duration_ms == 2500

    def test_start_twice_is_noop(self, active):
        active.tick(100)
        assert active.start(duration=99999) is False
        assert active.remaining_ms == 9900

    def test_start_after_end_is_noop(self, active):
        active.tick(10000)
        assert active.phase == SessionPhase.ENDED
        assert active.start() is False
        assert active.phase == SessionPhase.ENDED

    def test_accepts_mapping_config(self, scores):
        session = SessionController({'arena_width': 300, 'arena_height': 200}, on_end=scores.append)
        session.start(duration=500)
        assert session.config.arena_width == 300
        heads = session.snapshot().heads
        assert (heads[0].x, heads[0].y) == (150.0, 100.0)

    def test_defaults_without_config(self):
        session = SessionController()
        session.start()
        assert session.config == SessionConfig()
        assert session.remaining_ms == 30000


class TestConfigurationErrors:
    """Test degenerate configuration rejected at start."""

    @pytest.mark.parametrize("duration", [0, -1000, float('nan'), float('inf')])
    def test_bad_duration(self, session, duration):
        with pytest.raises(ConfigurationError, match="duration_ms"):
            session.start(duration=duration)
        assert session.phase == SessionPhase.NOT_STARTED

    @pytest.mark.parametrize("field,value", [
        ('max_heads', 0),
        ('initial_size', 0),
        ('min_size', -5),
        ('arena_width', 0),
        ('child_size_factor', 0),
        ('base_speed', float('nan')),
    ])
    def test_bad_field(self, field, value):
        session = SessionController({field: value})
        with pytest.raises(ConfigurationError, match=field):
            session.start()

    def test_min_size_above_initial_size(self):
        session = SessionController({'initial_size': 30, 'min_size': 40})
        with pytest.raises(ConfigurationError, match="min_size"):
            session.start()

    def test_head_larger_than_arena(self):
        session = SessionController({'arena_width': 50, 'arena_height': 50, 'initial_size': 90,
                                     'min_size': 40})
        with pytest.raises(ConfigurationError, match="does not fit"):
            session.start()

    def test_non_numeric_duration(self, session):
        with pytest.raises(ConfigurationError):
            session.start(duration="soon")

    def test_configuration_error_is_value_error(self, session):
        with pytest.raises(ValueError):
            session.start(duration=0)

    def test_failed_start_can_be_retried(self, session):
        with pytest.raises(ConfigurationError):
            session.start(duration=0)
        assert session.start(duration=1000) is True


# ============================================================================
# Ticking and termination
# ============================================================================


class TestTick:
    """Test the countdown."""

    def test_tick_counts_down(self, active):
        active.tick(250)
        active.tick(250)
        assert active.remaining_ms == 9500
        assert active.tick_count == 2

    def test_tick_steps_simulation(self, active):
        before = active.snapshot().heads[0]
        after = active.tick(16.7).heads[0]
        assert (after.x, after.y) != (before.x, before.y)

    def test_tick_returns_snapshot(self, active):
        snapshot = active.tick(1000)
        assert snapshot.phase == SessionPhase.ACTIVE
        assert snapshot.remaining_ms == 9000
        assert snapshot.seconds_remaining == 9
        assert snapshot.progress == pytest.approx(0.9)

    @pytest.mark.parametrize("elapsed", [-5.0, float('nan'), float('inf')])
    def test_invalid_elapsed_is_zero_length(self, active, elapsed):
        before = active.snapshot()
        after = active.tick(elapsed)
        assert after == before
        assert active.tick_count == 0

    def test_ten_second_example(self, session, scores):
        session.start(duration=10000)
        for i in range(10):
            session.tick(1000)
            if session.phase == SessionPhase.ENDED:
                break
        assert session.phase == SessionPhase.ENDED
        assert session.tick_count == 10
        assert scores == [0]

        session.tick(1000)
        assert session.tick_count == 10
        assert scores == [0]

    def test_overshoot_clamps_to_zero(self, active):
        snapshot = active.tick(25000)
        assert snapshot.remaining_ms == 0
        assert snapshot.phase == SessionPhase.ENDED
        assert snapshot.seconds_remaining == 0

    def test_final_tick_does_not_step(self, active):
        active.tick(5000)
        before = active.snapshot().heads
        after = active.tick(5000).heads
        assert after == before

    def test_callback_fires_exactly_once_with_frozen_score(self, active, scores):
        assert active.register_hit(Point2D(x=200, y=200)).hit
        active.tick(10000)
        assert scores == [1]

        for _ in range(5):
            active.tick(1000)
            active.register_hit(Point2D(x=200, y=200))
        assert scores == [1]
        assert active.final_score == 1
        assert active.score == 1

    def test_no_callback_before_end(self, active, scores):
        active.tick(9999)
        assert scores == []
        assert active.final_score is None

    def test_end_without_callback(self, small_config):
        session = SessionController(small_config)
        session.start()
        session.tick(small_config.duration_ms)
        assert session.phase == SessionPhase.ENDED
        assert session.final_score == 0

    def test_end_emits_session_record(self, active):
        sink = RecordingSink()
        register_sink('session', sink)
        active.register_hit((200.0, 200.0))
        active.tick(10000)

        assert len(sink.records) == 1
        record = sink.records[0]
        assert record['type'] == 'session_end'
        assert record['score'] == 1
        assert record['heads'] == 2
        assert record['module'] == 'session'


# ============================================================================
# Hits
# ============================================================================


class TestRegisterHit:
    """Test hit delegation."""

    def test_hit_before_start_is_inert(self, session):
        result = session.register_hit(Point2D(x=200, y=200))
        assert result.hit is False
        assert result.game_state == 'not_started'
        assert session.score == 0

    def test_hit_while_active(self, active):
        result = active.register_hit(Point2D(x=200, y=200))
        assert result.hit is True
        assert result.points == 1
        assert result.game_state == 'active'
        assert active.score == 1
        assert active.snapshot().head_count == 2

    def test_miss_while_active(self, active):
        result = active.register_hit(Point2D(x=5, y=5))
        assert not result
        assert active.score == 0

    def test_hit_after_end_is_inert(self, active):
        active.tick(10000)
        before = active.snapshot()
        result = active.register_hit(Point2D(x=200, y=200))
        assert result.hit is False
        assert result.game_state == 'ended'
        assert active.snapshot() == before

    def test_score_is_monotonic(self, active):
        previous = 0
        for i in range(40):
            heads = active.snapshot().heads
            target = heads[i % len(heads)]
            active.register_hit((target.x, target.y))
            active.tick(16.7)
            assert active.score >= previous
            previous = active.score
        assert 1 <= active.snapshot().head_count <= 4


class TestSnapshot:
    """Test renderer snapshots."""

    def test_not_started_snapshot(self, session):
        snapshot = session.snapshot()
        assert snapshot.phase == SessionPhase.NOT_STARTED
        assert snapshot.heads == ()
        assert snapshot.progress == 0.0

    def test_urgent_in_last_three_seconds(self, active):
        assert not active.tick(6000).is_urgent
        assert active.tick(1500).is_urgent

    def test_seconds_remaining_rounds_up(self, active):
        assert active.tick(8500).seconds_remaining == 2
        assert math.isclose(active.snapshot().remaining_ms, 1500)

    def test_ended_snapshot_not_urgent(self, active):
        assert not active.tick(10000).is_urgent
