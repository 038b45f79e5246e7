"""
Session controller for Papope.

One SessionController is one timed play-through:

    NOT_STARTED --start()--> ACTIVE --time runs out--> ENDED

ENDED is terminal; play again with a new instance. tick() and register_hit()
are silent no-ops outside ACTIVE, so a frame loop or input handler that
fires after the session ended is harmless.
"""

import math
import random
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from arcade.events import HitResult
from arcade.logging import emit_record, get_logger
from models import ConfigurationError, SessionConfig, SessionPhase, SessionSnapshot

from games.Papope.simulation import HeadSimulation, PointLike

log = get_logger('papope.session')

SessionSettings = Union[SessionConfig, Mapping[str, Any], None]


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = '.'.join(str(item) for item in error.get('loc', ())) or 'config'
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return '; '.join(parts)


class SessionController:
    """
    Clock and lifecycle for one session.

    Args:
        config: SessionConfig, a mapping of its fields, or None for defaults.
            Validated when the session starts.
        on_end: Called exactly once with the final score when time runs out
        rng: Random source handed to the simulation
    """

    def __init__(
        self,
        config: SessionSettings = None,
        on_end: Optional[Callable[[int], Any]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._settings = config
        self._on_end = on_end
        self._rng = rng

        self._config: Optional[SessionConfig] = None
        self._simulation: Optional[HeadSimulation] = None
        self._phase = SessionPhase.NOT_STARTED
        self._duration_ms = 0.0
        self._remaining_ms = 0.0
        self._tick_count = 0
        self._final_score: Optional[int] = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase == SessionPhase.ACTIVE

    @property
    def config(self) -> Optional[SessionConfig]:
        """Validated settings, available once started."""
        return self._config

    @property
    def simulation(self) -> Optional[HeadSimulation]:
        return self._simulation

    @property
    def score(self) -> int:
        if self._simulation is None:
            return 0
        return self._simulation.score

    @property
    def final_score(self) -> Optional[int]:
        """Score reported at the end, None until then."""
        return self._final_score

    @property
    def remaining_ms(self) -> float:
        return self._remaining_ms

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def snapshot(self) -> SessionSnapshot:
        """Current state for a renderer."""
        return SessionSnapshot(
            phase=self._phase,
            score=self.score,
            remaining_ms=self._remaining_ms,
            duration_ms=self._duration_ms,
            heads=self._simulation.snapshots() if self._simulation else (),
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _resolve_config(self, duration: Optional[float]) -> SessionConfig:
        if self._settings is None:
            settings = {}
        elif isinstance(self._settings, SessionConfig):
            settings = self._settings.model_dump()
        else:
            settings = dict(self._settings)

        if duration is not None:
            settings['duration_ms'] = duration

        try:
            return SessionConfig.model_validate(settings)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid session configuration: {_describe_errors(exc)}"
            ) from exc

    def start(self, duration: Optional[float] = None) -> bool:
        """
        Start the session with one head in the middle of the arena.

        Args:
            duration: Session length in ms (defaults to config.duration_ms)

        Returns:
            True if the session started, False if it was already started

        Raises:
            ConfigurationError: If the settings would produce a degenerate game
        """
        if self._phase != SessionPhase.NOT_STARTED:
            log.debug("start() ignored in phase %s", self._phase.value)
            return False

        config = self._resolve_config(duration)
        simulation = HeadSimulation(config, rng=self._rng)
        simulation.seed(simulation.arena.center, config.initial_size, config.base_speed)

        self._config = config
        self._simulation = simulation
        self._duration_ms = config.duration_ms
        self._remaining_ms = config.duration_ms
        self._phase = SessionPhase.ACTIVE

        log.info(
            "Session started: %.0f ms, arena %gx%g, cap %d",
            config.duration_ms, config.arena_width, config.arena_height, config.max_heads,
        )
        return True

    def tick(self, elapsed: float) -> SessionSnapshot:
        """
        Advance the session clock by `elapsed` milliseconds.

        Ends the session (and fires on_end once) when the clock reaches zero;
        otherwise steps the simulation. Negative or non-finite elapsed values
        count as a zero-length tick.

        Returns:
            Snapshot of the state after the tick
        """
        if self._phase != SessionPhase.ACTIVE:
            return self.snapshot()

        if not math.isfinite(elapsed) or elapsed < 0:
            log.debug("Ignoring tick with elapsed=%r", elapsed)
            return self.snapshot()

        self._tick_count += 1
        self._remaining_ms -= elapsed

        if self._remaining_ms <= 0:
            self._end()
        else:
            self._simulation.step(elapsed)

        return self.snapshot()

    def _end(self) -> None:
        self._remaining_ms = 0.0
        self._phase = SessionPhase.ENDED
        self._final_score = self._simulation.score

        log.info("Session ended after %d ticks, score %d", self._tick_count, self._final_score)
        emit_record('session', {
            'type': 'session_end',
            'score': self._final_score,
            'ticks': self._tick_count,
            'duration_ms': self._duration_ms,
            'heads': self._simulation.head_count,
        })

        if self._on_end is not None:
            self._on_end(self._final_score)

    def register_hit(self, point: PointLike) -> HitResult:
        """
        Resolve a pointer activation at arena coordinates.

        Returns:
            HitResult from the simulation, or a miss if the session is not active
        """
        if self._phase != SessionPhase.ACTIVE:
            return HitResult.miss(game_state=self._phase.value)

        result = self._simulation.resolve_hit(point)
        return result.model_copy(update={'game_state': self._phase.value})
