"""
Head simulation for Papope.

Owns the live heads and the score. Each step moves every head and bounces
it off the arena edges; each hit removes one head and, while the population
is under the cap, replaces it with two smaller, faster children.
"""

import math
import random
from typing import List, Optional, Tuple, Union

from arcade.events import HitResult
from arcade.logging import get_logger
from models import HeadSnapshot, Point2D, SessionConfig

from games.Papope.arena import Arena
from games.Papope.head import Head, REFERENCE_FRAME_MS

log = get_logger('papope.simulation')

PointLike = Union[Point2D, Tuple[float, float]]


def _as_point(point: PointLike) -> Point2D:
    if isinstance(point, Point2D):
        return point
    x, y = point
    return Point2D(x=x, y=y)


class HeadSimulation:
    """
    The set of live heads for one session.

    Single-writer: step() and resolve_hit() mutate the head list without
    locking, so callers must serialize them.

    Args:
        config: Session settings (arena size, sizes, speeds, cap)
        rng: Random source; pass a seeded random.Random for repeatable runs
    """

    def __init__(self, config: SessionConfig, rng: Optional[random.Random] = None):
        self._config = config
        self._arena = Arena(config.arena_width, config.arena_height)
        self._rng = rng if rng is not None else random.Random()

        self._heads: List[Head] = []
        self._next_id = 0
        self._score = 0
        self._clock_ms = 0.0
        self._frame = 0

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def arena(self) -> Arena:
        return self._arena

    @property
    def score(self) -> int:
        return self._score

    @property
    def head_count(self) -> int:
        return len(self._heads)

    @property
    def clock_ms(self) -> float:
        """Simulated time since construction (sum of stepped elapsed)."""
        return self._clock_ms

    @property
    def frame(self) -> int:
        return self._frame

    def snapshots(self) -> Tuple[HeadSnapshot, ...]:
        """Heads in insertion order (oldest first, newest drawn on top)."""
        return tuple(head.snapshot(self._clock_ms) for head in self._heads)

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    def _spawn(self, x: float, y: float, size: float, speed: float) -> Head:
        head = Head.spawn(self._next_id, x, y, size, speed, self._rng)
        self._next_id += 1
        return head

    def seed(self, center: PointLike, size: float, speed: float) -> Head:
        """
        Replace all heads with a single head.

        Args:
            center: Spawn position (arena coordinates)
            size: Diameter
            speed: Base speed, jittered per Head.spawn

        Returns:
            The new head
        """
        center = _as_point(center)
        self._heads.clear()
        head = self._spawn(center.x, center.y, size, speed)
        self._heads.append(head)
        log.debug("Seeded head %d at (%.1f, %.1f)", head.id, head.x, head.y)
        return head

    def _spawn_children(self, parent: Head) -> List[Head]:
        size = self._config.child_size(parent.size)
        speed = self._config.child_speed
        jitter = self._config.spawn_jitter
        children = []
        for _ in range(2):
            x = parent.x + (self._rng.random() - 0.5) * 2 * jitter
            y = parent.y + (self._rng.random() - 0.5) * 2 * jitter
            children.append(self._spawn(x, y, size, speed))
        return children

    # -------------------------------------------------------------------------
    # Per-frame update
    # -------------------------------------------------------------------------

    def step(self, elapsed: float) -> None:
        """
        Advance every head by `elapsed` milliseconds.

        Never changes the head count or the score. Negative or non-finite
        elapsed values are ignored.
        """
        if not math.isfinite(elapsed) or elapsed < 0:
            log.debug("Ignoring step with elapsed=%r", elapsed)
            return

        self._clock_ms += elapsed
        self._frame += 1
        frames = elapsed / REFERENCE_FRAME_MS

        for head in self._heads:
            head.advance(frames)
            head.bounce(self._arena)
            head.expire_flash(self._clock_ms)

        log.trace("Frame %d: %d heads, %.2f ms", self._frame, len(self._heads), elapsed)

    # -------------------------------------------------------------------------
    # Hits
    # -------------------------------------------------------------------------

    def _find_hit(self, x: float, y: float) -> Optional[int]:
        """Index of the newest head containing the point, if any."""
        for index in range(len(self._heads) - 1, -1, -1):
            if self._heads[index].contains_point(x, y):
                return index
        return None

    def resolve_hit(self, point: PointLike) -> HitResult:
        """
        Hit-test a point and apply the split policy to at most one head.

        Heads are tested newest first, so the head drawn on top wins when
        heads overlap.

        Args:
            point: Arena coordinates of the activation

        Returns:
            HitResult naming the struck head, the ids that replaced it and
            whether the arena had to be reseeded
        """
        point = _as_point(point)
        if not point.is_finite:
            return HitResult.miss(frame=self._frame, message="non-finite point")

        index = self._find_hit(point.x, point.y)
        if index is None:
            return HitResult.miss(frame=self._frame)

        head = self._heads[index]
        distance = head.distance_to(point.x, point.y)
        self._score += 1
        head.flash(self._clock_ms + self._config.flash_ms)

        spawned: List[Head] = []
        reseeded = False
        if len(self._heads) < self._config.max_heads:
            spawned = self._spawn_children(head)
            self._heads[index:index + 1] = spawned
        else:
            del self._heads[index]
            if not self._heads:
                spawned = [self.seed(self._arena.center, self._config.initial_size,
                                     self._config.base_speed)]
                reseeded = True

        log.debug(
            "Hit head %d (size %.1f) -> %d heads, score %d",
            head.id, head.size, len(self._heads), self._score,
        )

        return HitResult(
            hit=True,
            target_id=head.id,
            distance=distance,
            points=1,
            removed=head.snapshot(self._clock_ms),
            spawned=tuple(child.id for child in spawned),
            reseeded=reseeded,
            head_count=len(self._heads),
            frame=self._frame,
        )

    def hit_test_and_resolve(self, point: PointLike) -> bool:
        """Resolve a hit and report only whether one occurred."""
        return self.resolve_hit(point).hit
