"""
Papope game mode.

pygame front end around a SessionController: maps pointer positions into
the arena, feeds hits to the session, and draws each frame's snapshot.
"""

import math
import random
from typing import Any, Callable, List, Optional

import pygame

from arcade.games import BaseGame, GameState
from arcade.games.input import InputEvent
from arcade.logging import get_logger
from models import ConfigurationError, HeadSnapshot, Point2D, SessionPhase, SessionSnapshot

from games.Papope.arena import Arena, ArenaViewport
from games.Papope.config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    HUD_HEIGHT,
    SCORE_MARKER_LIFETIME,
    BACKGROUND_COLOR,
    ARENA_COLOR,
    HEAD_COLOR,
    HEAD_FLASH_COLOR,
    FACE_COLOR,
    TEXT_COLOR,
    ACCENT_COLOR,
    URGENT_COLOR,
    session_settings,
)
from games.Papope.session import SessionController

log = get_logger('papope.game_mode')

_PHASE_TO_STATE = {
    SessionPhase.NOT_STARTED: GameState.WAITING,
    SessionPhase.ACTIVE: GameState.PLAYING,
    SessionPhase.ENDED: GameState.GAME_OVER,
}


class ScoreMarker:
    """Floating "+1" where a hit landed."""

    def __init__(self, x: float, y: float, lifetime: float = SCORE_MARKER_LIFETIME):
        self.x = x
        self.y = y
        self.lifetime = lifetime
        self.elapsed = 0.0

    def update(self, dt: float) -> bool:
        """Age the marker. Returns False when it should be dropped."""
        self.elapsed += dt
        return self.elapsed < self.lifetime

    def render(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        progress = min(1.0, self.elapsed / self.lifetime)
        text = font.render("+1", True, ACCENT_COLOR)
        text.set_alpha(int(255 * (1 - progress)))
        rise = 30 * progress
        screen.blit(text, text.get_rect(center=(int(self.x), int(self.y - rise))))


class PapopeMode(BaseGame):
    """
    Papope game mode.

    One head bounces around the arena. Every hit splits it in two smaller,
    faster heads until the population cap; score as many hits as possible
    before the clock runs out.
    """

    NAME = "Papope"
    DESCRIPTION = "Click the heads! Every hit splits one into two."
    VERSION = "1.0.0"
    AUTHOR = "Arcade Team"

    ARGUMENTS = [
        {
            'name': '--duration',
            'type': float,
            'default': None,
            'help': 'Session length in seconds'
        },
        {
            'name': '--max-heads',
            'type': int,
            'default': None,
            'help': 'Population cap'
        },
        {
            'name': '--speed',
            'type': float,
            'default': None,
            'help': 'Base head speed (px per 1/60 s)'
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for a repeatable session'
        },
    ]

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        duration: Optional[float] = None,
        max_heads: Optional[int] = None,
        speed: Optional[float] = None,
        seed: Optional[int] = None,
        hud_height: int = HUD_HEIGHT,
        on_end: Optional[Callable[[int], Any]] = None,
        auto_start: bool = True,
        **kwargs,
    ):
        """
        Initialize game mode.

        Args:
            width: Window width (default: SCREEN_WIDTH)
            height: Window height (default: SCREEN_HEIGHT)
            duration: Session length in seconds (default: GAME_DURATION_MS)
            max_heads: Population cap override
            speed: Base speed override
            seed: Random seed; each restart replays the same spawns
            hud_height: Height of the HUD bar above the arena
            on_end: Called with the final score when the session ends
            auto_start: Start the session immediately
            **kwargs: Launcher arguments this game does not use

        Raises:
            ConfigurationError: If the window leaves no room for the arena, or
                the session settings are degenerate
        """
        self._width = width or SCREEN_WIDTH
        self._height = height or SCREEN_HEIGHT
        self._hud_height = hud_height
        self._seed = seed
        self._on_end = on_end
        self._auto_start = auto_start

        arena = Arena(self._width, self._height - hud_height)
        if arena.width <= 0 or arena.height <= 0:
            raise ConfigurationError(
                f"Invalid session configuration: a {self._width}x{self._height} window "
                f"leaves no arena below a {hud_height} px HUD"
            )
        self._viewport = ArenaViewport.fit(arena, (0, hud_height, arena.width, arena.height))
        self._settings = session_settings(
            arena.width,
            arena.height,
            duration_ms=duration * 1000 if duration is not None else None,
            max_heads=max_heads,
            base_speed=speed,
        )

        self._markers: List[ScoreMarker] = []
        self._final_score: Optional[int] = None

        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

        self._session = self._create_session()

    def _create_session(self) -> SessionController:
        rng = random.Random(self._seed) if self._seed is not None else None
        session = SessionController(self._settings, on_end=self._handle_session_end, rng=rng)
        if self._auto_start:
            session.start()
        return session

    def _handle_session_end(self, score: int) -> None:
        self._final_score = score
        log.info("Final score: %d", score)
        if self._on_end is not None:
            self._on_end(score)

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 36)
        return self._font

    def _get_font_large(self) -> pygame.font.Font:
        if self._font_large is None:
            self._font_large = pygame.font.Font(None, 72)
        return self._font_large

    # =========================================================================
    # BaseGame interface
    # =========================================================================

    def _get_internal_state(self) -> GameState:
        return _PHASE_TO_STATE[self._session.phase]

    @property
    def session(self) -> SessionController:
        return self._session

    @property
    def viewport(self) -> ArenaViewport:
        return self._viewport

    @property
    def markers(self) -> List[ScoreMarker]:
        return self._markers

    @property
    def final_score(self) -> Optional[int]:
        return self._final_score

    def get_score(self) -> int:
        return self._session.score

    def start(self) -> bool:
        """Start a session created with auto_start=False."""
        return self._session.start()

    def reset(self) -> None:
        """Discard the current session and start a fresh one."""
        self._markers = []
        self._final_score = None
        self._session = self._create_session()

    def handle_input(self, events: List[InputEvent]) -> None:
        """
        Resolve pointer activations.

        Args:
            events: Input events in screen coordinates
        """
        if not self._session.is_active:
            return

        for event in events:
            point = self._viewport.to_arena(event.position)
            if point is None:
                continue
            result = self._session.register_hit(point)
            if result.hit:
                self._markers.append(ScoreMarker(event.position.x, event.position.y))

    def update(self, dt: float) -> None:
        """
        Advance the session.

        Args:
            dt: Delta time in seconds
        """
        self._session.tick(dt * 1000.0)
        self._markers = [m for m in self._markers if m.update(dt)]

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self, screen: pygame.Surface) -> None:
        snapshot = self._session.snapshot()

        screen.fill(BACKGROUND_COLOR)
        pygame.draw.rect(screen, ARENA_COLOR, pygame.Rect(*self._viewport.screen_rect()))

        for head in snapshot.heads:
            self._render_head(screen, head)

        font = self._get_font()
        for marker in self._markers:
            marker.render(screen, font)

        self._render_hud(screen, snapshot)

        if snapshot.phase == SessionPhase.ENDED:
            self._render_game_over(screen, snapshot)

    def _render_head(self, screen: pygame.Surface, head: HeadSnapshot) -> None:
        center = self._viewport.to_screen(Point2D(x=head.x, y=head.y))
        radius = head.radius * self._viewport.scale
        color = HEAD_FLASH_COLOR if head.flashing else HEAD_COLOR

        pygame.draw.circle(screen, color, (int(center.x), int(center.y)), int(radius))

        angle = math.radians(head.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        def local(lx: float, ly: float) -> tuple:
            return (
                int(center.x + (lx * cos_a - ly * sin_a) * radius),
                int(center.y + (lx * sin_a + ly * cos_a) * radius),
            )

        eye_radius = max(2, int(radius * 0.12))
        pygame.draw.circle(screen, FACE_COLOR, local(-0.35, -0.2), eye_radius)
        pygame.draw.circle(screen, FACE_COLOR, local(0.35, -0.2), eye_radius)
        pygame.draw.line(screen, FACE_COLOR, local(-0.35, 0.35), local(0.35, 0.35),
                         max(2, int(radius * 0.08)))

    def _render_hud(self, screen: pygame.Surface, snapshot: SessionSnapshot) -> None:
        font = self._get_font()
        urgent = snapshot.is_urgent

        count_text = font.render(f"{snapshot.head_count} heads", True, TEXT_COLOR)
        screen.blit(count_text, (16, (self._hud_height - count_text.get_height()) // 2))

        time_text = font.render(
            f"{snapshot.seconds_remaining} s", True, URGENT_COLOR if urgent else TEXT_COLOR
        )
        time_rect = time_text.get_rect(midright=(self._width - 16, self._hud_height // 2))
        screen.blit(time_text, time_rect)

        score_text = font.render(f"{snapshot.score} hits", True, TEXT_COLOR)
        score_rect = score_text.get_rect(midright=(time_rect.left - 32, self._hud_height // 2))
        screen.blit(score_text, score_rect)

        bar_width = int(self._width * snapshot.progress)
        pygame.draw.rect(
            screen,
            URGENT_COLOR if urgent else ACCENT_COLOR,
            pygame.Rect(0, self._hud_height - 4, bar_width, 4),
        )

    def _render_game_over(self, screen: pygame.Surface, snapshot: SessionSnapshot) -> None:
        overlay = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        screen.blit(overlay, (0, 0))

        title = self._get_font_large().render("TIME'S UP", True, ACCENT_COLOR)
        screen.blit(title, title.get_rect(center=(self._width // 2, self._height // 2 - 40)))

        score_text = self._get_font().render(f"Final Score: {snapshot.score}", True, TEXT_COLOR)
        screen.blit(score_text, score_text.get_rect(center=(self._width // 2, self._height // 2 + 20)))
