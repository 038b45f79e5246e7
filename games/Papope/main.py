#!/usr/bin/env python3
"""
Papope - Standalone entry point.

Run this to play Papope with mouse or touch input.

Usage:
    python -m games.Papope.main
    python -m games.Papope.main --fullscreen
    python -m games.Papope.main --duration 20 --max-heads 40 --seed 7
"""

import argparse
import sys

import pygame

from arcade.games import GameState
from arcade.games.input import InputManager
from arcade.games.input.sources import MouseInputSource
from arcade.logging import close_all_sinks, configure_logging, create_sink, get_logger, register_sink
from models import ConfigurationError

from games.Papope.config import SCREEN_WIDTH, SCREEN_HEIGHT, TARGET_FPS, FULLSCREEN
from games.Papope.game_info import get_game_mode
from games.Papope.game_mode import PapopeMode

log = get_logger('papope.main')


def build_parser() -> argparse.ArgumentParser:
    """Argument parser built from PapopeMode's declared arguments."""
    return PapopeMode.add_arguments(argparse.ArgumentParser(description=PapopeMode.DESCRIPTION))


def main(argv=None) -> int:
    """Run Papope."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)
    register_sink('session', create_sink('session'))

    pygame.init()

    if args.fullscreen or FULLSCREEN:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        screen = pygame.display.set_mode((args.width or SCREEN_WIDTH, args.height or SCREEN_HEIGHT))
    width, height = screen.get_size()
    pygame.display.set_caption(PapopeMode.NAME)

    game_kwargs = {
        'width': width,
        'height': height,
        'duration': args.duration,
        'max_heads': args.max_heads,
        'speed': args.speed,
        'seed': args.seed,
    }

    try:
        game = get_game_mode(**game_kwargs)
    except ConfigurationError as exc:
        log.error("%s", exc)
        pygame.quit()
        return 2

    input_manager = InputManager(MouseInputSource())
    clock = pygame.time.Clock()
    running = True
    reported = False

    log.info("Click the heads! R restarts, ESC quits.")

    try:
        while running:
            dt = clock.tick(TARGET_FPS) / 1000.0

            input_manager.update(dt)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        reported = False
                        log.info("Restarting")

            game.handle_input(input_manager.get_events())
            game.update(dt)

            game.render(screen)
            pygame.display.flip()

            if game.state == GameState.GAME_OVER and not reported:
                log.info("GAME OVER! Score: %d", game.get_score())
                reported = True
    finally:
        close_all_sinks()
        pygame.quit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
