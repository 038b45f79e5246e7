"""Interface every arcade game implements.

A launcher never needs to know which game it is running: it reads the class
attributes to build its command line, constructs the game from the parsed
options, then feeds it input, time and a surface once per frame.
"""
import argparse
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from arcade.games.game_state import GameState

Argument = Dict[str, Any]


class BaseGame(ABC):
    """Abstract arcade game.

    Class attributes describe the game without instantiating it:

        NAME, DESCRIPTION, VERSION, AUTHOR: shown by launchers
        ARGUMENTS: argparse definitions, one dict per option; 'name' is the
            flag, every other key goes to add_argument() unchanged

    Per frame a launcher calls handle_input(), update() and render(), and
    polls `state` to notice the end of a round.
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    ARGUMENTS: List[Argument] = []

    # Window options every game accepts
    _BASE_ARGUMENTS: List[Argument] = [
        {'name': '--width', 'type': int, 'default': None, 'help': 'Window width in pixels'},
        {'name': '--height', 'type': int, 'default': None, 'help': 'Window height in pixels'},
        {'name': '--fullscreen', 'action': 'store_true', 'default': False,
         'help': 'Use the whole display'},
        {
            'name': '--log-level',
            'type': str,
            'default': None,
            'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
            'help': 'Console log level',
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Argument]:
        """Game arguments followed by the base ones; a game may redefine a base flag."""
        by_name: Dict[str, Argument] = {}
        for arg in list(cls.ARGUMENTS) + list(cls._BASE_ARGUMENTS):
            if arg.get('name'):
                by_name.setdefault(arg['name'], arg)
        return list(by_name.values())

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        for arg in cls.get_arguments():
            options = {key: value for key, value in arg.items() if key != 'name'}
            parser.add_argument(arg['name'], **options)
        return parser

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    @property
    def state(self) -> GameState:
        """Where the round is, in launcher terms. Override _get_internal_state()."""
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        pass

    @abstractmethod
    def get_score(self) -> int:
        pass

    @abstractmethod
    def handle_input(self, events: List) -> None:
        """Resolve this frame's InputEvents (screen coordinates)."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance by dt seconds."""
        pass

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        pass

    def reset(self) -> None:
        """Start over. Games without a restart keep this no-op."""
