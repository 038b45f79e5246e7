"""Common GameState enum for all arcade games.

Games keep whatever internal states they need, but report one of these
through their `state` property so launchers can treat every game alike.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states.

    States:
        WAITING: Loaded but not yet started
        PLAYING: Active gameplay in progress
        PAUSED: Game temporarily paused (manual pause)
        GAME_OVER: Game ended in loss or ran out of time
        WON: Game ended in success/victory
    """
    WAITING = "waiting"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"
