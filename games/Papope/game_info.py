"""
Papope - Game Info

Game metadata and the factory function used by launchers.
"""

NAME = "Papope"
DESCRIPTION = "Click the heads! Every hit splits one into two."
VERSION = "1.0.0"
AUTHOR = "Arcade Team"


def get_game_mode(**kwargs):
    """
    Factory function to create a PapopeMode instance.

    Args:
        **kwargs: Launcher options; None values are dropped so the game's
            own defaults apply
            - width, height: Window size
            - duration: Session length in seconds
            - max_heads: Population cap
            - speed: Base head speed
            - seed: Random seed

    Returns:
        PapopeMode instance
    """
    from games.Papope.game_mode import PapopeMode

    game_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return PapopeMode(**game_kwargs)
