"""
Hit results.

A game answers every pointer activation with a HitResult. The caller only
knows where the pointer landed; the result tells it what happened there, so
it can play feedback (score markers, sounds) without reaching into the game.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models import HeadSnapshot


class HitResult(BaseModel):
    """
    Outcome of one pointer activation.

    A miss carries only context (game state, frame). A hit also says which
    head was struck, what replaced it, and how many heads are left.
    """
    hit: bool = Field(..., description="Whether a head was struck")
    points: int = Field(default=0, ge=0, description="Points awarded for this activation")

    target_id: Optional[int] = Field(default=None, description="Id of the struck head")
    distance: Optional[float] = Field(default=None, ge=0, description="Distance from its center")
    removed: Optional[HeadSnapshot] = Field(default=None, description="The struck head, as it was hit")
    spawned: Tuple[int, ...] = Field(default=(), description="Ids of heads created by this hit")
    reseeded: bool = Field(default=False, description="The arena emptied and was reseeded")
    head_count: Optional[int] = Field(default=None, ge=0, description="Heads alive afterwards")

    game_state: Optional[str] = Field(default=None, description="Session phase at query time")
    frame: Optional[int] = Field(default=None, description="Simulation frame at query time")
    message: Optional[str] = Field(default=None, description="Why a query was rejected")

    model_config = ConfigDict(frozen=True)

    def __bool__(self) -> bool:
        return self.hit

    @classmethod
    def miss(cls, **kwargs) -> 'HitResult':
        return cls(hit=False, **kwargs)
