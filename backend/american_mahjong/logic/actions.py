"""
Action models accepted by the transition function.

The set is closed: the UI and the opponent controller submit the same
vocabulary through apply_action. Actions that name a seat are rejected
unless that seat is the one currently entitled to act.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from american_mahjong.logic.enums import ClaimType
from american_mahjong.logic.rng import validate_seed_hex


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class StartNewGame(_Action):
    type: Literal["start_new_game"] = "start_new_game"
    seed: str | None = None  # random seed when None

    @field_validator("seed")
    @classmethod
    def _validate_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v


class SelectCharlestonTile(_Action):
    """Toggle a tile in the human seat's Charleston selection."""

    type: Literal["select_charleston_tile"] = "select_charleston_tile"
    tile_id: int


class PassCharleston(_Action):
    type: Literal["pass_charleston"] = "pass_charleston"
    seat: int
    tile_ids: tuple[int, ...]


class Draw(_Action):
    type: Literal["draw"] = "draw"
    seat: int


class Discard(_Action):
    type: Literal["discard"] = "discard"
    seat: int
    tile_id: int


class Claim(_Action):
    type: Literal["claim"] = "claim"
    seat: int
    claim_type: ClaimType


class SkipClaim(_Action):
    type: Literal["skip_claim"] = "skip_claim"
    seat: int


class ReorderHand(_Action):
    """Move a human-seat tile before another tile, or to the end when no target is given."""

    type: Literal["reorder_hand"] = "reorder_hand"
    tile_id: int
    before_tile_id: int | None = None


GameAction = Annotated[
    StartNewGame | SelectCharlestonTile | PassCharleston | Draw | Discard | Claim | SkipClaim | ReorderHand,
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter[GameAction] = TypeAdapter(GameAction)


def parse_action(data: dict[str, Any]) -> GameAction:
    """
    Build an action from a plain mapping such as {"type": "discard", "seat": 0, "tile_id": 12}.

    Raises pydantic.ValidationError for unknown types or malformed fields.
    """
    return _ACTION_ADAPTER.validate_python(data)
