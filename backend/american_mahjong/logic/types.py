"""
Pydantic view models that cross the boundary to the UI collaborator.
"""

from pydantic import BaseModel, ConfigDict

from american_mahjong.logic.enums import ClaimType, GamePhase, MeldType
from american_mahjong.logic.tiles import Tile


class MeldView(BaseModel):
    model_config = ConfigDict(frozen=True)

    meld_type: MeldType
    tiles: tuple[Tile, ...]
    from_seat: int


class ClaimableDiscard(BaseModel):
    """The discard currently on offer and who may claim it."""

    model_config = ConfigDict(frozen=True)

    claimant_seat: int
    discarder_seat: int
    claim_type: ClaimType
    tile: Tile


class PlayerView(BaseModel):
    """
    One seat as seen by the viewer.

    `hand` is only populated for the viewer's own seat; other seats expose
    their tile count.
    """

    model_config = ConfigDict(frozen=True)

    seat: int
    is_ai_player: bool
    tile_count: int
    hand: tuple[Tile, ...] | None = None
    discards: tuple[Tile, ...] = ()
    exposures: tuple[MeldView, ...] = ()


class GameView(BaseModel):
    """Visible game state for one seat."""

    model_config = ConfigDict(frozen=True)

    seat: int
    phase: GamePhase
    current_player: int
    wall_count: int
    players: tuple[PlayerView, ...]
    charleston_pass_index: int
    charleston_player: int
    charleston_selected_ids: tuple[int, ...] = ()
    claimable_discard: ClaimableDiscard | None = None
    last_drawn_tile: Tile | None = None
    winner: int | None = None
    winning_hand: str | None = None
