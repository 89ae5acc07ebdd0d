"""
Immutable game state models for American Mah Jong.

Every transition returns a new GameState built with model_copy; no model
is mutated after construction.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from american_mahjong.logic.enums import ClaimType, GamePhase, MeldType
from american_mahjong.logic.settings import GameSettings
from american_mahjong.logic.tiles import Tile
from american_mahjong.logic.types import ClaimableDiscard, GameView, MeldView, PlayerView

NUM_PLAYERS = 4
_MIN_SEAT = 0
_MAX_SEAT = NUM_PLAYERS - 1

_EXPOSURE_SIZES: dict[MeldType, int] = {
    MeldType.PUNG: 3,
    MeldType.KONG: 4,
}


def _check_seat(v: int, name: str) -> int:
    if not (_MIN_SEAT <= v <= _MAX_SEAT):
        raise ValueError(f"{name} must be in [{_MIN_SEAT}, {_MAX_SEAT}], got {v}")
    return v


class Meld(BaseModel):
    """
    Publicly exposed meld claimed from a discard.

    Only pungs and kongs are ever exposed; pairs exist only inside hand matching.
    """

    model_config = ConfigDict(frozen=True)

    meld_type: MeldType
    tiles: tuple[Tile, ...]
    from_seat: int  # seat whose discard completed the meld

    @field_validator("meld_type")
    @classmethod
    def _validate_meld_type(cls, v: MeldType) -> MeldType:
        if v not in _EXPOSURE_SIZES:
            raise ValueError(f"only pung and kong can be exposed, got {v}")
        return v

    @field_validator("tiles")
    @classmethod
    def _validate_tiles(cls, v: tuple[Tile, ...], info: ValidationInfo) -> tuple[Tile, ...]:
        meld_type = info.data.get("meld_type")
        expected = _EXPOSURE_SIZES.get(meld_type) if meld_type is not None else None
        if expected is not None and len(v) != expected:
            raise ValueError(f"{meld_type} must have {expected} tiles, got {len(v)}")
        return v

    @field_validator("from_seat")
    @classmethod
    def _validate_from_seat(cls, v: int) -> int:
        return _check_seat(v, "from_seat")


class PendingClaim(BaseModel):
    """Unresolved offer of the most recent discard to one seat."""

    model_config = ConfigDict(frozen=True)

    seat: int  # seat that may act on the claim now
    from_seat: int  # discarder
    claim_type: ClaimType
    tile: Tile

    @field_validator("seat", "from_seat")
    @classmethod
    def _validate_seats(cls, v: int) -> int:
        return _check_seat(v, "seat")


class Player(BaseModel):
    """One seat at the table."""

    model_config = ConfigDict(frozen=True)

    seat: int
    hand: tuple[Tile, ...] = ()  # concealed tiles, order chosen by the player
    discards: tuple[Tile, ...] = ()
    exposures: tuple[Meld, ...] = ()

    @field_validator("seat")
    @classmethod
    def _validate_seat(cls, v: int) -> int:
        return _check_seat(v, "seat")

    def tile_ids(self) -> list[int]:
        """Ids of every tile this seat accounts for (hand, discards, exposures)."""
        ids = [t.id for t in self.hand]
        ids.extend(t.id for t in self.discards)
        for meld in self.exposures:
            ids.extend(t.id for t in meld.tiles)
        return ids


class GameState(BaseModel):
    """
    Aggregate root for one game.

    Exactly one instance is live at a time; transitions replace it wholesale.
    """

    model_config = ConfigDict(frozen=True)

    phase: GamePhase = GamePhase.CHARLESTON
    wall: tuple[Tile, ...] = ()
    players: tuple[Player, ...] = Field(default_factory=lambda: tuple(Player(seat=i) for i in range(NUM_PLAYERS)))

    # turn tracking
    current_player: int = 0
    awaiting_discard: bool = False  # turn holder drew or claimed and owes a discard

    # charleston progress
    charleston_pass_index: int = 0
    charleston_player: int = 0
    charleston_selected_ids: tuple[int, ...] = ()  # human selection scratch space

    pending_claim: PendingClaim | None = None
    last_drawn_tile: Tile | None = None  # advisory only

    winner: int | None = None
    winning_hand: str | None = None

    seed: str = ""
    settings: GameSettings = Field(default_factory=GameSettings)

    @field_validator("players")
    @classmethod
    def _validate_players(cls, v: tuple[Player, ...]) -> tuple[Player, ...]:
        if len(v) != NUM_PLAYERS:
            raise ValueError(f"game needs {NUM_PLAYERS} players, got {len(v)}")
        for i, player in enumerate(v):
            if player.seat != i:
                raise ValueError(f"player at index {i} has seat {player.seat}")
        return v

    @field_validator("current_player", "charleston_player")
    @classmethod
    def _validate_seat_pointers(cls, v: int) -> int:
        return _check_seat(v, "seat pointer")

    @property
    def hands(self) -> tuple[tuple[Tile, ...], ...]:
        return tuple(p.hand for p in self.players)

    @property
    def human_seat(self) -> int:
        return self.settings.human_seat


def get_player_view(game_state: GameState, seat: int, ai_seats: set[int] | None = None) -> GameView:
    """
    Return the visible game state for a specific seat.

    Each seat can see:
    - Its own hand
    - All discard piles and exposures
    - The wall size and the pending claim

    It cannot see other seats' concealed tiles or the wall order.
    """
    players_view = tuple(
        PlayerView(
            seat=p.seat,
            is_ai_player=p.seat in (ai_seats or set()),
            tile_count=len(p.hand),
            hand=p.hand if p.seat == seat else None,
            discards=p.discards,
            exposures=tuple(MeldView(meld_type=m.meld_type, tiles=m.tiles, from_seat=m.from_seat) for m in p.exposures),
        )
        for p in game_state.players
    )

    claim = game_state.pending_claim
    claimable = (
        ClaimableDiscard(
            claimant_seat=claim.seat,
            discarder_seat=claim.from_seat,
            claim_type=claim.claim_type,
            tile=claim.tile,
        )
        if claim is not None
        else None
    )

    return GameView(
        seat=seat,
        phase=game_state.phase,
        current_player=game_state.current_player,
        wall_count=len(game_state.wall),
        players=players_view,
        charleston_pass_index=game_state.charleston_pass_index,
        charleston_player=game_state.charleston_player,
        charleston_selected_ids=game_state.charleston_selected_ids if seat == game_state.human_seat else (),
        claimable_discard=claimable,
        last_drawn_tile=game_state.last_drawn_tile if seat == game_state.current_player else None,
        winner=game_state.winner,
        winning_hand=game_state.winning_hand,
    )
