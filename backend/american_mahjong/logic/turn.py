"""
Turn flow for the play phase: drawing, discarding, and opening claims.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from american_mahjong.logic.enums import CLAIM_TILES_REQUIRED, ClaimType, GamePhase
from american_mahjong.logic.exceptions import InvalidActionError, InvalidTileError
from american_mahjong.logic.matcher import validate_hand
from american_mahjong.logic.state import PendingClaim
from american_mahjong.logic.state_utils import (
    add_discard_to_player,
    add_tiles_to_player,
    claim_order,
    next_seat,
    remove_tiles_from_player,
)
from american_mahjong.logic.tiles import count_matching, find_tile, tile_label

if TYPE_CHECKING:
    from american_mahjong.logic.state import GameState
    from american_mahjong.logic.tiles import Tile

logger = structlog.get_logger()


def _require_turn(game_state: GameState, seat: int) -> None:
    if game_state.phase != GamePhase.PLAY:
        raise InvalidActionError(f"turn action in phase {game_state.phase}")
    if game_state.pending_claim is not None:
        raise InvalidActionError("a claim is pending")
    if seat != game_state.current_player:
        raise InvalidActionError(f"not the turn of seat {seat}, seat {game_state.current_player} is to act")


def draw_tile(game_state: GameState, seat: int) -> GameState:
    """
    Draw the next wall tile into the turn holder's hand.

    Only valid for the turn holder when no claim is pending, no discard is
    owed, and the wall is not empty.
    """
    _require_turn(game_state, seat)
    if game_state.awaiting_discard:
        raise InvalidActionError(f"seat {seat} must discard before drawing again")
    if not game_state.wall:
        raise InvalidActionError("wall is empty")

    drawn = game_state.wall[0]
    new_state = add_tiles_to_player(game_state, seat, (drawn,))
    logger.debug("tile drawn", seat=seat, tile=tile_label(drawn), wall_count=len(game_state.wall) - 1)
    return new_state.model_copy(
        update={
            "wall": game_state.wall[1:],
            "last_drawn_tile": drawn,
            "awaiting_discard": True,
        },
    )


def can_claim_mahjong(hand: tuple[Tile, ...], tile: Tile) -> bool:
    """Check whether the hand plus the discard validates against the hand card."""
    return validate_hand((*hand, tile))


def can_claim_meld(hand: tuple[Tile, ...], tile: Tile, claim_type: ClaimType) -> bool:
    """Check whether the hand holds enough pairwise-matching tiles for a pung or kong."""
    required = CLAIM_TILES_REQUIRED.get(claim_type)
    if required is None:
        return False
    return count_matching(hand, tile) >= required


def find_claim_for_discard(game_state: GameState, discarder_seat: int, tile: Tile) -> PendingClaim | None:
    """
    Find the claim to offer on a fresh discard.

    Seats are scanned from the discarder's left. A mahjong for any seat beats
    every pung or kong; otherwise the first seat able to kong or pung gets the
    offer (kong when it holds enough for both).
    """
    order = claim_order(discarder_seat)

    for seat in order:
        if can_claim_mahjong(game_state.players[seat].hand, tile):
            return PendingClaim(seat=seat, from_seat=discarder_seat, claim_type=ClaimType.MAHJONG, tile=tile)

    for seat in order:
        hand = game_state.players[seat].hand
        for claim_type in (ClaimType.KONG, ClaimType.PUNG):
            if can_claim_meld(hand, tile, claim_type):
                return PendingClaim(seat=seat, from_seat=discarder_seat, claim_type=claim_type, tile=tile)

    return None


def discard_tile(game_state: GameState, seat: int, tile_id: int) -> GameState:
    """
    Discard a tile from the turn holder's hand and open a claim if any seat can take it.

    Without a claimant the turn passes to the next seat; with one, the turn
    holder stays put until the claim is taken or skipped by everyone.
    """
    _require_turn(game_state, seat)
    if not game_state.awaiting_discard:
        raise InvalidActionError(f"seat {seat} must draw before discarding")
    tile = find_tile(game_state.players[seat].hand, tile_id)
    if tile is None:
        raise InvalidTileError(f"tile {tile_id} not in hand of seat {seat}")

    new_state = remove_tiles_from_player(game_state, seat, (tile_id,))
    new_state = add_discard_to_player(new_state, seat, tile)

    pending_claim = find_claim_for_discard(new_state, seat, tile)
    logger.debug(
        "tile discarded",
        seat=seat,
        tile=tile_label(tile),
        claim_seat=pending_claim.seat if pending_claim else None,
        claim_type=pending_claim.claim_type if pending_claim else None,
    )

    return new_state.model_copy(
        update={
            "pending_claim": pending_claim,
            "current_player": seat if pending_claim is not None else next_seat(seat),
            "awaiting_discard": False,
            "last_drawn_tile": None,
        },
    )
