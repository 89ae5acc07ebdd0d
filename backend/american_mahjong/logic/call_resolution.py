"""Call resolution: accept or pass on the claim offered for the latest discard.

A claim is offered to one seat at a time. Accepting a mahjong ends the game;
accepting a pung or kong exposes the meld and hands the turn to the claimant.
Skipping moves the offer to the next seat in priority order, and abandons it
after the last seat.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from american_mahjong.logic.enums import CLAIM_TILES_REQUIRED, ClaimType, GamePhase, MeldType
from american_mahjong.logic.exceptions import InvalidActionError, InvalidClaimError
from american_mahjong.logic.matcher import match_hand
from american_mahjong.logic.state import Meld
from american_mahjong.logic.state_utils import (
    add_exposure_to_player,
    add_tiles_to_player,
    claim_order,
    clear_pending_claim,
    next_seat,
    remove_last_discard,
    remove_tiles_from_player,
)
from american_mahjong.logic.tiles import tiles_match
from american_mahjong.logic.turn import can_claim_meld

if TYPE_CHECKING:
    from american_mahjong.logic.state import GameState, PendingClaim

logger = structlog.get_logger()

_CLAIM_MELD_TYPES: dict[ClaimType, MeldType] = {
    ClaimType.PUNG: MeldType.PUNG,
    ClaimType.KONG: MeldType.KONG,
}


def _require_claimant(game_state: GameState, seat: int) -> PendingClaim:
    prompt = game_state.pending_claim
    if game_state.phase != GamePhase.PLAY or prompt is None:
        raise InvalidActionError("no claim is pending")
    if seat != prompt.seat:
        raise InvalidActionError(f"claim is offered to seat {prompt.seat}, not seat {seat}")
    return prompt


def _resolve_mahjong(game_state: GameState, prompt: PendingClaim) -> GameState:
    hand = game_state.players[prompt.seat].hand
    winning_hand = match_hand((*hand, prompt.tile))
    if winning_hand is None:
        raise InvalidClaimError(f"seat {prompt.seat} hand does not complete with tile {prompt.tile.id}")

    new_state = remove_last_discard(game_state, prompt.from_seat, prompt.tile.id)
    new_state = add_tiles_to_player(new_state, prompt.seat, (prompt.tile,))
    logger.info("mahjong", winner=prompt.seat, hand=winning_hand.name, from_seat=prompt.from_seat)
    return new_state.model_copy(
        update={
            "phase": GamePhase.GAME_OVER,
            "winner": prompt.seat,
            "winning_hand": winning_hand.name,
            "current_player": prompt.seat,
            "pending_claim": None,
            "awaiting_discard": False,
            "last_drawn_tile": None,
        },
    )


def _resolve_meld(game_state: GameState, prompt: PendingClaim) -> GameState:
    seat = prompt.seat
    hand = game_state.players[seat].hand
    if not can_claim_meld(hand, prompt.tile, prompt.claim_type):
        raise InvalidClaimError(f"seat {seat} cannot {prompt.claim_type} tile {prompt.tile.id}")

    # first matching tiles in hand order, jokers included
    needed = CLAIM_TILES_REQUIRED[prompt.claim_type]
    from_hand = [t for t in hand if tiles_match(t, prompt.tile)][:needed]
    meld = Meld(
        meld_type=_CLAIM_MELD_TYPES[prompt.claim_type],
        tiles=(*from_hand, prompt.tile),
        from_seat=prompt.from_seat,
    )

    new_state = remove_last_discard(game_state, prompt.from_seat, prompt.tile.id)
    new_state = remove_tiles_from_player(new_state, seat, (t.id for t in from_hand))
    new_state = add_exposure_to_player(new_state, seat, meld)
    logger.debug("meld claimed", seat=seat, meld_type=meld.meld_type, from_seat=prompt.from_seat)
    # claimant discards next without drawing
    return new_state.model_copy(
        update={
            "current_player": seat,
            "pending_claim": None,
            "awaiting_discard": True,
            "last_drawn_tile": None,
        },
    )


def claim_discard(game_state: GameState, seat: int, claim_type: ClaimType) -> GameState:
    """
    Accept the pending claim.

    The claim type must match the one on offer and the claimant's hand must
    still support it.
    """
    prompt = _require_claimant(game_state, seat)
    if claim_type != prompt.claim_type:
        raise InvalidClaimError(f"{claim_type} claimed but {prompt.claim_type} was offered")
    if claim_type == ClaimType.MAHJONG:
        return _resolve_mahjong(game_state, prompt)
    return _resolve_meld(game_state, prompt)


def skip_claim(game_state: GameState, seat: int) -> GameState:
    """
    Pass on the pending claim.

    The same offer moves to the next seat in priority order. When the last
    eligible seat passes, the claim is dropped and the turn goes to the seat
    after the discarder.
    """
    prompt = _require_claimant(game_state, seat)
    order = claim_order(prompt.from_seat)
    position = order.index(prompt.seat)

    if position == len(order) - 1:
        logger.debug("claim abandoned", from_seat=prompt.from_seat)
        return clear_pending_claim(game_state).model_copy(update={"current_player": next_seat(prompt.from_seat)})

    next_claimant = order[position + 1]
    logger.debug("claim passed on", seat=seat, next_seat=next_claimant)
    return game_state.model_copy(update={"pending_claim": prompt.model_copy(update={"seat": next_claimant})})

