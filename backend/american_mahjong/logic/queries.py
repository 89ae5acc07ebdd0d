"""
Read-only queries over a GameState.

Used by the UI collaborator and the opponent controller to decide who acts
next and what they may do. Nothing here returns a new state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from american_mahjong.logic.enums import ActionType, GamePhase
from american_mahjong.logic.types import ClaimableDiscard

if TYPE_CHECKING:
    from american_mahjong.logic.state import GameState


def current_actor(game_state: GameState) -> int | None:
    """
    Seat expected to act next.

    The passer during the Charleston, the claimant while a claim is pending,
    otherwise the turn holder. None once the game is over.
    """
    if game_state.phase == GamePhase.GAME_OVER:
        return None
    if game_state.phase == GamePhase.CHARLESTON:
        return game_state.charleston_player
    if game_state.pending_claim is not None:
        return game_state.pending_claim.seat
    return game_state.current_player


def _is_turn_holder(game_state: GameState, seat: int) -> bool:
    return (
        game_state.phase == GamePhase.PLAY
        and game_state.pending_claim is None
        and game_state.current_player == seat
    )


def must_draw(game_state: GameState, seat: int) -> bool:
    return _is_turn_holder(game_state, seat) and not game_state.awaiting_discard


def must_discard(game_state: GameState, seat: int) -> bool:
    return _is_turn_holder(game_state, seat) and game_state.awaiting_discard


def must_decide_claim(game_state: GameState, seat: int) -> bool:
    prompt = game_state.pending_claim
    return game_state.phase == GamePhase.PLAY and prompt is not None and prompt.seat == seat


def claimable_discard(game_state: GameState) -> ClaimableDiscard | None:
    """Describe the discard on offer, or None when no claim is pending."""
    prompt = game_state.pending_claim
    if prompt is None:
        return None
    return ClaimableDiscard(
        claimant_seat=prompt.seat,
        discarder_seat=prompt.from_seat,
        claim_type=prompt.claim_type,
        tile=prompt.tile,
    )


def is_wall_exhausted(game_state: GameState) -> bool:
    """True when the turn holder must draw but the wall is empty; play cannot continue."""
    return not game_state.wall and must_draw(game_state, game_state.current_player)


def get_available_actions(game_state: GameState, seat: int) -> list[ActionType]:
    """
    Return the actions `seat` may submit right now.

    StartNewGame is always available. ReorderHand is available to the human
    seat whenever it holds tiles.
    """
    result = [ActionType.START_NEW_GAME]

    if seat == game_state.human_seat and game_state.players[seat].hand:
        result.append(ActionType.REORDER_HAND)

    if game_state.phase == GamePhase.CHARLESTON and game_state.charleston_player == seat:
        if seat == game_state.human_seat:
            result.append(ActionType.SELECT_CHARLESTON_TILE)
        result.append(ActionType.PASS_CHARLESTON)
    elif must_decide_claim(game_state, seat):
        result.extend((ActionType.CLAIM, ActionType.SKIP_CLAIM))
    elif must_draw(game_state, seat) and game_state.wall:
        result.append(ActionType.DRAW)
    elif must_discard(game_state, seat):
        result.append(ActionType.DISCARD)

    return result


def all_tile_ids(game_state: GameState) -> list[int]:
    """Ids of every tile in the wall, hands, discards and exposures."""
    ids = [t.id for t in game_state.wall]
    for player in game_state.players:
        ids.extend(player.tile_ids())
    return ids
