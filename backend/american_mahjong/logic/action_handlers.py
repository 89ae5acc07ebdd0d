"""
Transition function for American Mah Jong.

`apply_action` is the only way a GameState advances. Each handler raises a
GameRuleError subclass when an action does not apply; the error is logged and
the input state is returned unchanged, so callers never see rule violations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from american_mahjong.logic.actions import (
    Claim,
    Discard,
    Draw,
    PassCharleston,
    ReorderHand,
    SelectCharlestonTile,
    SkipClaim,
    StartNewGame,
)
from american_mahjong.logic.call_resolution import claim_discard, skip_claim
from american_mahjong.logic.charleston import pass_charleston_tiles, toggle_charleston_selection
from american_mahjong.logic.enums import GamePhase
from american_mahjong.logic.exceptions import GameRuleError, InvalidActionError
from american_mahjong.logic.game import init_game
from american_mahjong.logic.state_utils import move_tile_in_hand
from american_mahjong.logic.turn import discard_tile, draw_tile

if TYPE_CHECKING:
    from collections.abc import Iterable

    from american_mahjong.logic.actions import GameAction
    from american_mahjong.logic.settings import GameSettings
    from american_mahjong.logic.state import GameState

logger = structlog.get_logger()


def _dispatch(game_state: GameState, action: GameAction) -> GameState:
    match action:
        case StartNewGame(seed=seed):
            return init_game(game_state.settings, seed)
        case ReorderHand(tile_id=tile_id, before_tile_id=before_tile_id):
            return move_tile_in_hand(game_state, game_state.human_seat, tile_id, before_tile_id)

    if game_state.phase == GamePhase.GAME_OVER:
        raise InvalidActionError("game is over")

    match action:
        case SelectCharlestonTile(tile_id=tile_id):
            return toggle_charleston_selection(game_state, tile_id)
        case PassCharleston(seat=seat, tile_ids=tile_ids):
            return pass_charleston_tiles(game_state, seat, tile_ids)
        case Draw(seat=seat):
            return draw_tile(game_state, seat)
        case Discard(seat=seat, tile_id=tile_id):
            return discard_tile(game_state, seat, tile_id)
        case Claim(seat=seat, claim_type=claim_type):
            return claim_discard(game_state, seat, claim_type)
        case SkipClaim(seat=seat):
            return skip_claim(game_state, seat)
    raise InvalidActionError(f"unknown action: {action!r}")


def apply_action(game_state: GameState, action: GameAction) -> GameState:
    """
    Apply one action and return the next state.

    Inapplicable actions return `game_state` itself (the same object), which
    lets callers detect a no-op with an identity check.
    """
    try:
        new_state = _dispatch(game_state, action)
    except GameRuleError as e:
        logger.debug("action ignored", action=action.type, reason=str(e))
        return game_state

    if new_state.phase == GamePhase.GAME_OVER and game_state.phase != GamePhase.GAME_OVER:
        logger.info("game over", winner=new_state.winner, hand=new_state.winning_hand)
    return new_state


def replay_actions(
    seed: str,
    actions: Iterable[GameAction],
    settings: GameSettings | None = None,
) -> GameState:
    """
    Rebuild a game from its seed and the actions applied to it.

    The deal is derived from the seed alone, so replaying the same log always
    reaches the same state.
    """
    game_state = init_game(settings, seed)
    for action in actions:
        game_state = apply_action(game_state, action)
    return game_state
