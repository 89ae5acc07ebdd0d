"""
Charleston: the pre-play phase where each seat passes tiles left, across, then right.

Seats pass one at a time in seat order. After all four seats have passed in
the current direction the pass index advances; after the last direction the
game moves to play with seat 0 to draw first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from american_mahjong.logic.enums import (
    CHARLESTON_DIRECTIONS,
    CHARLESTON_SEAT_OFFSET,
    CharlestonDirection,
    GamePhase,
)
from american_mahjong.logic.exceptions import InvalidActionError, InvalidCharlestonPassError, InvalidTileError
from american_mahjong.logic.state import NUM_PLAYERS
from american_mahjong.logic.state_utils import add_tiles_to_player, next_seat, remove_tiles_from_player
from american_mahjong.logic.tiles import find_tile

if TYPE_CHECKING:
    from american_mahjong.logic.state import GameState

logger = structlog.get_logger()


def charleston_direction(pass_index: int) -> CharlestonDirection:
    """Direction of the given pass: 0 left, 1 across, 2 right."""
    if not (0 <= pass_index < len(CHARLESTON_DIRECTIONS)):
        raise ValueError(f"pass_index must be in [0, {len(CHARLESTON_DIRECTIONS) - 1}], got {pass_index}")
    return CHARLESTON_DIRECTIONS[pass_index]


def charleston_recipient(seat: int, direction: CharlestonDirection) -> int:
    """
    Seat that receives a pass.

    Left is seat+1, across seat+2, right seat+3 (mod 4), following the
    physical rotation of the table.
    """
    return next_seat(seat, CHARLESTON_SEAT_OFFSET[direction])


def _require_charleston(game_state: GameState) -> None:
    if game_state.phase != GamePhase.CHARLESTON:
        raise InvalidActionError(f"charleston action in phase {game_state.phase}")


def toggle_charleston_selection(game_state: GameState, tile_id: int) -> GameState:
    """
    Toggle a tile in the human seat's Charleston selection.

    Re-selecting a tile removes it. The selection holds at most the pass size;
    adding beyond it evicts the oldest selection.
    """
    _require_charleston(game_state)
    human_seat = game_state.human_seat
    if game_state.charleston_player != human_seat:
        raise InvalidActionError("human seat is not passing")
    if find_tile(game_state.players[human_seat].hand, tile_id) is None:
        raise InvalidTileError(f"tile {tile_id} not in hand of seat {human_seat}")

    selected = game_state.charleston_selected_ids
    if tile_id in selected:
        new_selected = tuple(t for t in selected if t != tile_id)
    else:
        limit = game_state.settings.charleston_pass_size
        new_selected = (*selected, tile_id)[-limit:]
    return game_state.model_copy(update={"charleston_selected_ids": new_selected})


def pass_charleston_tiles(game_state: GameState, seat: int, tile_ids: tuple[int, ...]) -> GameState:
    """
    Pass tiles from the seat whose turn it is to pass.

    Moves exactly `charleston_pass_size` distinct held tiles to the recipient for
    the current direction, clears the selection and advances the passer.
    """
    _require_charleston(game_state)
    passer = game_state.charleston_player
    if seat != passer:
        raise InvalidActionError(f"seat {seat} cannot pass, seat {passer} is passing")

    pass_size = game_state.settings.charleston_pass_size
    if len(tile_ids) != pass_size or len(set(tile_ids)) != pass_size:
        raise InvalidCharlestonPassError(f"pass needs {pass_size} distinct tiles, got {list(tile_ids)}")

    hand = game_state.players[passer].hand
    to_pass = [find_tile(hand, tile_id) for tile_id in tile_ids]
    if any(tile is None for tile in to_pass):
        raise InvalidCharlestonPassError(f"tiles {list(tile_ids)} are not all in hand of seat {passer}")

    direction = charleston_direction(game_state.charleston_pass_index)
    recipient = charleston_recipient(passer, direction)

    new_state = remove_tiles_from_player(game_state, passer, tile_ids)
    new_state = add_tiles_to_player(new_state, recipient, (t for t in to_pass if t is not None))

    next_passer = passer + 1
    pass_index = game_state.charleston_pass_index
    if next_passer >= NUM_PLAYERS:
        next_passer = 0
        pass_index += 1

    logger.debug(
        "charleston pass",
        seat=passer,
        recipient=recipient,
        direction=direction,
        pass_index=game_state.charleston_pass_index,
    )

    updates: dict[str, object] = {
        "charleston_player": next_passer,
        "charleston_pass_index": pass_index,
        "charleston_selected_ids": (),
    }
    if pass_index >= game_state.settings.charleston_rounds:
        # seat 0 enters play with 13 tiles and must draw first
        updates.update(
            {
                "phase": GamePhase.PLAY,
                "current_player": 0,
                "awaiting_discard": False,
                "last_drawn_tile": None,
            },
        )
        logger.info("charleston complete")
    return new_state.model_copy(update=updates)
