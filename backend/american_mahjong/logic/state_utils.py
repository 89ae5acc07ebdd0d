"""
Immutable state update utilities using Pydantic model_copy.

These helpers never mutate the input state; they always return new state
objects with the requested changes applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from american_mahjong.logic.exceptions import InvalidTileError
from american_mahjong.logic.state import NUM_PLAYERS, GameState, Player

if TYPE_CHECKING:
    from collections.abc import Iterable

    from american_mahjong.logic.state import Meld
    from american_mahjong.logic.tiles import Tile

_PLAYER_FIELDS = set(Player.model_fields)


def next_seat(seat: int, offset: int = 1) -> int:
    """Seat `offset` places after `seat` in turn order."""
    return (seat + offset) % NUM_PLAYERS


def claim_order(discarder_seat: int) -> tuple[int, ...]:
    """Seats eligible to claim a discard, in priority order starting left of the discarder."""
    return tuple(next_seat(discarder_seat, offset) for offset in range(1, NUM_PLAYERS))


def update_player(
    game_state: GameState,
    seat: int,
    **updates: object,
) -> GameState:
    """
    Return new game state with updated player at seat.

    Raises:
        ValueError: If seat is out of bounds or update fields are invalid

    """
    if not (0 <= seat < len(game_state.players)):
        raise ValueError(f"Invalid seat {seat}, expected 0-{len(game_state.players) - 1}")
    invalid_fields = set(updates) - _PLAYER_FIELDS
    if invalid_fields:
        raise ValueError(f"Invalid player fields: {invalid_fields}")
    players = list(game_state.players)
    players[seat] = game_state.players[seat].model_copy(update=updates)
    return game_state.model_copy(update={"players": tuple(players)})


def add_tiles_to_player(game_state: GameState, seat: int, tiles: Iterable[Tile]) -> GameState:
    """Return new state with tiles appended to the end of the player's hand."""
    player = game_state.players[seat]
    return update_player(game_state, seat, hand=(*player.hand, *tiles))


def remove_tiles_from_player(game_state: GameState, seat: int, tile_ids: Iterable[int]) -> GameState:
    """
    Return new state with the given tiles removed from the player's hand.

    Raises:
        InvalidTileError: If any tile is not in the player's hand

    """
    player = game_state.players[seat]
    to_remove = set(tile_ids)
    held = {t.id for t in player.hand}
    missing = to_remove - held
    if missing:
        raise InvalidTileError(f"tiles {sorted(missing)} not in hand of player at seat {seat}")
    return update_player(game_state, seat, hand=tuple(t for t in player.hand if t.id not in to_remove))


def add_discard_to_player(game_state: GameState, seat: int, tile: Tile) -> GameState:
    player = game_state.players[seat]
    return update_player(game_state, seat, discards=(*player.discards, tile))


def remove_last_discard(game_state: GameState, seat: int, tile_id: int) -> GameState:
    """
    Return new state with the most recent discard of `seat` removed.

    Raises:
        InvalidTileError: If the most recent discard is not the given tile

    """
    player = game_state.players[seat]
    if not player.discards or player.discards[-1].id != tile_id:
        raise InvalidTileError(f"tile {tile_id} is not the latest discard of seat {seat}")
    return update_player(game_state, seat, discards=player.discards[:-1])


def add_exposure_to_player(game_state: GameState, seat: int, meld: Meld) -> GameState:
    player = game_state.players[seat]
    return update_player(game_state, seat, exposures=(*player.exposures, meld))


def clear_pending_claim(game_state: GameState) -> GameState:
    return game_state.model_copy(update={"pending_claim": None})


def move_tile_in_hand(game_state: GameState, seat: int, tile_id: int, before_tile_id: int | None) -> GameState:
    """
    Return new state with one tile moved within a hand.

    The tile lands immediately before `before_tile_id`, or at the end when no
    target is given or the target is not in the hand. A tile targeting itself
    is out of the hand once lifted, so it goes to the end.

    Raises:
        InvalidTileError: If the tile is not in the hand

    """
    hand = list(game_state.players[seat].hand)
    source = next((i for i, t in enumerate(hand) if t.id == tile_id), None)
    if source is None:
        raise InvalidTileError(f"tile {tile_id} not in hand of player at seat {seat}")

    tile = hand.pop(source)
    target = len(hand)
    if before_tile_id is not None:
        target = next((i for i, t in enumerate(hand) if t.id == before_tile_id), len(hand))
    hand.insert(target, tile)
    return update_player(game_state, seat, hand=tuple(hand))
