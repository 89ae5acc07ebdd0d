from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from american_mahjong.logic.actions import PassCharleston
from american_mahjong.logic.enums import Dragon, GamePhase, Suit, TileKind, Wind
from american_mahjong.logic.rng import SEED_BYTES
from american_mahjong.logic.state import GameState, Player
from american_mahjong.logic.tiles import Tile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from american_mahjong.logic.state import Meld, PendingClaim


# A fixed seed for deterministic tests (192 hex chars = 96 bytes)
FIXED_SEED = "ab" * SEED_BYTES
OTHER_SEED = "cd" * SEED_BYTES

# ids far above the 152-tile deck so built tiles never collide with dealt ones
_tile_ids = itertools.count(10_000)


# ============================================================================
# Tile Builder Helpers
# ============================================================================


def suit_tile(suit: Suit, value: int) -> Tile:
    return Tile(id=next(_tile_ids), kind=TileKind.SUIT, suit=suit, value=value)


def dots(value: int) -> Tile:
    return suit_tile(Suit.DOTS, value)


def bams(value: int) -> Tile:
    return suit_tile(Suit.BAMS, value)


def cracks(value: int) -> Tile:
    return suit_tile(Suit.CRACKS, value)


def wind_tile(wind: Wind) -> Tile:
    return Tile(id=next(_tile_ids), kind=TileKind.WIND, wind=wind)


def dragon_tile(dragon: Dragon) -> Tile:
    return Tile(id=next(_tile_ids), kind=TileKind.DRAGON, dragon=dragon)


def flower_tile(number: int) -> Tile:
    return Tile(id=next(_tile_ids), kind=TileKind.FLOWER, flower=number)


def season_tile(number: int) -> Tile:
    return Tile(id=next(_tile_ids), kind=TileKind.SEASON, season=number)


def joker() -> Tile:
    return Tile(id=next(_tile_ids), kind=TileKind.JOKER)


def copies(factory, count: int) -> list[Tile]:
    """Build `count` distinct tiles from a zero-argument factory."""
    return [factory() for _ in range(count)]


def four_pungs_and_a_pair() -> list[Tile]:
    """14 tiles: pungs of dots 1-4 and a pair of east winds."""
    tiles: list[Tile] = []
    for value in range(1, 5):
        tiles.extend(copies(lambda v=value: dots(v), 3))
    tiles.extend(copies(lambda: wind_tile(Wind.EAST), 2))
    return tiles


def filler_hand(size: int = 13) -> list[Tile]:
    """Tiles with no pairs among them and nothing in common with dots 1-4 or east winds."""
    faces = [bams(v) for v in range(1, 10)] + [cracks(v) for v in range(1, 10)]
    return faces[:size]


# ============================================================================
# State Builder Helpers
# ============================================================================


def create_player(
    seat: int = 0,
    *,
    hand: Sequence[Tile] | None = None,
    discards: Sequence[Tile] | None = None,
    exposures: Sequence[Meld] | None = None,
) -> Player:
    """Create a Player with sensible defaults for testing."""
    return Player(
        seat=seat,
        hand=tuple(hand) if hand is not None else (),
        discards=tuple(discards) if discards is not None else (),
        exposures=tuple(exposures) if exposures is not None else (),
    )


def create_game_state(
    *,
    players: Sequence[Player] | None = None,
    hands: Sequence[Sequence[Tile]] | None = None,
    wall: Sequence[Tile] | None = None,
    phase: GamePhase = GamePhase.PLAY,
    current_player: int = 0,
    awaiting_discard: bool = False,
    pending_claim: PendingClaim | None = None,
    charleston_pass_index: int = 0,
    charleston_player: int = 0,
    charleston_selected_ids: Sequence[int] = (),
    seed: str = FIXED_SEED,
) -> GameState:
    """Create a GameState with sensible defaults for testing.

    `hands` is a shortcut for players that only hold concealed tiles; it is
    ignored when `players` is given.
    """
    if players is None:
        hands = hands if hands is not None else [[] for _ in range(4)]
        players = [create_player(seat, hand=hand) for seat, hand in enumerate(hands)]
    return GameState(
        phase=phase,
        wall=tuple(wall) if wall is not None else (),
        players=tuple(players),
        current_player=current_player,
        awaiting_discard=awaiting_discard,
        pending_claim=pending_claim,
        charleston_pass_index=charleston_pass_index,
        charleston_player=charleston_player,
        charleston_selected_ids=tuple(charleston_selected_ids),
        seed=seed,
    )


def first_tiles_pass(game_state: GameState) -> PassCharleston:
    """Pass action for the current passer giving away its first three tiles."""
    seat = game_state.charleston_player
    return PassCharleston(seat=seat, tile_ids=tuple(t.id for t in game_state.players[seat].hand[:3]))
