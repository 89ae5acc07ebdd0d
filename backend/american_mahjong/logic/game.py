"""
Game initialization for American Mah Jong.
"""

from __future__ import annotations

import structlog

from american_mahjong.logic.enums import GamePhase
from american_mahjong.logic.rng import derive_wall_pcg, generate_seed
from american_mahjong.logic.settings import GameSettings, validate_settings
from american_mahjong.logic.state import NUM_PLAYERS, GameState, Player
from american_mahjong.logic.tiles import build_deck, shuffle_tiles

logger = structlog.get_logger()


def init_game(settings: GameSettings | None = None, seed: str | None = None) -> GameState:
    """
    Build, shuffle and deal a fresh game.

    Deals `hand_size` tiles to each seat in seat order from the front of the
    wall and opens the first Charleston pass (left, seat 0 passing).
    When seed is None, a random seed is generated; the seed is stored on the
    state so the deal can be reproduced.
    """
    settings = settings or GameSettings()
    validate_settings(settings)
    seed = seed if seed is not None else generate_seed()

    tiles = build_deck()
    shuffle_tiles(tiles, derive_wall_pcg(seed))

    players: list[Player] = []
    position = 0
    for seat in range(NUM_PLAYERS):
        hand = tuple(tiles[position : position + settings.hand_size])
        position += settings.hand_size
        players.append(Player(seat=seat, hand=hand))

    logger.info("game dealt", seed_prefix=seed[:16], wall_count=len(tiles) - position)

    return GameState(
        phase=GamePhase.CHARLESTON,
        wall=tuple(tiles[position:]),
        players=tuple(players),
        current_player=0,
        charleston_pass_index=0,
        charleston_player=0,
        seed=seed,
        settings=settings,
    )

