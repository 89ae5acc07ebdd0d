"""
Hand validation against the hand card.

Jokers are budgeted per meld slot: a slot is filled by real tiles of one key
plus as many jokers as needed to cover the shortfall, or by jokers alone.
The search backtracks over slots and restores the tile counts after every
branch.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from american_mahjong.logic.hand_card import HAND_CARD, WINNING_HAND_SIZE
from american_mahjong.logic.tiles import JOKER_KEY, tile_key

if TYPE_CHECKING:
    from collections.abc import Sequence

    from american_mahjong.logic.hand_card import HandDefinition, MeldSpec
    from american_mahjong.logic.tiles import Tile


def validate_hand(tiles: Sequence[Tile], hand_card: Sequence[HandDefinition] = HAND_CARD) -> bool:
    """Return True iff the 14 tiles satisfy at least one hand definition."""
    return match_hand(tiles, hand_card) is not None


def match_hand(tiles: Sequence[Tile], hand_card: Sequence[HandDefinition] = HAND_CARD) -> HandDefinition | None:
    """
    Return the first hand definition the tiles satisfy, or None.

    Any input that is not exactly 14 tiles never matches. Definitions whose
    meld counts do not sum to 14 are skipped.
    """
    if len(tiles) != WINNING_HAND_SIZE:
        return None
    counts = Counter(tile_key(t) for t in tiles)
    jokers = counts.pop(JOKER_KEY, 0)
    keys = list(counts)
    for hand in hand_card:
        if hand.total_tiles != WINNING_HAND_SIZE:
            continue
        if _match_melds(counts, keys, jokers, hand.melds, 0):
            return hand
    return None


def _match_melds(
    counts: Counter[str],
    keys: list[str],
    jokers: int,
    specs: Sequence[MeldSpec],
    spec_index: int,
) -> bool:
    if spec_index >= len(specs):
        return jokers == 0 and not any(counts.values())

    need = specs[spec_index].count
    for key in keys:
        available = counts[key]
        if available == 0:
            continue
        use = min(available, need)
        joker_use = need - use
        if joker_use > jokers:
            continue
        counts[key] = available - use
        matched = _match_melds(counts, keys, jokers - joker_use, specs, spec_index + 1)
        counts[key] = available
        if matched:
            return True

    # slot filled by jokers alone
    if need <= jokers:
        return _match_melds(counts, keys, jokers - need, specs, spec_index + 1)
    return False
