"""
AI player decision making for American Mah Jong.

Least-duplicated AI player: keeps tiles it holds several copies of and gives
away (or discards) the ones it holds fewest of. It accepts every claim its
hand supports.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from american_mahjong.logic.enums import ClaimType
from american_mahjong.logic.tiles import tile_key
from american_mahjong.logic.turn import can_claim_mahjong, can_claim_meld

if TYPE_CHECKING:
    from american_mahjong.logic.state import GameState


class AIPlayer:
    """
    Least-duplicated AI player.

    Decision methods read a state snapshot and a seat and return a choice;
    they never build or apply actions themselves.
    """

    def select_charleston_pass(self, game_state: GameState, seat: int) -> tuple[int, ...] | None:
        """
        Choose the tiles to pass.

        Groups the hand by tile key, orders the groups from smallest to largest
        (keeping first-seen order among equal sizes), and takes the first tiles
        of the flattened result. Returns None when the hand is too small.
        """
        pass_size = game_state.settings.charleston_pass_size
        hand = game_state.players[seat].hand
        if len(hand) < pass_size:
            return None

        groups: dict[str, list[int]] = {}
        for tile in hand:
            groups.setdefault(tile_key(tile), []).append(tile.id)
        ordered = sorted(groups.values(), key=len)
        return tuple(tile_id for group in ordered for tile_id in group)[:pass_size]

    def decide_claim(self, game_state: GameState, seat: int) -> ClaimType | None:
        """Accept the offered claim when the hand supports it, else None to skip."""
        prompt = game_state.pending_claim
        if prompt is None or prompt.seat != seat:
            return None

        hand = game_state.players[seat].hand
        if prompt.claim_type == ClaimType.MAHJONG:
            return ClaimType.MAHJONG if can_claim_mahjong(hand, prompt.tile) else None
        if can_claim_meld(hand, prompt.tile, prompt.claim_type):
            return prompt.claim_type
        return None

    def select_discard(self, game_state: GameState, seat: int) -> int | None:
        """Discard the tile whose key is least duplicated; ties go to the earliest in hand."""
        hand = game_state.players[seat].hand
        if not hand:
            return None
        counts = Counter(tile_key(t) for t in hand)
        return min(hand, key=lambda t: counts[tile_key(t)]).id
