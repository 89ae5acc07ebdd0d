"""
AI player controller as a pure decision-maker.

Turns AI player decisions into actions for the seat that must act next.
Orchestration (applying actions, pacing) is handled by GameService.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from american_mahjong.logic.actions import Claim, Discard, Draw, PassCharleston, SkipClaim
from american_mahjong.logic.enums import GamePhase
from american_mahjong.logic.queries import current_actor, is_wall_exhausted, must_decide_claim, must_draw

if TYPE_CHECKING:
    from american_mahjong.logic.actions import GameAction
    from american_mahjong.logic.ai_player import AIPlayer
    from american_mahjong.logic.state import GameState


class AIPlayerController:
    """
    Decision-maker for AI players.

    Knows which seats are AI-controlled and asks the right AI player for a
    decision. Does not apply actions.
    """

    def __init__(self, ai_players: dict[int, AIPlayer]) -> None:
        self._ai_players = ai_players

    def is_ai_player(self, seat: int) -> bool:
        """Check if a seat is occupied by an AI player."""
        return seat in self._ai_players

    @property
    def ai_player_seats(self) -> set[int]:
        """Return the set of seats occupied by AI players."""
        return set(self._ai_players.keys())

    def get_action(self, game_state: GameState) -> GameAction | None:
        """
        Get the next action for the seat that must act, if it is an AI seat.

        Returns None when the actor is human, the game is over, or the wall is
        exhausted.
        """
        seat = current_actor(game_state)
        if seat is None or is_wall_exhausted(game_state):
            return None
        ai_player = self._ai_players.get(seat)
        if ai_player is None:
            return None

        if game_state.phase == GamePhase.CHARLESTON:
            tile_ids = ai_player.select_charleston_pass(game_state, seat)
            return PassCharleston(seat=seat, tile_ids=tile_ids) if tile_ids is not None else None

        if must_decide_claim(game_state, seat):
            claim_type = ai_player.decide_claim(game_state, seat)
            if claim_type is None:
                return SkipClaim(seat=seat)
            return Claim(seat=seat, claim_type=claim_type)

        if must_draw(game_state, seat):
            return Draw(seat=seat)

        tile_id = ai_player.select_discard(game_state, seat)
        return Discard(seat=seat, tile_id=tile_id) if tile_id is not None else None
