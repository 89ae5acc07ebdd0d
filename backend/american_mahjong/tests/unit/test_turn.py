"""
Unit tests for drawing, discarding, and opening claims on a discard.
"""

import logging

import pytest

from american_mahjong.logic.enums import ClaimType, Dragon, GamePhase
from american_mahjong.logic.exceptions import InvalidActionError, InvalidTileError
from american_mahjong.logic.state import PendingClaim
from american_mahjong.logic.turn import (
    can_claim_meld,
    discard_tile,
    draw_tile,
    find_claim_for_discard,
)
from american_mahjong.tests.conftest import (
    cracks,
    create_game_state,
    dots,
    dragon_tile,
    filler_hand,
    flower_tile,
    four_pungs_and_a_pair,
    joker,
)


def _play_state(*, hands=None, wall=None, current_player=0, awaiting_discard=False):
    hands = hands if hands is not None else [filler_hand() for _ in range(4)]
    wall = wall if wall is not None else [dots(9), dots(8), dots(7)]
    return create_game_state(
        hands=hands,
        wall=wall,
        current_player=current_player,
        awaiting_discard=awaiting_discard,
    )


class TestDrawTile:
    def test_takes_front_of_wall(self):
        state = _play_state()
        front = state.wall[0]

        new_state = draw_tile(state, 0)

        assert new_state.players[0].hand[-1] == front
        assert len(new_state.players[0].hand) == 14
        assert new_state.wall == state.wall[1:]
        assert new_state.last_drawn_tile == front
        assert new_state.awaiting_discard

    def test_logs_tile_label(self, caplog):
        with caplog.at_level(logging.DEBUG):
            draw_tile(_play_state(), 0)
        assert "tile drawn" in caplog.text
        assert "9D" in caplog.text

    def test_only_turn_holder(self):
        with pytest.raises(InvalidActionError, match="not the turn of seat 1"):
            draw_tile(_play_state(), 1)

    def test_not_twice_in_a_row(self):
        state = draw_tile(_play_state(), 0)
        with pytest.raises(InvalidActionError, match="must discard"):
            draw_tile(state, 0)

    def test_empty_wall(self):
        with pytest.raises(InvalidActionError, match="wall is empty"):
            draw_tile(_play_state(wall=[]), 0)

    def test_blocked_by_pending_claim(self):
        claim = PendingClaim(seat=1, from_seat=0, claim_type=ClaimType.PUNG, tile=dots(1))
        state = _play_state().model_copy(update={"pending_claim": claim})
        with pytest.raises(InvalidActionError, match="claim is pending"):
            draw_tile(state, 0)

    def test_not_during_charleston(self):
        state = _play_state().model_copy(update={"phase": GamePhase.CHARLESTON})
        with pytest.raises(InvalidActionError, match="turn action"):
            draw_tile(state, 0)


class TestDiscardTile:
    def test_without_claim_turn_passes_left(self):
        state = draw_tile(_play_state(), 0)
        tile = state.players[0].hand[0]

        new_state = discard_tile(state, 0, tile.id)

        assert tile not in new_state.players[0].hand
        assert new_state.players[0].discards == (tile,)
        assert new_state.current_player == 1
        assert new_state.pending_claim is None
        assert new_state.last_drawn_tile is None
        assert not new_state.awaiting_discard

    def test_turn_wraps_after_seat_3(self):
        state = draw_tile(_play_state(current_player=3), 3)
        new_state = discard_tile(state, 3, state.players[3].hand[0].id)
        assert new_state.current_player == 0

    def test_must_draw_first(self):
        state = _play_state()
        with pytest.raises(InvalidActionError, match="must draw"):
            discard_tile(state, 0, state.players[0].hand[0].id)

    def test_tile_must_be_held(self):
        state = draw_tile(_play_state(), 0)
        with pytest.raises(InvalidTileError):
            discard_tile(state, 0, state.players[1].hand[0].id)

    def test_only_turn_holder(self):
        state = draw_tile(_play_state(), 0)
        with pytest.raises(InvalidActionError):
            discard_tile(state, 1, state.players[1].hand[0].id)

    def test_claim_keeps_turn_with_discarder(self):
        discard = dots(5)
        hands = [[*filler_hand(12), discard], filler_hand(), [*filler_hand(11), dots(5), dots(5)], filler_hand()]
        state = _play_state(hands=hands, awaiting_discard=True)

        new_state = discard_tile(state, 0, discard.id)

        assert new_state.current_player == 0
        assert new_state.pending_claim == PendingClaim(
            seat=2, from_seat=0, claim_type=ClaimType.PUNG, tile=discard
        )
        assert new_state.players[0].discards == (discard,)


class TestFindClaimForDiscard:
    def test_no_eligible_seat(self):
        state = _play_state()
        assert find_claim_for_discard(state, 0, dragon_tile(Dragon.GREEN)) is None

    def test_mahjong_beats_earlier_pung(self):
        """Seat 1 could pung, but seat 2 completes a hand and takes priority."""
        winning = four_pungs_and_a_pair()
        discard = winning.pop(0)  # seat 2 waits on dots 1
        hands = [filler_hand(), [*filler_hand(11), dots(1), dots(1)], winning, filler_hand()]
        state = _play_state(hands=hands)

        claim = find_claim_for_discard(state, 0, discard)

        assert claim is not None
        assert claim.seat == 2
        assert claim.claim_type == ClaimType.MAHJONG

    def test_first_seat_in_order_wins_among_pungs(self):
        discard = cracks(9)
        hands = [
            [*filler_hand(11), cracks(9), cracks(9)],
            filler_hand(),
            [*filler_hand(11), cracks(9), cracks(9)],
            filler_hand(),
        ]
        state = _play_state(hands=hands)

        claim = find_claim_for_discard(state, 1, discard)

        # order from seat 1 is 2, 3, 0
        assert claim is not None
        assert claim.seat == 2
        assert claim.from_seat == 1

    def test_kong_offered_when_three_match(self):
        discard = dragon_tile(Dragon.RED)
        triple = [dragon_tile(Dragon.RED) for _ in range(3)]
        hands = [filler_hand(), filler_hand(), filler_hand(), [*filler_hand(10), *triple]]
        state = _play_state(hands=hands)

        claim = find_claim_for_discard(state, 0, discard)

        assert claim is not None
        assert claim.seat == 3
        assert claim.claim_type == ClaimType.KONG

    def test_jokers_count_toward_pung(self):
        discard = dragon_tile(Dragon.WHITE)
        hands = [filler_hand(), [*filler_hand(11), joker(), dragon_tile(Dragon.WHITE)], filler_hand(), filler_hand()]
        state = _play_state(hands=hands)

        claim = find_claim_for_discard(state, 0, discard)

        assert claim is not None
        assert claim.claim_type == ClaimType.PUNG

    def test_flower_never_opens_a_meld_claim(self):
        hands = [filler_hand(), [*filler_hand(11), flower_tile(1), flower_tile(1)], filler_hand(), filler_hand()]
        state = _play_state(hands=hands)
        assert find_claim_for_discard(state, 0, flower_tile(1)) is None

    def test_can_claim_meld_rejects_mahjong_type(self):
        assert not can_claim_meld([joker(), joker(), joker()], dots(1), ClaimType.MAHJONG)
