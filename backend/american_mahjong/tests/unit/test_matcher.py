"""
Unit tests for the hand card and the joker-aware hand matcher.
"""

import pytest
from pydantic import ValidationError

from american_mahjong.logic.enums import ClaimType, Dragon, MeldType, Wind
from american_mahjong.logic.hand_card import HAND_CARD, WINNING_HAND_SIZE, HandDefinition, MeldSpec
from american_mahjong.logic.matcher import match_hand, validate_hand
from american_mahjong.logic.tiles import tiles_match
from american_mahjong.logic.turn import can_claim_meld
from american_mahjong.tests.conftest import (
    bams,
    copies,
    cracks,
    dots,
    dragon_tile,
    flower_tile,
    four_pungs_and_a_pair,
    joker,
    season_tile,
    wind_tile,
)


def _kongs_hand() -> list:
    """15 tiles shaped as three pungs, a kong and a pair."""
    tiles = []
    for value in (1, 2, 3):
        tiles.extend(copies(lambda v=value: bams(v), 3))
    tiles.extend(copies(lambda: cracks(9), 4))
    tiles.extend(copies(lambda: dragon_tile(Dragon.RED), 2))
    return tiles


class TestHandCard:
    def test_four_definitions_in_order(self):
        assert [h.name for h in HAND_CARD] == [
            "Four Pungs and a Pair",
            "Three Pungs, One Kong, and a Pair",
            "Two Kongs, One Pung, and a Pair",
            "One Kong, Three Pungs, and a Pair",
        ]

    def test_only_four_pungs_and_a_pair_totals_14(self):
        """The shipped card lists totals of 14, 15, 13 and 15 tiles."""
        assert [h.total_tiles for h in HAND_CARD] == [14, 15, 13, 15]

    def test_meld_spec_sizes(self):
        assert MeldSpec.of(MeldType.PUNG).count == 3
        assert MeldSpec.of(MeldType.KONG).count == 4
        assert MeldSpec.of(MeldType.PAIR).count == 2

    def test_meld_spec_rejects_wrong_count(self):
        with pytest.raises(ValidationError, match="needs 3 tiles"):
            MeldSpec(meld_type=MeldType.PUNG, count=4)


class TestValidateHand:
    def test_four_pungs_and_a_pair(self):
        assert validate_hand(four_pungs_and_a_pair())

    def test_tile_order_does_not_matter(self):
        tiles = four_pungs_and_a_pair()
        assert validate_hand(list(reversed(tiles)))

    def test_one_joker_substitution(self):
        tiles = four_pungs_and_a_pair()
        tiles[0] = joker()
        assert validate_hand(tiles)

    def test_two_jokers_in_different_melds(self):
        tiles = four_pungs_and_a_pair()
        tiles[0] = joker()  # in the dots-1 pung
        tiles[13] = joker()  # in the east pair
        assert validate_hand(tiles)

    def test_two_jokers_in_the_same_pung(self):
        tiles = four_pungs_and_a_pair()
        tiles[0] = joker()
        tiles[1] = joker()
        assert validate_hand(tiles)

    def test_all_joker_meld(self):
        """A pung made entirely of jokers still fills its slot."""
        tiles = four_pungs_and_a_pair()
        tiles[0:3] = [joker(), joker(), joker()]
        assert validate_hand(tiles)

    def test_singletons_do_not_validate(self):
        tiles = [dots(1), dots(2), dots(3), dots(4)]
        tiles.extend(copies(lambda: bams(5), 3))
        tiles.extend(copies(lambda: bams(6), 3))
        tiles.extend(copies(lambda: cracks(7), 3))
        tiles.append(wind_tile(Wind.NORTH))
        assert len(tiles) == WINNING_HAND_SIZE
        assert not validate_hand(tiles)

    def test_unpaired_honors_do_not_validate(self):
        tiles = four_pungs_and_a_pair()
        tiles[13] = wind_tile(Wind.NORTH)
        assert not validate_hand(tiles)

    def test_wrong_lengths(self):
        tiles = four_pungs_and_a_pair()
        assert not validate_hand(tiles[:13])
        assert not validate_hand([*tiles, joker()])
        assert not validate_hand([])

    def test_fourteen_jokers(self):
        assert validate_hand([joker() for _ in range(WINNING_HAND_SIZE)])

    def test_flower_and_season_do_not_pair(self):
        """F1 and S1 have distinct keys, so they cannot form a pair together."""
        tiles = four_pungs_and_a_pair()
        tiles[12] = flower_tile(1)
        tiles[13] = season_tile(1)
        assert not validate_hand(tiles)

    def test_flower_pair_filled_by_joker(self):
        tiles = four_pungs_and_a_pair()
        tiles[12] = flower_tile(2)
        tiles[13] = joker()
        assert validate_hand(tiles)

    def test_does_not_mutate_input(self):
        tiles = four_pungs_and_a_pair()
        before = list(tiles)
        validate_hand(tiles)
        assert tiles == before


class TestMatchHand:
    def test_returns_matching_definition(self):
        hand = match_hand(four_pungs_and_a_pair())
        assert hand is not None
        assert hand.name == "Four Pungs and a Pair"

    def test_returns_none_for_no_match(self):
        assert match_hand([dots(v) for v in range(1, 10)] + [bams(v) for v in range(1, 6)]) is None

    def test_definitions_not_totalling_14_are_skipped(self):
        """A 15-tile shape never matches, even against a custom card."""
        assert len(_kongs_hand()) == 15
        assert match_hand(_kongs_hand()) is None

        thirteen = HandDefinition(
            name="Two Kongs, One Pung, and a Pair",
            melds=(
                MeldSpec.of(MeldType.KONG),
                MeldSpec.of(MeldType.KONG),
                MeldSpec.of(MeldType.PUNG),
                MeldSpec.of(MeldType.PAIR),
            ),
        )
        tiles = [*copies(lambda: dots(1), 4), *copies(lambda: dots(2), 4), *copies(lambda: dots(3), 3)]
        tiles.extend(copies(lambda: dots(4), 2))
        tiles.append(joker())
        assert match_hand(tiles, (thirteen,)) is None

    def test_custom_card_with_kong(self):
        kong_hand = HandDefinition(
            name="One Kong, Two Pungs, and Two Pairs",
            melds=(
                MeldSpec.of(MeldType.KONG),
                MeldSpec.of(MeldType.PUNG),
                MeldSpec.of(MeldType.PUNG),
                MeldSpec.of(MeldType.PAIR),
                MeldSpec.of(MeldType.PAIR),
            ),
        )
        tiles = [*copies(lambda: cracks(9), 4), *copies(lambda: bams(1), 3), *copies(lambda: bams(2), 3)]
        tiles.extend([dots(5), dots(5), joker(), wind_tile(Wind.SOUTH)])
        assert match_hand(tiles, (kong_hand,)) == kong_hand


class TestJokerModels:
    """Claims use pairwise matching; the matcher uses a joker budget over keys. They can disagree."""

    def test_flower_pair_wins_but_cannot_be_claimed(self):
        tiles = four_pungs_and_a_pair()[:12] + [flower_tile(1), flower_tile(1)]
        assert validate_hand(tiles)

        hand = (flower_tile(1), flower_tile(1))
        assert not tiles_match(hand[0], hand[1])
        assert not can_claim_meld(hand, flower_tile(1), ClaimType.PUNG)

    def test_discarded_joker_matches_unrelated_tiles(self):
        hand = (dots(1), bams(2))
        assert can_claim_meld(hand, joker(), ClaimType.PUNG)

        pung_of_mixed = [dots(1), bams(2), joker()]
        assert not validate_hand(four_pungs_and_a_pair()[3:] + pung_of_mixed)
