"""
String enum definitions for American Mah Jong concepts.
"""

from enum import StrEnum


class TileKind(StrEnum):
    """Top-level tile categories in the 152-tile American set."""

    SUIT = "suit"
    WIND = "wind"
    DRAGON = "dragon"
    FLOWER = "flower"
    SEASON = "season"
    JOKER = "joker"


class Suit(StrEnum):
    DOTS = "dots"
    BAMS = "bams"
    CRACKS = "cracks"


class Wind(StrEnum):
    EAST = "E"
    SOUTH = "S"
    WEST = "W"
    NORTH = "N"


class Dragon(StrEnum):
    RED = "R"
    GREEN = "G"
    WHITE = "W"


class MeldType(StrEnum):
    """Meld shapes used by the hand card and by exposures."""

    PUNG = "pung"
    KONG = "kong"
    PAIR = "pair"


class ClaimType(StrEnum):
    """Claims that can be offered on a discard."""

    PUNG = "pung"
    KONG = "kong"
    MAHJONG = "mahjong"


# matching tiles a claimant must already hold, excluding the discard itself
CLAIM_TILES_REQUIRED: dict[ClaimType, int] = {
    ClaimType.PUNG: 2,
    ClaimType.KONG: 3,
}


class GamePhase(StrEnum):
    """Phase of a game."""

    CHARLESTON = "charleston"
    PLAY = "play"
    GAME_OVER = "game_over"


class CharlestonDirection(StrEnum):
    """Direction of a Charleston pass, indexed by pass number."""

    LEFT = "left"
    ACROSS = "across"
    RIGHT = "right"


CHARLESTON_DIRECTIONS: tuple[CharlestonDirection, ...] = (
    CharlestonDirection.LEFT,
    CharlestonDirection.ACROSS,
    CharlestonDirection.RIGHT,
)

# seat offset of the recipient relative to the passer
CHARLESTON_SEAT_OFFSET: dict[CharlestonDirection, int] = {
    CharlestonDirection.LEFT: 1,
    CharlestonDirection.ACROSS: 2,
    CharlestonDirection.RIGHT: 3,
}


class ActionType(StrEnum):
    """Actions accepted by the transition function."""

    START_NEW_GAME = "start_new_game"
    SELECT_CHARLESTON_TILE = "select_charleston_tile"
    PASS_CHARLESTON = "pass_charleston"
    DRAW = "draw"
    DISCARD = "discard"
    CLAIM = "claim"
    SKIP_CLAIM = "skip_claim"
    REORDER_HAND = "reorder_hand"
