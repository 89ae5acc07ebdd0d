"""
Tile representation for the 152-tile American Mah Jong set.

Set composition:
  suited: dots, bams, cracks, values 1-9, 4 copies each (108)
  honors: winds E, S, W, N and dragons R, G, W, 4 copies each (28)
  flowers F1-F4 and seasons S1-S4, one copy each (8)
  jokers: 8
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, model_validator

from american_mahjong.logic.enums import Dragon, Suit, TileKind, Wind
from american_mahjong.logic.rng import fisher_yates_shuffle

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from american_mahjong.logic.rng import PCG64DXSM

NUM_TILES = 152
COPIES_PER_TILE = 4
SUIT_VALUES = range(1, 10)
BONUS_NUMBERS = range(1, 5)
NUM_JOKERS = 8
JOKER_KEY = "J"

# which optional field each kind must carry
_KIND_FIELDS: dict[TileKind, tuple[str, ...]] = {
    TileKind.SUIT: ("suit", "value"),
    TileKind.WIND: ("wind",),
    TileKind.DRAGON: ("dragon",),
    TileKind.FLOWER: ("flower",),
    TileKind.SEASON: ("season",),
    TileKind.JOKER: (),
}
_FACE_FIELDS = ("suit", "value", "wind", "dragon", "flower", "season")


class Tile(BaseModel):
    """
    Immutable physical tile.

    `id` is unique per tile instance within a deck; it is the only thing that
    tells two otherwise identical tiles apart.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    kind: TileKind
    suit: Suit | None = None
    value: int | None = None
    wind: Wind | None = None
    dragon: Dragon | None = None
    flower: int | None = None
    season: int | None = None

    @model_validator(mode="after")
    def _validate_face(self) -> Tile:
        required = _KIND_FIELDS[self.kind]
        for name in _FACE_FIELDS:
            is_set = getattr(self, name) is not None
            if name in required and not is_set:
                raise ValueError(f"{self.kind} tile requires {name}")
            if name not in required and is_set:
                raise ValueError(f"{self.kind} tile must not set {name}")
        if self.value is not None and self.value not in SUIT_VALUES:
            raise ValueError(f"suit value must be in 1-9, got {self.value}")
        for name in ("flower", "season"):
            number = getattr(self, name)
            if number is not None and number not in BONUS_NUMBERS:
                raise ValueError(f"{name} must be in 1-4, got {number}")
        return self

    @property
    def is_joker(self) -> bool:
        return self.kind == TileKind.JOKER


def _make_tiles(id_source: Iterator[int], count: int, kind: TileKind, **face: object) -> list[Tile]:
    return [Tile(id=next(id_source), kind=kind, **face) for _ in range(count)]


def build_deck(id_source: Iterable[int] | None = None) -> list[Tile]:
    """
    Build a full, unshuffled 152-tile set.

    Composition and order are deterministic. Ids are drawn from `id_source`
    (a fresh `itertools.count()` by default), so separate decks never share
    id state.
    """
    ids = iter(id_source) if id_source is not None else itertools.count()
    tiles: list[Tile] = []
    for suit in Suit:
        for value in SUIT_VALUES:
            tiles.extend(_make_tiles(ids, COPIES_PER_TILE, TileKind.SUIT, suit=suit, value=value))
    for wind in Wind:
        tiles.extend(_make_tiles(ids, COPIES_PER_TILE, TileKind.WIND, wind=wind))
    for dragon in Dragon:
        tiles.extend(_make_tiles(ids, COPIES_PER_TILE, TileKind.DRAGON, dragon=dragon))
    for number in BONUS_NUMBERS:
        tiles.extend(_make_tiles(ids, 1, TileKind.FLOWER, flower=number))
        tiles.extend(_make_tiles(ids, 1, TileKind.SEASON, season=number))
    tiles.extend(_make_tiles(ids, NUM_JOKERS, TileKind.JOKER))
    return tiles


def shuffle_tiles(tiles: list[Tile], pcg: PCG64DXSM) -> None:
    """Shuffle tiles in place; every arrangement is equally likely."""
    fisher_yates_shuffle(tiles, pcg)


def tile_key(tile: Tile) -> str:
    """
    Collapse a tile to its equality class for counting.

    All jokers share the key "J". Flowers and seasons keep distinct keys.
    """
    match tile.kind:
        case TileKind.JOKER:
            return JOKER_KEY
        case TileKind.SUIT:
            return f"{tile.suit}-{tile.value}"
        case TileKind.WIND:
            return f"wind-{tile.wind}"
        case TileKind.DRAGON:
            return f"dragon-{tile.dragon}"
        case TileKind.FLOWER:
            return f"F{tile.flower}"
        case TileKind.SEASON:
            return f"S{tile.season}"
    raise ValueError(f"unknown tile kind: {tile.kind}")


def tiles_match(a: Tile, b: Tile) -> bool:
    """
    Check whether two tiles count as the same for pung/kong claims.

    A joker matches anything pairwise. Otherwise only suited tiles of the same
    suit and value, winds of the same wind, or dragons of the same dragon match.
    Flowers and seasons never match.
    """
    if a.is_joker or b.is_joker:
        return True
    if a.kind != b.kind:
        return False
    if a.kind == TileKind.SUIT:
        return a.suit == b.suit and a.value == b.value
    if a.kind == TileKind.WIND:
        return a.wind == b.wind
    if a.kind == TileKind.DRAGON:
        return a.dragon == b.dragon
    return False


def count_matching(hand: Sequence[Tile], tile: Tile) -> int:
    """Count tiles in hand that pairwise-match the given tile."""
    return sum(1 for t in hand if tiles_match(t, tile))


def tile_label(tile: Tile) -> str:
    """Short human readable label, e.g. "5B", "EW", "RD", "F1", "JK"."""
    match tile.kind:
        case TileKind.SUIT:
            return f"{tile.value}{tile.suit.value[0].upper()}"  # type: ignore[union-attr]
        case TileKind.WIND:
            return f"{tile.wind}W"
        case TileKind.DRAGON:
            return f"{tile.dragon}D"
        case TileKind.JOKER:
            return "JK"
    return tile_key(tile)


def find_tile(tiles: Sequence[Tile], tile_id: int) -> Tile | None:
    """Return the tile with the given id, or None when absent."""
    for tile in tiles:
        if tile.id == tile_id:
            return tile
    return None
