"""
Fixed hand card: a representative NMJL-style subset.

Each hand is an ordered list of meld requirements. Only definitions totalling
14 tiles can ever match; the matcher skips the rest. Of the four shipped
hands only "Four Pungs and a Pair" totals 14 (the others total 15, 13 and 15),
so it is the only hand that can win.
"""

from pydantic import BaseModel, ConfigDict, model_validator

from american_mahjong.logic.enums import MeldType

WINNING_HAND_SIZE = 14

MELD_SIZES: dict[MeldType, int] = {
    MeldType.PAIR: 2,
    MeldType.PUNG: 3,
    MeldType.KONG: 4,
}


class MeldSpec(BaseModel):
    """One meld slot of a hand definition."""

    model_config = ConfigDict(frozen=True)

    meld_type: MeldType
    count: int

    @model_validator(mode="after")
    def _validate_count(self) -> "MeldSpec":
        expected = MELD_SIZES[self.meld_type]
        if self.count != expected:
            raise ValueError(f"{self.meld_type} needs {expected} tiles, got {self.count}")
        return self

    @classmethod
    def of(cls, meld_type: MeldType) -> "MeldSpec":
        return cls(meld_type=meld_type, count=MELD_SIZES[meld_type])


class HandDefinition(BaseModel):
    """A named winning hand shape."""

    model_config = ConfigDict(frozen=True)

    name: str
    melds: tuple[MeldSpec, ...]

    @property
    def total_tiles(self) -> int:
        return sum(spec.count for spec in self.melds)


_PUNG = MeldSpec.of(MeldType.PUNG)
_KONG = MeldSpec.of(MeldType.KONG)
_PAIR = MeldSpec.of(MeldType.PAIR)

HAND_CARD: tuple[HandDefinition, ...] = (
    HandDefinition(name="Four Pungs and a Pair", melds=(_PUNG, _PUNG, _PUNG, _PUNG, _PAIR)),
    HandDefinition(name="Three Pungs, One Kong, and a Pair", melds=(_PUNG, _PUNG, _PUNG, _KONG, _PAIR)),
    HandDefinition(name="Two Kongs, One Pung, and a Pair", melds=(_KONG, _KONG, _PUNG, _PAIR)),
    HandDefinition(name="One Kong, Three Pungs, and a Pair", melds=(_KONG, _PUNG, _PUNG, _PUNG, _PAIR)),
)
