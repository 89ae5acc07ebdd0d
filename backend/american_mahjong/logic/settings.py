"""Centralized game settings for American Mah Jong."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from american_mahjong.logic.exceptions import UnsupportedSettingsError

SUPPORTED_NUM_PLAYERS = 4
SUPPORTED_HAND_SIZE = 13
SUPPORTED_PASS_SIZE = 3
SUPPORTED_CHARLESTON_ROUNDS = 3
SUPPORTED_JOKER_COUNT = 8


class GameSettings(BaseModel):
    """
    Configuration for the rules the engine plays by.

    All fields default to the NMJL table the engine implements.
    """

    model_config = ConfigDict(frozen=True)

    num_players: int = SUPPORTED_NUM_PLAYERS
    hand_size: int = SUPPORTED_HAND_SIZE
    charleston_pass_size: int = SUPPORTED_PASS_SIZE
    charleston_rounds: int = SUPPORTED_CHARLESTON_ROUNDS
    joker_count: int = SUPPORTED_JOKER_COUNT
    human_seat: int = Field(default=0, ge=0, lt=SUPPORTED_NUM_PLAYERS)


def validate_settings(settings: GameSettings) -> None:
    """Validate that all settings values are supported by the engine.

    Raises UnsupportedSettingsError for any setting value that is defined
    but not implemented in the transition logic.
    """
    errors: list[str] = []

    if settings.num_players != SUPPORTED_NUM_PLAYERS:
        errors.append(f"num_players={settings.num_players} is not supported (only 4-player games)")

    if settings.hand_size != SUPPORTED_HAND_SIZE:
        errors.append(f"hand_size={settings.hand_size} is not supported (hand card assumes 13 + 1)")

    if settings.charleston_pass_size != SUPPORTED_PASS_SIZE:
        errors.append(f"charleston_pass_size={settings.charleston_pass_size} is not supported")

    if settings.charleston_rounds != SUPPORTED_CHARLESTON_ROUNDS:
        errors.append(f"charleston_rounds={settings.charleston_rounds} is not supported (left, across, right)")

    if settings.joker_count != SUPPORTED_JOKER_COUNT:
        errors.append(f"joker_count={settings.joker_count} is not supported (152-tile set)")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
