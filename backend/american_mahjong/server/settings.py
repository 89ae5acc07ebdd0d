"""Simulation run configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from american_mahjong.logic.rng import validate_seed_hex


class SimulationSettings(BaseSettings):
    model_config = {"env_prefix": "MAHJONG_"}

    games: int = Field(default=1, ge=1)
    max_steps: int = Field(default=2000, ge=1)  # AI actions per game before giving up
    seed: str | None = None  # first game's seed; later games get fresh seeds
    log_dir: str | None = Field(default=None, min_length=1)

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v
