"""
Engine configuration using pydantic-settings.

Environment variables (prefix: DEAL_):
    DEAL_PLAYER_COUNT     - Players per game, 2-6 (default: 2)
    DEAL_BOT_DIFFICULTY   - easy | medium | hard | expert (default: medium)
    DEAL_SEED             - Optional RNG seed for reproducible games
    DEAL_AUTO_END_TURN    - End the turn when the move budget runs out (default: true)
    DEAL_MAX_TURNS        - Turn cap for simulations (default: 500)
    DEAL_LOG_LEVEL        - Logging level for the simulator (default: WARNING)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monopoly_deal.config import DIFFICULTIES, GameConfig


class EngineSettings(BaseSettings):
    """Defaults for new games and the simulator."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="DEAL_",
    )

    player_count: int = Field(default=2, ge=2, le=6, description="Players per game.")
    bot_difficulty: str = Field(default="medium", description="Bot tier: easy | medium | hard | expert.")
    seed: Optional[int] = Field(default=None, description="RNG seed for reproducible games.")
    auto_end_turn: bool = Field(default=True, description="End the turn when no moves are left.")
    max_turns: int = Field(default=500, gt=0, description="Turn cap for simulated games.")
    log_level: str = Field(default="WARNING", description="Logging level name.")

    @field_validator("bot_difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, value: Optional[str]) -> str:
        """Accept any casing; reject unknown tiers."""
        value = (value or "medium").strip().lower()
        if value not in DIFFICULTIES:
            raise ValueError(f"bot_difficulty must be one of {', '.join(DIFFICULTIES)}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        return (value or "WARNING").strip().upper()

    def game_config(self, **overrides) -> GameConfig:
        """Build a GameConfig from these settings."""
        values = {
            "player_count": self.player_count,
            "bot_difficulty": self.bot_difficulty,
            "seed": self.seed,
            "auto_end_turn": self.auto_end_turn,
        }
        values.update(overrides)
        return GameConfig(**values)


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()
