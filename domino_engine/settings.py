"""
Central engine configuration using pydantic-settings.

Provides typed, environment-based defaults for the simulator and the
layout engine. Rule and layout constants themselves live in the frozen
dataclasses of ``domino_engine.config``; these settings only choose their
values at process start.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from domino_engine.config import GameConfig, LayoutConfig


class EngineSettings(BaseSettings):
    """
    Engine configuration loaded from environment variables.

    Environment variables (prefix: DOMINO_):
        DOMINO_LOG_LEVEL                 - Logging level (default: INFO)
        DOMINO_SEED                      - Seed for shuffling (default: random)
        DOMINO_STRICT_PASS               - Forbid passing with a playable tile
        DOMINO_LAYOUT_MAX_WIDTH          - Row width in pixels before wrapping
        DOMINO_LAYOUT_MAX_NUDGE_ATTEMPTS - Collision nudges per tile
        DOMINO_LOG_DIR                   - Directory for JSONL game logs
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="DOMINO_",
    )

    log_level: str = Field(default="INFO", description="Python logging level name.")
    seed: Optional[int] = Field(default=None, description="Seed for the shuffle RNG.")
    strict_pass: bool = Field(default=False)

    layout_max_width: float = Field(default=800.0, gt=0)
    layout_max_nudge_attempts: int = Field(default=8, ge=0, le=64)

    log_dir: str = Field(default=".", description="Directory for JSONL game logs.")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept lower-case level names and reject unknown ones."""
        if not value:
            return "INFO"
        value = str(value).upper()
        if value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    def game_config(self) -> GameConfig:
        return GameConfig(seed=self.seed, strict_pass=self.strict_pass)

    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            max_width=self.layout_max_width,
            max_nudge_attempts=self.layout_max_nudge_attempts,
        )


@lru_cache
def get_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()
