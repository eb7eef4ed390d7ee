"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (backend/)
BASE_DIR = Path(__file__).resolve().parent.parent

VALID_PUZZLE_DIFFICULTIES = {"easy", "medium", "hard"}

# A 3x3 grid carves a single cell, so its start and exit coincide
MIN_PLAYABLE_DIMENSION = 5


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Escape"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_generate: int = 30  # maze generations per minute

    # Maze generation
    default_maze_width: int = 21
    default_maze_height: int = 21
    max_maze_dimension: int = 101

    # Gameplay
    time_limit_seconds: int = 120
    firewall_penalty_seconds: int = 10
    puzzle_penalty_seconds: int = 10
    puzzle_difficulty: Optional[str] = None  # None mixes every puzzle kind

    # Sessions (held in memory only)
    max_active_sessions: int = 1000

    @field_validator("puzzle_difficulty")
    @classmethod
    def validate_puzzle_difficulty(cls, v: Optional[str]) -> Optional[str]:
        """Normalize difficulty and reject unknown tiers."""
        if v is None or not v.strip():
            return None
        v = v.strip().lower()
        if v not in VALID_PUZZLE_DIFFICULTIES:
            raise ValueError(
                f"PUZZLE_DIFFICULTY must be one of: {', '.join(sorted(VALID_PUZZLE_DIFFICULTIES))}"
            )
        return v

    @field_validator("default_maze_width", "default_maze_height", "max_maze_dimension")
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        """Playable mazes need at least a 5x5 grid."""
        if v < MIN_PLAYABLE_DIMENSION:
            raise ValueError(f"Maze dimensions must be at least {MIN_PLAYABLE_DIMENSION}")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
