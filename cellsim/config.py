"""Configuration settings for cellsim — loaded from environment variables."""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Simulation settings with env-driven overrides.

    All values can be overridden via environment variables prefixed with CELLSIM_.
    Example: CELLSIM_INITIAL_POPULATION=500 overrides initial_population.
    """

    # Driver timing
    tick_rate_ms: int = Field(default=16, ge=0)

    # World
    world_width: int = Field(default=400, ge=1)
    world_height: int = Field(default=400, ge=1)
    initial_food: float = Field(default=1.0, ge=0)
    max_food: float = Field(default=1.0, ge=0)
    food_regrowth_rate: float = Field(default=0.01, ge=0)

    # Cells
    initial_population: int = Field(default=100, ge=0)
    metabolic_rate: float = Field(default=1.2, gt=0)
    footprint_size: int = Field(default=5, ge=1)
    random_schedules: bool = False

    # Reproducibility; None seeds from system entropy
    seed: Optional[int] = None

    # Logging and telemetry
    stats_interval: int = Field(default=100, ge=1)
    snapshot_interval_ticks: int = Field(default=300, ge=1)
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="CELLSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
