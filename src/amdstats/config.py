"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized configuration loaded from environment or .env file."""

    model_config = SettingsConfigDict(
        env_prefix="AMDSTATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("data/raw"), description="Directory holding the sample list TSVs")
    output_dir: Path = Field(default=Path("data/report"), description="Where charts and summaries are written")
    max_sample_age: float = Field(default=50000, gt=0, description="Upper bound (exclusive, years BP) for the age chart")
    figure_dpi: int = Field(default=300, gt=0)
    include_anthropogenic: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
