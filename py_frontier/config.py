"""Configuration management."""

import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Planner Configuration
    planner_decay_factor: float = Field(
        default=0.5, gt=0.0, lt=1.0,
        description="Multiplier applied to a frontier star's score each time it is re-queued",
    )
    planner_safe_distance_ratio: float = Field(
        default=2.5, gt=0.0,
        description="Relative enemy distance (in max hyperspace ranges) beyond which a border star is safe",
    )
    planner_full_component_search: bool = Field(
        default=True,
        description="Search the whole connected territory for supply, not only existing supply chains",
    )

    # Game defaults used when a snapshot is built without explicit values
    default_light_year: float = Field(default=50.0, gt=0.0, description="Distance units per light year")
    default_production_ticks: int = Field(default=24, ge=2, description="Ticks per production cycle")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
