from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env for local runs, without overriding values already in the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"


def load_env_file(path: Path = env_file) -> None:
    if not path.exists():
        return
    file_env = dotenv_values(path)
    for k, v in file_env.items():
        if k not in os.environ and v is not None:
            os.environ[k] = v


class Settings(BaseSettings):
    """Settings pulled from ``TERRA_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="TERRA_", extra="ignore")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (json or console)")

    # Generation defaults for the command line
    default_height: int = Field(default=36, description="Default world height in game tiles")
    default_continents: int = Field(default=4, description="Default number of continents")
    default_majors_per_continent: int = Field(default=2, description="Default major starts per continent")
    default_minors_per_player: int = Field(default=0, description="Default minor starts per major start")
    default_sea_level: int = Field(default=2, ge=1, le=3, description="Default sea level tier")
    default_seed: Optional[str] = Field(default=None, description="Default seed; random if unset")


@lru_cache()
def get_settings() -> Settings:
    """Settings singleton, built on first use."""
    load_env_file()
    return Settings()
