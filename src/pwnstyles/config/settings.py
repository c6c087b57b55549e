"""
Settings loading helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .models import DEVELOPMENT, ProjectConfig


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Settings(BaseModel):
    """
    Container for process-wide settings loaded from environment variables.

    Attributes:
        environment: Default application environment when the project config sets none.
        log_level: Logging level overriding the CLI flag.
    """
    environment: Optional[str] = Field(default=None, alias="PWNSTYLES_ENV")
    log_level: Optional[str] = Field(default=None, alias="PWNSTYLES_LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from environment/.env exactly once.

    Returns:
        A Settings object populated from environment variables.
    """
    values = {field.alias: os.getenv(field.alias) for field in Settings.model_fields.values()}
    return Settings(**values)


def resolve_environment(config: ProjectConfig, override: Optional[str] = None) -> str:
    """
    Pick the environment name: explicit override, then the project config, then PWNSTYLES_ENV.

    Falls back to "development", which is what a local checkout without any
    configuration runs as.
    """
    for candidate in (override, config.environment, get_settings().environment):
        if candidate and candidate.strip():
            return candidate.strip().lower()
    return DEVELOPMENT
