"""Library configuration using Pydantic Settings.

Configuration is loaded from environment variables prefixed with `BREEZE_`.

Optionally, point `ENV_FILE` at a local env file (for development). Env files
are opt-in only; nothing is read from `.env` unless requested.
"""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from breeze.domain.enums import LoadStrategy


class Settings(BaseSettings):
    """
    Settings with type validation.

    Every value has a default so the library works without any environment.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="BREEZE_", extra="ignore"
    )

    # Logging
    log_level: str = "INFO"
    structured_logs: bool = True

    # Loader option used by apply_expand when no strategy is passed explicitly
    expand_load_strategy: LoadStrategy = LoadStrategy.SELECTIN

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level must be a standard logging level, got '{v}'")
        return level

    @field_validator("expand_load_strategy", mode="before")
    @classmethod
    def validate_expand_load_strategy(cls, v: str | LoadStrategy) -> LoadStrategy:
        """Parse the load strategy case-insensitively."""
        if isinstance(v, LoadStrategy):
            return v
        try:
            return LoadStrategy(v.lower())
        except ValueError:
            raise ValueError(
                f"expand_load_strategy must be one of {[s.value for s in LoadStrategy]}, got '{v}'"
            )


settings = Settings()
