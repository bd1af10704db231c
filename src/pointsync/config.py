"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with POINTSYNC_ prefix.
The only thing the hub itself needs is a listener address; everything else
here tunes the shell around it (origins, static hosting, write deadline).

Learn: pydantic-settings auto-loads from environment, validates types,
provides defaults. CLI flags pass overrides as constructor kwargs, which
take precedence over the environment.
"""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All app configuration. Set via POINTSYNC_* env vars."""

    # Server
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"

    # Realtime
    ws_path: str = "/ws"
    allowed_origins: list[str] = ["*"]
    send_timeout_seconds: float = Field(10.0, ge=0)  # 0 disables the deadline

    # Points
    key_precision: int = Field(6, ge=0, le=12)  # decimal digits in the canonical key

    # Client app (served at / when set)
    static_dir: Optional[str] = None

    model_config = {"env_prefix": "POINTSYNC_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Accept-all origins must be an explicit development-only choice."""
        if self.environment != "development" and "*" in self.allowed_origins:
            raise ValueError(
                "POINTSYNC_ALLOWED_ORIGINS must list explicit origins in "
                'non-development environments, e.g. \'["https://points.example.com"]\''
            )
        return self


# Singleton — import this everywhere
settings = Settings()
