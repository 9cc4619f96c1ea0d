"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Ports are validated to 1-65535
    - gui_port is informational only: logged at startup, never bound

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - CALENDAR_ env prefix: CALENDAR_LOCAL_PORT, CALENDAR_GUI_PORT, ...
    - Command-line flags override these values in __main__ via model_copy(update=...)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CALENDAR_", case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    local_port: int = Field(8080, ge=1, le=65535)

    # Companion UI (not served by this process)
    gui_port: int = Field(3000, ge=1, le=65535)

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
