from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Every field has a working default; a .env file in the working directory is read if present.
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8")

    # Env vars:
    # - API_TOKEN (placeholder bearer token accepted by the auth gate)
    # - AUTH_ENABLED / REQUEST_LOGGING_ENABLED / EMAIL_VALIDATION_ENABLED / DIAGNOSTICS_ENABLED
    # - LOG_LEVEL
    # - HOST / PORT (only used by main.run())
    api_token: str = Field(default="mysecrettoken", validation_alias="API_TOKEN")

    auth_enabled: bool = Field(default=True, validation_alias="AUTH_ENABLED")
    request_logging_enabled: bool = Field(default=True, validation_alias="REQUEST_LOGGING_ENABLED")
    email_validation_enabled: bool = Field(default=True, validation_alias="EMAIL_VALIDATION_ENABLED")

    # Registers GET /users/throw, which exists only to exercise the 500 handler.
    diagnostics_enabled: bool = Field(default=True, validation_alias="DIAGNOSTICS_ENABLED")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    def model_post_init(self, __context):  # type: ignore[override]
        self.log_level = (self.log_level or "INFO").upper().strip()


def get_settings() -> Settings:
    """Build Settings from the environment (and .env).

    create_app() calls this only when no Settings instance is passed in.
    """
    return Settings()
