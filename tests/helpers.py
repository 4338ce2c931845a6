from __future__ import annotations

from user_api.settings import Settings

AUTH = {"Authorization": "Bearer mysecrettoken"}


def make_settings(**overrides) -> Settings:
    # Construct by field name so the test run never depends on the caller's env/.env.
    values = {
        "api_token": "mysecrettoken",
        "auth_enabled": True,
        "request_logging_enabled": True,
        "email_validation_enabled": True,
        "diagnostics_enabled": True,
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings.model_construct(**values)
