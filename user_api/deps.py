from __future__ import annotations

from fastapi import Request

from user_api.settings import Settings
from user_api.user_store import InMemoryUserStore


def get_store(request: Request) -> InMemoryUserStore:
    """FastAPI dependency for the user store.

    The store is built once in create_app() and attached to app.state, so every
    app instance (and every test) gets its own.
    """
    return request.app.state.store


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings
