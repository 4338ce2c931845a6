from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from user_api.auth import StaticTokenVerifier, TokenVerifier
from user_api.logging_config import configure_logging
from user_api.middleware import AuthenticationMiddleware, ExceptionMiddleware, RequestLoggingMiddleware
from user_api.routers.users import diagnostics_router, router as users_router
from user_api.settings import Settings, get_settings
from user_api.user_store import InMemoryUserStore

logger = logging.getLogger("user_api")

APP_VERSION = "1.0.0"


def create_app(
    *,
    settings: Optional[Settings] = None,
    store: Optional[InMemoryUserStore] = None,
    verifier: Optional[TokenVerifier] = None,
) -> FastAPI:
    """Build the API with its own store and middleware chain.

    Middleware order, outermost first: exception handler, auth gate, request
    logging. Starlette wraps in reverse order of add_middleware(), so they are
    added innermost first.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="User API", version=APP_VERSION)
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryUserStore()

    # Static routes first so /users/throw is never shadowed.
    if settings.diagnostics_enabled:
        app.include_router(diagnostics_router)
    app.include_router(users_router)

    @app.get("/healthz")
    def healthz():
        return JSONResponse({"ok": True, "service": "user-api", "version": APP_VERSION})

    if settings.request_logging_enabled:
        app.add_middleware(RequestLoggingMiddleware)
    if settings.auth_enabled:
        app.add_middleware(AuthenticationMiddleware, verifier=verifier or StaticTokenVerifier(settings.api_token))
    app.add_middleware(ExceptionMiddleware)

    logger.info(
        "User API ready (auth=%s, request_logging=%s, email_validation=%s, diagnostics=%s)",
        settings.auth_enabled,
        settings.request_logging_enabled,
        settings.email_validation_enabled,
        settings.diagnostics_enabled,
    )
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("user_api.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
