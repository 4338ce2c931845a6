from __future__ import annotations

import logging


def configure_logging(level: str = "INFO") -> None:
    """Send all user_api loggers to stderr at ``level``.

    basicConfig is a no-op once the root logger has handlers, so repeated
    create_app() calls (one per test) do not stack handlers.
    """
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
