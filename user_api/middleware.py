from __future__ import annotations

import contextlib
import logging
from typing import Optional

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from user_api.auth import TokenVerifier

USERS_PREFIX = "/users"

GENERIC_ERROR = {"error": "An unexpected error occurred. Please try again later."}
UNAUTHORIZED_ERROR = {"error": "Unauthorized: Invalid or missing token."}

request_logger = logging.getLogger("user_api.requests")
error_logger = logging.getLogger("user_api.errors")


def is_users_path(path: str) -> bool:
    # Segment match: "/users" and "/users/..." are protected, "/usersx" is not.
    return path == USERS_PREFIX or path.startswith(USERS_PREFIX + "/")


class ExceptionMiddleware:
    """Outermost fault boundary.

    Any exception escaping the inner stages becomes a 500 with a fixed JSON
    body. The exception is not re-raised and its details never reach the client.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            error_logger.debug("Unhandled error on %s %s", scope.get("method"), scope.get("path"), exc_info=True)
            if response_started:
                return
            await JSONResponse(GENERIC_ERROR, status_code=500)(scope, receive, send)


class AuthenticationMiddleware:
    """Reject /users requests whose Authorization header the verifier refuses."""

    def __init__(self, app: ASGIApp, *, verifier: TokenVerifier):
        self.app = app
        self.verifier = verifier

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not is_users_path(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        token = Headers(scope=scope).get("authorization")
        if token is None or not token.strip() or not self.verifier.verify(token):
            await JSONResponse(UNAUTHORIZED_ERROR, status_code=401)(scope, receive, send)
            return

        await self.app(scope, receive, send)


class RequestLoggingMiddleware:
    """Log each request and its response without changing either.

    The request body is read up front and replayed to the inner app. Response
    messages are held back until the inner app finishes, logged, and then
    forwarded exactly as they were produced.
    """

    def __init__(self, app: ASGIApp, *, logger: Optional[logging.Logger] = None):
        self.app = app
        self.logger = logger or request_logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        pending = await self._read_request(receive)
        with contextlib.suppress(Exception):
            self._log_request(scope, pending)

        async def replay() -> Message:
            if pending:
                return pending.pop(0)
            return await receive()

        held: list[Message] = []
        status: Optional[int] = None

        async def capture(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            held.append(message)

        try:
            await self.app(scope, replay, capture)
        finally:
            # Whatever the inner app managed to produce is still delivered.
            if status is not None:
                with contextlib.suppress(Exception):
                    self._log_response(status, held)
            for message in held:
                await send(message)

    @staticmethod
    async def _read_request(receive: Receive) -> list[Message]:
        messages: list[Message] = []
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request" or not message.get("more_body", False):
                return messages

    def _log_request(self, scope: Scope, pending: list[Message]) -> None:
        self.logger.info("Request: %s %s", scope.get("method"), scope.get("path"))
        body = b"".join(m.get("body", b"") for m in pending if m["type"] == "http.request")
        if body.strip():
            self.logger.info("Request Body: %s", body.decode("utf-8", errors="replace"))

    def _log_response(self, status: int, held: list[Message]) -> None:
        self.logger.info("Response: %s", status)
        body = b"".join(m.get("body", b"") for m in held if m["type"] == "http.response.body")
        if body.strip():
            self.logger.info("Response Body: %s", body.decode("utf-8", errors="replace"))
