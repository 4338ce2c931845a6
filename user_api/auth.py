from __future__ import annotations

import hmac
from typing import Protocol


class TokenVerifier(Protocol):
    def verify(self, token: str) -> bool: ...


class StaticTokenVerifier:
    """Accepts exactly one hardcoded ``Authorization`` value.

    This is a placeholder, not a credential system: there are no users, no
    expiry and no rotation. Swap in a real ``TokenVerifier`` (signed tokens,
    an identity provider) without touching the middleware.
    """

    def __init__(self, token: str, *, scheme: str = "Bearer"):
        self._expected = "%s %s" % (scheme, token)

    def verify(self, token: str) -> bool:
        return hmac.compare_digest(token.encode("utf-8"), self._expected.encode("utf-8"))

