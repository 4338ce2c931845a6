from __future__ import annotations

from typing import Optional

import email_validator

from user_api.models import UserPayload


# Syntax only: names like "localhost" or "mail.test" are well-formed addresses even
# though email-validator reserves them by default. The list is module-wide state.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


class InvalidUserError(ValueError):
    """Raised when a user payload fails field or email validation."""


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_required(name: Optional[str], email: Optional[str]) -> None:
    if _is_blank(name):
        raise InvalidUserError("Name is required")
    if _is_blank(email):
        raise InvalidUserError("Email is required")


def validate_email(email: Optional[str]) -> None:
    """Check that ``email`` is a bare ``local-part@domain`` address.

    The address must parse and must re-serialize to the same string, so
    display-name forms ("Ann <ann@x.com>") and padded input are rejected.
    Domains are compared case-insensitively because the parser lowercases them.
    Only syntax is checked: no DNS lookups, and dotless or reserved domains pass.
    """
    if _is_blank(email):
        raise InvalidUserError("Email is required")
    try:
        parsed = email_validator.validate_email(email, check_deliverability=False, globally_deliverable=False)
    except email_validator.EmailNotValidError as e:
        raise InvalidUserError(str(e)) from e
    if parsed.normalized.lower() != email.lower():
        raise InvalidUserError("Email must be a plain address")


def is_valid_email(email: Optional[str]) -> bool:
    try:
        validate_email(email)
    except InvalidUserError:
        return False
    return True


def validate_user(payload: UserPayload, *, check_email: bool = True) -> None:
    validate_required(payload.name, payload.email)
    if check_email:
        validate_email(payload.email)
