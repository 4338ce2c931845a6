from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from user_api.deps import get_settings_dep, get_store
from user_api.models import ErrorResponse, User, UserPayload
from user_api.settings import Settings
from user_api.user_store import InMemoryUserStore
from user_api.validation import InvalidUserError, validate_user

logger = logging.getLogger("user_api")

router = APIRouter(prefix="/users", tags=["users"])

# Only mounted when diagnostics are enabled; see create_app().
diagnostics_router = APIRouter(prefix="/users", tags=["diagnostics"])


def _invalid_message(settings: Settings) -> str:
    if settings.email_validation_enabled:
        return "Invalid user data or email."
    return "Invalid user data."


async def _read_payload(request: Request, settings: Settings) -> UserPayload:
    """Parse and validate the request body.

    Raises InvalidUserError for anything that is not a usable {name, email} object:
    empty body, broken JSON, wrong field types or failed validation.
    """
    raw = await request.body()
    try:
        payload = UserPayload.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidUserError(str(e)) from e

    validate_user(payload, check_email=settings.email_validation_enabled)
    return payload


@router.post("", status_code=201, response_model=User)
async def create_user(
    request: Request,
    store: InMemoryUserStore = Depends(get_store),
    settings: Settings = Depends(get_settings_dep),
):
    # Validate before inserting so a rejected request never consumes an id.
    try:
        payload = await _read_payload(request, settings)
    except InvalidUserError:
        return JSONResponse(_invalid_message(settings), status_code=400)

    user = store.insert(name=payload.name, email=payload.email)
    return JSONResponse(user.model_dump(), status_code=201, headers={"Location": f"/users/{user.id}"})


@router.get("", response_model=list[User])
async def list_users(store: InMemoryUserStore = Depends(get_store)):
    return JSONResponse([u.model_dump() for u in store.list()])


@router.get("/{user_id:int}", response_model=User, responses={404: {"model": ErrorResponse}})
async def get_user(user_id: int, store: InMemoryUserStore = Depends(get_store)):
    user = store.get(user_id)
    if user is None:
        return JSONResponse({"error": f"User with id {user_id} not found."}, status_code=404)
    return JSONResponse(user.model_dump())


@router.put("/{user_id:int}", response_model=User)
async def update_user(
    user_id: int,
    request: Request,
    store: InMemoryUserStore = Depends(get_store),
    settings: Settings = Depends(get_settings_dep),
):
    if not store.contains(user_id):
        return Response(status_code=404)

    try:
        payload = await _read_payload(request, settings)
    except InvalidUserError:
        return JSONResponse(_invalid_message(settings), status_code=400)

    user = store.update(user_id, name=payload.name, email=payload.email)
    if user is None:
        # Deleted by another request while this body was being read.
        return Response(status_code=404)
    return JSONResponse(user.model_dump())


@router.delete("/{user_id:int}", status_code=204)
async def delete_user(user_id: int, store: InMemoryUserStore = Depends(get_store)):
    if store.remove(user_id):
        return Response(status_code=204)
    return Response(status_code=404)


@diagnostics_router.get("/throw", include_in_schema=False)
async def throw():
    """Always fails. Used to check the 500 handler end to end."""
    logger.debug("Diagnostic fault requested")
    raise RuntimeError("Test exception")
