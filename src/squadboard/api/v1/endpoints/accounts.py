# src/squadboard/api/v1/endpoints/accounts.py
"""Account actions: register, login, profiles and privileged removal."""

from __future__ import annotations

from typing import Any

from squadboard.api.v1.actions import action
from squadboard.api.v1.dependencies import RequestContext
from squadboard.core.errors import ValidationError
from squadboard.core.security import create_access_token
from squadboard.models import Account
from squadboard.schemas.account import (
    AccountResponse,
    DeleteUserRequest,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
)
from squadboard.services.identity import IdentityStore


def _serialize_account(account: Account) -> dict[str, Any]:
    return AccountResponse.model_validate(account).model_dump(mode="json")


@action("POST", "register")
def register(ctx: RequestContext) -> dict[str, Any]:
    """Create an account."""
    payload = ctx.parse(RegisterRequest)
    account = IdentityStore(ctx.db).register(
        payload.handle,
        payload.password,
        payload.display_name,
        payload.avatar,
    )
    return {"user": _serialize_account(account)}


@action("POST", "", "login")
def login(ctx: RequestContext) -> dict[str, Any]:
    """Authenticate and issue a bearer token."""
    payload = ctx.parse(LoginRequest)
    account = IdentityStore(ctx.db).login(payload.handle, payload.password)
    return {
        "user": _serialize_account(account),
        "access_token": create_access_token(account.handle),
        "token_type": "bearer",
    }


@action("POST", "update_profile")
def update_profile(ctx: RequestContext) -> dict[str, Any]:
    """Edit the caller's own profile."""
    requestor = ctx.require_account()
    payload = ctx.parse(ProfileUpdateRequest)
    fields = payload.model_dump(exclude_unset=True, exclude={"handle"})
    account = IdentityStore(ctx.db).update_profile(
        payload.handle or requestor.handle,
        requestor.handle,
        fields,
    )
    return {"user": _serialize_account(account)}


@action("GET", "get_user_profile")
def get_user_profile(ctx: RequestContext) -> dict[str, Any]:
    """Return any account's public profile."""
    handle = ctx.params.get("handle")
    if not handle:
        raise ValidationError("handle is required")
    account = IdentityStore(ctx.db).get_profile(str(handle))
    return {"user": ProfileResponse.model_validate(account).model_dump(mode="json")}


@action("POST", "delete_user")
def delete_user(ctx: RequestContext) -> dict[str, Any]:
    """Remove an account; administrators only."""
    requestor = ctx.require_account()
    payload = ctx.parse(DeleteUserRequest)
    IdentityStore(ctx.db).delete_account(payload.handle, requestor)
    return {}
