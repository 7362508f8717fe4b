# src/squadboard/api/v1/endpoints/board.py
"""Action-dispatched board endpoint.

A single route serves every board operation: the HTTP method plus the
``action`` query parameter select a handler registered in
`squadboard.api.v1.actions`.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, Response, status
from starlette.concurrency import run_in_threadpool

from squadboard.api.v1.actions import resolve
from squadboard.api.v1.dependencies import (
    OptionalAccountDep,
    RequestContext,
    SessionDep,
    get_client_address,
)
from squadboard.core.errors import UnsupportedOperationError, ValidationError

# Imported for their @action registrations.
from . import accounts, chat, comments, posts  # noqa: F401

logger = logging.getLogger(__name__)

router = APIRouter(tags=["board"])

ClientAddressDep = Annotated[str | None, Depends(get_client_address)]


async def _read_body(request: Request) -> dict[str, Any]:
    """Parse the JSON body; a JSON-encoded string holding an object is accepted too."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
        if isinstance(data, str):
            data = json.loads(data)
    except ValueError as err:
        raise ValidationError("Request body must be valid JSON") from err
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


@router.api_route("/board", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def board(
    request: Request,
    db: SessionDep,
    account: OptionalAccountDep,
    client_address: ClientAddressDep,
    action: str | None = Query(None, description="Operation to perform"),
) -> Any:
    """Dispatch a board request to the handler registered for its action."""
    method = request.method.upper()
    if method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK)
    if method not in ("GET", "POST"):
        raise UnsupportedOperationError("Method not allowed")

    handler = resolve(method, action)
    params: dict[str, Any] = {
        key: value for key, value in request.query_params.items() if key != "action"
    }
    if method == "POST":
        params.update(await _read_body(request))

    ctx = RequestContext(db=db, account=account, client_address=client_address, params=params)
    # Password hashing and blocking store I/O must stay off the event loop.
    result = await run_in_threadpool(handler, ctx)
    logger.debug("Handled %s action=%s", method, action or "")
    return {"success": True, **result}
