"""Outbound request hooks registered on the httpx client.

Each hook receives the outgoing ``httpx.Request`` and may modify it in place
before it is sent.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable

import httpx

from envelope_client.integration.token_store import TokenStore

logger = logging.getLogger(__name__)

RequestHook = Callable[[httpx.Request], Awaitable[None]]

REQUEST_ID_HEADER = "X-Request-ID"


async def assign_request_id(request: httpx.Request) -> None:
    """Attach an ``X-Request-ID`` header unless the caller supplied one."""
    if REQUEST_ID_HEADER not in request.headers:
        request.headers[REQUEST_ID_HEADER] = str(uuid.uuid4())


def authorization_hook(token_store: TokenStore, token_key: str) -> RequestHook:
    """Build a hook attaching ``Authorization: Bearer <token>`` from the store.

    Requests that already carry an Authorization header are left untouched.
    """

    async def _attach_authorization(request: httpx.Request) -> None:
        if "Authorization" in request.headers:
            return
        token = token_store.get(token_key)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        else:
            logger.debug("No access token stored under %r, sending anonymously", token_key)

    return _attach_authorization
