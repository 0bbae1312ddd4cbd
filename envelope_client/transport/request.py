"""Envelope-aware HTTP request wrapper built on ``httpx.AsyncClient``.

On top of httpx it:
- runs outbound hooks (request id, authorization) before every request;
- handles failures layer by layer and reports them through a notifier;
- returns the envelope's ``data`` instead of the ``httpx.Response``, with
  ``request_raw`` as the escape hatch for callers that need the response;
- supports cooperative cancellation through ``create_abort_controller``.

Unwrapped calls never raise on request failures: they notify, log, and
resolve to ``None``. Set ``raise_on_failure`` to get the classified
``EnvelopeClientError`` raised instead.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from envelope_client.config.messages import MessageTables
from envelope_client.config.settings import ClientSettings
from envelope_client.errors import (
    BusinessError,
    ContractViolationError,
    EnvelopeClientError,
    RequestAbortedError,
)
from envelope_client.integration.notifier import LoggingNotifier, Notifier
from envelope_client.integration.token_store import InMemoryTokenStore, TokenStore
from envelope_client.transport.abort import AbortController, AbortSignal
from envelope_client.transport.hooks import (
    REQUEST_ID_HEADER,
    RequestHook,
    assign_request_id,
    authorization_hook,
)
from envelope_client.transport.interceptors import ResponseInterceptor, Unwrapped

logger = logging.getLogger(__name__)


class HttpRequest:
    """HTTP client returning unwrapped envelope data.

    Parameters
    ----------
    base_url:
        Prefix every relative path is resolved against.
    timeout_seconds:
        Transport timeout per request (default 30).
    notifier:
        Sink for user-facing messages (default: ``LoggingNotifier``).
    token_store:
        Store the access token is read from and cleared in on 401.
    access_token_key:
        Key of the access token in ``token_store``.
    message_tables:
        HTTP-status and server-code display tables.
    raise_on_failure:
        Raise the classified error after notifying instead of returning None.
    request_hooks:
        Extra outbound hooks, run after the built-in ones.
    transport:
        Optional httpx transport (e.g. ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 30.0,
        notifier: Notifier | None = None,
        token_store: TokenStore | None = None,
        access_token_key: str = "access_token",
        message_tables: MessageTables | None = None,
        raise_on_failure: bool = False,
        request_hooks: list[RequestHook] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._notifier = notifier or LoggingNotifier()
        self._token_store = token_store if token_store is not None else InMemoryTokenStore()
        self._raise_on_failure = raise_on_failure

        self.instance = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            follow_redirects=True,
            transport=transport,
            event_hooks={
                "request": [
                    assign_request_id,
                    authorization_hook(self._token_store, access_token_key),
                    *(request_hooks or []),
                ],
            },
        )
        self._tables = message_tables or MessageTables()
        self._interceptor = ResponseInterceptor(
            notifier=self._notifier,
            tables=self._tables,
            token_store=self._token_store,
            access_token_key=access_token_key,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        message_tables: MessageTables | None = None,
        **kwargs: Any,
    ) -> HttpRequest:
        """Build a client from ``ClientSettings``."""
        return cls(
            settings.api_prefix,
            timeout_seconds=settings.timeout_seconds,
            access_token_key=settings.access_token_key,
            raise_on_failure=settings.raise_on_failure,
            message_tables=message_tables,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        await self.instance.aclose()

    async def __aenter__(self) -> HttpRequest:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def create_abort_controller(self) -> AbortController:
        """Create a cancellation handle; pass ``controller.signal`` as ``signal=``."""
        return AbortController()

    def get_uri(self, url: str = "", params: dict[str, Any] | None = None) -> str:
        """Absolute URL a request to ``url`` with ``params`` would hit."""
        return str(self.instance.build_request("GET", url, params=params).url)

    def report_unexpected_payload(self, operation: str, exc: Exception) -> None:
        """Report unwrapped data that does not match the caller's model.

        Notifies like any other failed call; raises ContractViolationError
        when ``raise_on_failure`` is set.
        """
        error = ContractViolationError(self._tables.unexpected_state, operation=operation)
        self._notifier.error(error.message)
        logger.error("Unexpected payload shape for %s: %s", operation, exc)
        if self._raise_on_failure:
            raise error from exc

    # ------------------------------------------------------------------
    # Generic calls
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        url: str,
        *,
        signal: AbortSignal | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the envelope's ``data`` (None on failure)."""
        _, unwrapped = await self._dispatch(method, url, signal, kwargs)
        return unwrapped.data

    async def request_raw(
        self,
        method: str,
        url: str,
        *,
        signal: AbortSignal | None = None,
        **kwargs: Any,
    ) -> httpx.Response | None:
        """Send a request and return the full ``httpx.Response``.

        Notifications fire exactly as for ``request``. Returns None when the
        transport call itself failed.
        """
        response, _ = await self._dispatch(method, url, signal, kwargs)
        return response

    # ------------------------------------------------------------------
    # Verb shortcuts
    # ------------------------------------------------------------------

    async def get(self, url: str, **kwargs: Any) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Any:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> Any:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", url, **kwargs)

    async def post_form(
        self, url: str, data: dict[str, Any] | None = None, files: Any = None, **kwargs: Any
    ) -> Any:
        """POST ``data`` form-encoded (multipart when ``files`` is given)."""
        return await self.request("POST", url, data=data, files=files, **kwargs)

    async def put_form(
        self, url: str, data: dict[str, Any] | None = None, files: Any = None, **kwargs: Any
    ) -> Any:
        return await self.request("PUT", url, data=data, files=files, **kwargs)

    async def patch_form(
        self, url: str, data: dict[str, Any] | None = None, files: Any = None, **kwargs: Any
    ) -> Any:
        return await self.request("PATCH", url, data=data, files=files, **kwargs)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _dispatch(
        self,
        method: str,
        url: str,
        signal: AbortSignal | None,
        kwargs: dict[str, Any],
    ) -> tuple[httpx.Response | None, Unwrapped]:
        started = time.monotonic()
        response: httpx.Response | None = None
        try:
            response = await self._send(method, url, signal, kwargs)
            response.raise_for_status()
            unwrapped = self._interceptor.on_fulfilled(response)
        except Exception as exc:  # every failure ends in a notification
            error = self._interceptor.on_rejected(exc)
            self._log_failure(method, url, error, exc, started)
            if self._raise_on_failure:
                if error is exc:
                    raise
                raise error from exc
            return None, Unwrapped(error=error)

        logger.debug(
            "%s %s -> %d",
            method,
            response.url,
            response.status_code,
            extra={
                "request_id": response.request.headers.get(REQUEST_ID_HEADER),
                "method": method,
                "url": str(response.url),
                "status_code": response.status_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )

        if unwrapped.error is not None:
            logger.warning(
                "Business failure for %s %s: %s",
                method,
                url,
                unwrapped.error.message,
                extra={"server_code": unwrapped.error.code, "method": method, "url": url},
            )
            if self._raise_on_failure:
                raise unwrapped.error

        return response, unwrapped

    async def _send(
        self,
        method: str,
        url: str,
        signal: AbortSignal | None,
        kwargs: dict[str, Any],
    ) -> httpx.Response:
        """Send through httpx, racing the call against the abort signal."""
        if signal is None:
            return await self.instance.request(method, url, **kwargs)

        signal.throw_if_aborted()

        send_task = asyncio.ensure_future(self.instance.request(method, url, **kwargs))
        abort_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            send_task.cancel()
            raise
        finally:
            abort_task.cancel()

        if send_task in done:
            return send_task.result()

        send_task.cancel()
        try:
            await send_task
        except asyncio.CancelledError:
            pass
        logger.debug("Request %s %s aborted (reason=%s)", method, url, signal.reason)
        raise RequestAbortedError(signal.reason)

    @staticmethod
    def _log_failure(
        method: str,
        url: str,
        error: EnvelopeClientError,
        cause: Exception,
        started: float,
    ) -> None:
        extra: dict[str, Any] = {
            "method": method,
            "url": url,
            "error_reason": error.message,
            "duration_ms": round((time.monotonic() - started) * 1000, 2),
        }
        if isinstance(cause, httpx.HTTPStatusError):
            extra["status_code"] = cause.response.status_code
            extra["request_id"] = cause.request.headers.get(REQUEST_ID_HEADER)
        if isinstance(error, BusinessError):
            extra["server_code"] = error.code
        logger.error(
            "Request %s %s failed: %s",
            method,
            url,
            error.message,
            exc_info=cause,
            extra=extra,
        )
