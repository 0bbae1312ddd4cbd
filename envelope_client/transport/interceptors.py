"""Inbound response handling: envelope unwrapping and failure resolution.

Success path: non-JSON bodies pass through untouched; JSON bodies are parsed
as a ResponseEnvelope, notified on, and reduced to ``data``.

Failure path: the message shown to the user is resolved layer by layer:
1. error body is an envelope with ``success: false`` -> its message and code
2. error body claims ``success: true`` -> contract violation
3. HTTP response without an envelope -> status table
4. no HTTP response at all -> transport error text and code
5. anything else -> generic unknown-error text
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from envelope_client.config.messages import MessageTables
from envelope_client.errors import (
    BusinessError,
    ContractViolationError,
    EnvelopeClientError,
    NetworkError,
    TransportStatusError,
    UnknownRequestError,
)
from envelope_client.integration.notifier import Notifier
from envelope_client.integration.token_store import TokenStore
from envelope_client.models.envelope import ResponseEnvelope

logger = logging.getLogger(__name__)


@dataclass
class Unwrapped:
    """Result of the success path: the payload, or the business failure."""

    data: Any = None
    error: EnvelopeClientError | None = None


def is_json_response(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def _json_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _error_envelope(body: Any) -> ResponseEnvelope[Any] | None:
    """Failed envelope carried by an error body, or None when it is not one."""
    if not isinstance(body, dict) or body.get("success") is not False:
        return None
    try:
        return ResponseEnvelope[Any].model_validate(body)
    except ValidationError:
        logger.warning("Error body looks like an envelope but does not validate: %r", body)
        return None


def _transport_error_code(exc: httpx.RequestError) -> str:
    return type(exc).__name__


class ResponseInterceptor:
    """Turns transport responses and errors into payloads and notifications.

    Parameters
    ----------
    notifier:
        Display sink for user-facing messages.
    tables:
        HTTP-status and server-code lookup tables.
    token_store:
        Store holding the access token; cleared on HTTP 401.
    access_token_key:
        Key of the access token inside ``token_store``.
    """

    def __init__(
        self,
        notifier: Notifier,
        tables: MessageTables,
        token_store: TokenStore,
        access_token_key: str,
    ) -> None:
        self._notifier = notifier
        self._tables = tables
        self._token_store = token_store
        self._access_token_key = access_token_key

    def on_fulfilled(self, response: httpx.Response) -> Unwrapped:
        """Handle a 2xx response.

        Raises
        ------
        ContractViolationError
            If a JSON body is not a valid envelope.
        """
        if not is_json_response(response):
            return Unwrapped(data=response.content)

        try:
            envelope = ResponseEnvelope[Any].model_validate_json(response.content)
        except ValueError as exc:
            raise ContractViolationError(
                self._tables.unexpected_state, status_code=response.status_code
            ) from exc

        if not envelope.success:
            text = self._tables.server_message(envelope.code, envelope.message)
            self._notifier.error(text)
            return Unwrapped(
                error=BusinessError(text, code=envelope.code, status_code=response.status_code)
            )

        if envelope.message:
            # e.g. "Signed in successfully"
            self._notifier.info(envelope.message)

        return Unwrapped(data=envelope.data)

    def on_rejected(self, exc: Exception) -> EnvelopeClientError:
        """Classify a failure, notify the user, and return the classified error."""
        error = self.classify(exc)

        if isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 401:
            logger.info("Received 401, clearing stored access token")
            self._token_store.remove(self._access_token_key)

        self._notifier.error(error.message)
        return error

    def classify(self, exc: Exception) -> EnvelopeClientError:
        if isinstance(exc, EnvelopeClientError):
            return exc

        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            body = _json_body(response)

            if isinstance(body, dict) and body.get("success") is True:
                # A failed HTTP status never carries success: true
                return ContractViolationError(
                    self._tables.unexpected_state, status_code=response.status_code
                )

            envelope = _error_envelope(body)
            if envelope is not None:
                return BusinessError(
                    self._tables.server_message(envelope.code, envelope.message),
                    code=envelope.code,
                    status_code=response.status_code,
                )

            return TransportStatusError(
                self._tables.status_message(response.status_code, response.reason_phrase),
                status_code=response.status_code,
            )

        if isinstance(exc, httpx.RequestError):
            code = _transport_error_code(exc)
            text = str(exc) or code
            return NetworkError(f"{text}({code})", code=code)

        return UnknownRequestError(f"{self._tables.unknown_error}(???)", cause=repr(exc))
