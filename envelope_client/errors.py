"""Failure taxonomy for requests made through the client.

Every failed call is classified into one of these errors. By default the
client only uses them to build the notification text and the log entry; with
``raise_on_failure`` enabled the classified error is raised to the caller.
"""

from __future__ import annotations


class EnvelopeClientError(Exception):
    """Base error for all request failures."""

    message: str = "Unknown error"

    def __init__(
        self,
        message: str | None = None,
        code: int | str | None = None,
        **kwargs: object,
    ) -> None:
        self.message = message or self.__class__.message
        self.code = code
        self.details = kwargs
        super().__init__(self.message)


class BusinessError(EnvelopeClientError):
    """Envelope parsed with ``success: false`` (any HTTP status)."""

    message = "Request failed"


class TransportStatusError(EnvelopeClientError):
    """Non-2xx HTTP status without a parseable envelope."""

    message = "Unexpected HTTP status"

    def __init__(self, message: str | None = None, status_code: int | None = None, **kwargs: object) -> None:
        super().__init__(message, code=status_code, **kwargs)
        self.status_code = status_code


class NetworkError(EnvelopeClientError):
    """No HTTP response was obtained (connection failure, timeout)."""

    message = "Network error"


class RequestAbortedError(NetworkError):
    """The call was cancelled through its abort signal."""

    message = "canceled(ERR_CANCELED)"

    def __init__(self, reason: str | None = None, **kwargs: object) -> None:
        super().__init__(f"{reason or 'canceled'}(ERR_CANCELED)", code="ERR_CANCELED", **kwargs)
        self.reason = reason


class ContractViolationError(EnvelopeClientError):
    """The backend answered with a body that breaks the envelope contract."""

    message = "Unexpected response state"


class UnknownRequestError(EnvelopeClientError):
    """Failure matching none of the known patterns."""

    message = "Unknown error"
