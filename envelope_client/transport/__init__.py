"""Transport layer: the envelope-aware httpx wrapper and its hooks."""

from envelope_client.transport.abort import AbortController, AbortSignal
from envelope_client.transport.hooks import assign_request_id, authorization_hook
from envelope_client.transport.interceptors import ResponseInterceptor, Unwrapped
from envelope_client.transport.request import HttpRequest

__all__ = [
    "AbortController",
    "AbortSignal",
    "HttpRequest",
    "ResponseInterceptor",
    "Unwrapped",
    "assign_request_id",
    "authorization_hook",
]
