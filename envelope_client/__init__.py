"""Async HTTP request wrapper that unwraps backend response envelopes."""

from envelope_client.transport.request import HttpRequest

__all__ = ["HttpRequest"]
