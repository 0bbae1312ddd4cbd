"""Cooperative cancellation handles for in-flight requests."""

from __future__ import annotations

import asyncio

from envelope_client.errors import RequestAbortedError


class AbortSignal:
    """Read side of an AbortController, passed into a call as ``signal=``."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: str | None = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        """Block until the signal is aborted."""
        await self._event.wait()

    def _set(self, reason: str | None) -> None:
        self.reason = reason
        self._event.set()

    def throw_if_aborted(self) -> None:
        if self.aborted:
            raise RequestAbortedError(self.reason)


class AbortController:
    """Owner of an AbortSignal. Calling ``abort()`` cancels every call using it.

    Aborting twice is a no-op; the first reason is kept.
    """

    def __init__(self) -> None:
        self.signal = AbortSignal()

    def abort(self, reason: str | None = None) -> None:
        if self.signal.aborted:
            return
        self.signal._set(reason)
