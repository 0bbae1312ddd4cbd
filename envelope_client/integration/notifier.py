"""User-facing notification sinks.

The client only needs ``success``, ``error`` and ``info`` display primitives.
They are fire-and-forget: return values are ignored.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Display primitives used by the client."""

    def success(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...

    def info(self, text: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes every notification to a logger.

    Used when the application does not wire its own UI toast system.
    """

    def __init__(self, name: str = "envelope_client.notifications") -> None:
        self._logger = logging.getLogger(name)

    def success(self, text: str) -> None:
        self._logger.info("success: %s", text)

    def error(self, text: str) -> None:
        self._logger.error("error: %s", text)

    def info(self, text: str) -> None:
        self._logger.info("info: %s", text)
