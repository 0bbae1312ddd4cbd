"""Collaborators consumed by the client: notifications and token storage."""

from envelope_client.integration.notifier import LoggingNotifier, Notifier
from envelope_client.integration.token_store import InMemoryTokenStore, TokenStore

__all__ = [
    "InMemoryTokenStore",
    "LoggingNotifier",
    "Notifier",
    "TokenStore",
]
