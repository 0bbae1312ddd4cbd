"""Configuration module: settings and message tables."""

from envelope_client.config.messages import MessageTables, load_message_tables
from envelope_client.config.settings import ClientSettings

__all__ = [
    "ClientSettings",
    "MessageTables",
    "load_message_tables",
]
