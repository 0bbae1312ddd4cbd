"""Display-string tables and YAML loader.

Maps HTTP status codes and backend server codes to user-facing text. The
built-in tables are incomplete on purpose; deployments extend or replace
entries with a YAML file shaped like::

    http_status:
      418: "I'm a teapot(418)"
    server_code:
      10001: "Username already taken"
    unexpected_state: "Something went wrong, please contact support"
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


_DEFAULT_HTTP_STATUS: dict[int, str] = {
    400: "Bad request(400)",
    401: "Unauthorized, please sign in again(401)",
    403: "Access denied(403)",
    404: "The requested resource does not exist(404)",
    405: "Request method not allowed(405)",
    408: "Request timed out(408)",
    500: "Internal server error(500)",
    501: "Service not implemented(501)",
    502: "Bad gateway(502)",
    503: "Service unavailable(503)",
    504: "Gateway timed out(504)",
    505: "HTTP version not supported(505)",
}


class MessageTables(BaseModel):
    """Lookup tables used to build notification text."""

    http_status: dict[int, str] = Field(default_factory=lambda: dict(_DEFAULT_HTTP_STATUS))
    server_code: dict[int, str] = Field(default_factory=dict)
    unexpected_state: str = "Unexpected response state, please contact the administrator!(BUG)"
    unknown_error: str = "Unknown error"

    def status_message(self, status_code: int, reason_phrase: str) -> str:
        """Text for an HTTP status, falling back to ``"{reason}({status})"``."""
        mapped = self.http_status.get(status_code)
        if mapped is not None:
            return mapped
        return f"{reason_phrase}({status_code})"

    def server_message(self, code: int | None, message: str | None) -> str:
        """Text for a failed envelope: ``"{message}({code})"``.

        A mapped server code wins over the message the backend sent.
        """
        text = self.server_code.get(code) if isinstance(code, int) else None
        if text is None:
            text = message if message is not None else self.unknown_error
        return f"{text}({code})"


def load_message_tables(yaml_path: str | None) -> MessageTables:
    """Parse a YAML override file and merge it over the built-in tables.

    Args:
        yaml_path: Path to the YAML file, or None for defaults only.

    Returns:
        A MessageTables instance. If the file is missing or malformed the
        built-in defaults are returned.
    """
    tables = MessageTables()
    if yaml_path is None:
        return tables

    path = Path(yaml_path)
    if not path.exists():
        logger.warning("Message tables file not found at %s, using built-in defaults", yaml_path)
        return tables

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse message tables YAML at %s: %s", yaml_path, exc)
        return tables

    if not isinstance(raw, dict):
        logger.warning("Message tables YAML at %s is not a mapping, using built-in defaults", yaml_path)
        return tables

    try:
        overrides = MessageTables.model_validate(
            {
                **raw,
                "http_status": {**tables.http_status, **(raw.get("http_status") or {})},
                "server_code": {**tables.server_code, **(raw.get("server_code") or {})},
            }
        )
    except ValueError as exc:
        logger.error("Invalid message tables in %s: %s, using built-in defaults", yaml_path, exc)
        return tables

    return overrides
