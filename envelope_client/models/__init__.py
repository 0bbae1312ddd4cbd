"""Public models for the HTTP client."""

from envelope_client.models.envelope import PaginatedData, ResponseEnvelope
from envelope_client.models.user import UserItem, UserPayload

__all__ = [
    "PaginatedData",
    "ResponseEnvelope",
    "UserItem",
    "UserPayload",
]
