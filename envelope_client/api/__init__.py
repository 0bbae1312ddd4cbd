"""Per-resource API modules."""

from envelope_client.api.user import UserApi

__all__ = ["UserApi"]
