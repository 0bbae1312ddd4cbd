"""User resource API.

Declarative mapping from user operations to transport calls. Results are
validated into typed models; a payload that does not match the model is
reported through the client like any other failed call and resolves to None.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from envelope_client.models.envelope import PaginatedData
from envelope_client.models.user import UserItem, UserPayload
from envelope_client.transport.request import HttpRequest

T = TypeVar("T")

_USER = TypeAdapter(UserItem)
_USER_LIST = TypeAdapter(list[UserItem])
_USER_PAGE = TypeAdapter(PaginatedData[UserItem])


class UserApi:
    """User endpoints under ``/users``."""

    path = "/users"

    def __init__(self, request: HttpRequest) -> None:
        self._request = request

    def _item_path(self, user_id: int) -> str:
        return f"{self.path}/{user_id}"

    def _parse(self, adapter: TypeAdapter[T], data: Any, operation: str) -> T | None:
        if data is None:
            return None
        try:
            return adapter.validate_python(data)
        except ValidationError as exc:
            self._request.report_unexpected_payload(operation, exc)
            return None

    async def query(self, page: int, size: int) -> list[UserItem] | None:
        """List users: ``GET /users?page=&size=``."""
        data = await self._request.get(self.path, params={"page": page, "size": size})
        return self._parse(_USER_LIST, data, "users.query")

    async def query_page(self, page: int, size: int) -> PaginatedData[UserItem] | None:
        data = await self._request.get(f"{self.path}/page", params={"page": page, "size": size})
        return self._parse(_USER_PAGE, data, "users.query_page")

    async def get(self, user_id: int) -> UserItem | None:
        data = await self._request.get(self._item_path(user_id))
        return self._parse(_USER, data, "users.get")

    async def create(self, payload: UserPayload) -> UserItem | None:
        data = await self._request.post(self.path, json=payload.model_dump())
        return self._parse(_USER, data, "users.create")

    async def update(self, user_id: int, payload: UserPayload) -> UserItem | None:
        data = await self._request.put(self._item_path(user_id), json=payload.model_dump())
        return self._parse(_USER, data, "users.update")

    async def remove(self, user_id: int) -> Any:
        """Delete a user: ``DELETE /users/{id}``. Returns the envelope data."""
        return await self._request.delete(self._item_path(user_id))
