"""Composition root: builds the client from settings and runs a demo call.

Usage:
    APP_API_PREFIX=https://api.example.com python -m envelope_client.main
"""

from __future__ import annotations

import asyncio
import logging

from envelope_client.api.user import UserApi
from envelope_client.config.messages import load_message_tables
from envelope_client.config.settings import ClientSettings
from envelope_client.integration.notifier import Notifier
from envelope_client.integration.token_store import TokenStore
from envelope_client.logging_config import configure_logging
from envelope_client.models.user import UserItem
from envelope_client.transport.request import HttpRequest

logger = logging.getLogger(__name__)


def create_client(
    settings: ClientSettings,
    notifier: Notifier | None = None,
    token_store: TokenStore | None = None,
    **kwargs: object,
) -> HttpRequest:
    """Build the application's HttpRequest from settings.

    Settings are read once here; the returned client is owned by the caller
    and must be closed with ``aclose()``.
    """
    tables = load_message_tables(settings.messages_path)
    return HttpRequest.from_settings(
        settings,
        message_tables=tables,
        notifier=notifier,
        token_store=token_store,
        **kwargs,
    )


async def get_user_list(user_api: UserApi) -> list[UserItem] | None:
    """Fetch the first page of users and log it when the call succeeded."""
    user_list = await user_api.query(page=1, size=10)
    if user_list is not None:
        logger.info("Fetched %d users: %s", len(user_list), [u.name for u in user_list])
    return user_list


async def main() -> None:
    settings = ClientSettings()  # type: ignore[call-arg]
    configure_logging(settings.log_level)
    logger.info("Using API prefix %s", settings.api_prefix)

    async with create_client(settings) as request:
        await get_user_list(UserApi(request))


if __name__ == "__main__":
    asyncio.run(main())
