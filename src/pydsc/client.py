"""High-level async client."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pydsc._transport import RestTransport
from pydsc.cdn import CdnUrlBuilder
from pydsc.config import DscConfig
from pydsc.exceptions import DscError
from pydsc.store import UserStore

_logger = logging.getLogger(__name__)


class DscClient:
    """Async client owning the HTTP session, the CDN builder and the user store.

    Usage::

        async with DscClient(DscConfig.from_env()) as client:
            user = await client.users.fetch("80351110224678912")
            print(user.tag, user.display_avatar_url(size=256))
    """

    def __init__(
        self,
        config: DscConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or DscConfig()
        self._external_session = session is not None
        self._http_session = session
        self.cdn = CdnUrlBuilder.from_config(self._config)
        self._users: UserStore | None = None

    @property
    def config(self) -> DscConfig:
        return self._config

    @property
    def users(self) -> UserStore:
        if self._users is None:
            raise DscError("Client not initialized. Use 'async with DscClient(...) as client:'")
        return self._users

    async def __aenter__(self) -> DscClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        transport = RestTransport(self._config, self._http_session)
        self._users = UserStore(transport, cdn=self.cdn)
        _logger.debug("Client started api_url=%s", self._config.api_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._users = None
