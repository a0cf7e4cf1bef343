"""In-memory user store.

This is the only component that creates :class:`User` instances from
API records and merges later records into them. Merges for a given id
must not interleave; the store is meant to be driven from a single event
loop, where ``add``/``upsert`` run to completion without awaiting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from pydsc import snowflake
from pydsc._transport import Transport
from pydsc.cdn import AssetUrlBuilder, CdnUrlBuilder
from pydsc.events import UserUpdate
from pydsc.exceptions import DscError
from pydsc.messaging import DirectMessenger
from pydsc.models.channel import DMChannel
from pydsc.models.flags import UserFlags
from pydsc.models.user import User, UserPayload, to_user_payload

_logger = logging.getLogger(__name__)

UserResolvable = User | str | int


class UserStore:
    """Cache of users keyed by id, backed by the REST API for misses."""

    def __init__(
        self,
        transport: Transport,
        *,
        cdn: AssetUrlBuilder | None = None,
    ) -> None:
        self._transport = transport
        self._cdn: AssetUrlBuilder = cdn if cdn is not None else CdnUrlBuilder()
        self._users: dict[str, User] = {}
        self._dm_channels: dict[str, DMChannel] = {}
        self.messenger = DirectMessenger(self, transport)

    # ------------------------------------------------------------------
    # Cache access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __iter__(self) -> Iterator[User]:
        return iter(list(self._users.values()))

    def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def resolve(self, user: UserResolvable) -> User | None:
        if isinstance(user, User):
            return user
        return self._users.get(self.resolve_id(user))

    @staticmethod
    def resolve_id(user: UserResolvable) -> str:
        if isinstance(user, User):
            return user.id
        if isinstance(user, bool):
            raise TypeError("a user id cannot be a bool")
        return str(user)

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def _create(self, payload: UserPayload) -> User:
        return User(
            payload,
            cdn=self._cdn,
            store=self,
            messenger=self.messenger,
            timestamp_decoder=snowflake.timestamp_from,
        )

    def add(self, data: UserPayload | Mapping[str, Any], *, cache: bool = True) -> User:
        """Merge *data* into the cached user or create a new one."""
        payload = to_user_payload(data)
        existing = self._users.get(payload.id) if payload.id else None
        if existing is not None:
            existing._patch(payload)
            return existing

        user = self._create(payload)
        if cache:
            self._users[user.id] = user
            _logger.debug("Cached user id=%s partial=%s", user.id, user.partial)
        return user

    def upsert(self, data: UserPayload | Mapping[str, Any]) -> UserUpdate | None:
        """Merge *data* and describe the change, or return ``None`` if nothing changed.

        Suitable for translating gateway user updates into events: records
        that match the cached copy on every received field yield ``None``.
        """
        payload = to_user_payload(data)
        existing = self._users.get(payload.id) if payload.id else None
        if existing is None:
            return UserUpdate(before=None, after=self.add(payload))

        if existing.equals_payload(payload):
            existing._patch(payload)
            return None

        before = existing._update(payload)
        _logger.debug("User id=%s changed", existing.id)
        return UserUpdate(before=before, after=existing)

    # ------------------------------------------------------------------
    # Remote operations
    # ------------------------------------------------------------------

    async def fetch(self, user: UserResolvable, *, force: bool = False, cache: bool = True) -> User:
        """Return a full user, requesting it from the API unless cached."""
        user_id = self.resolve_id(user)
        if not force:
            existing = self._users.get(user_id)
            if existing is not None and not existing.partial:
                _logger.debug("User cache hit id=%s", user_id)
                return existing

        _logger.debug("Fetching user id=%s force=%s", user_id, force)
        data = await self._transport.request("GET", f"/users/{user_id}")
        return self.add(data, cache=cache)

    async def fetch_flags(self, user: UserResolvable, *, force: bool = False) -> UserFlags | None:
        """Return the public flags of a user, fetching them when unknown."""
        user_id = self.resolve_id(user)
        if not force:
            existing = self._users.get(user_id)
            if existing is not None and existing.flags is not None:
                return existing.flags
        fetched = await self.fetch(user_id, force=True)
        return fetched.flags

    def dm_channel(self, user: UserResolvable) -> DMChannel | None:
        """The cached DM channel with *user*, if one was created."""
        return self._dm_channels.get(self.resolve_id(user))

    async def create_dm(self, user: UserResolvable, *, force: bool = False) -> DMChannel:
        """Open (or reuse) the DM channel with *user*."""
        user_id = self.resolve_id(user)
        if not force:
            existing = self._dm_channels.get(user_id)
            if existing is not None:
                return existing

        data = await self._transport.request("POST", "/users/@me/channels", json={"recipient_id": user_id})
        channel = DMChannel.model_validate(data)
        for recipient in channel.recipients:
            if recipient.id:
                self.add(recipient)
        self._dm_channels[user_id] = channel
        _logger.debug("Opened DM channel=%s for user=%s", channel.id, user_id)
        return channel

    async def delete_dm(self, user: UserResolvable) -> DMChannel:
        """Close the cached DM channel with *user* and return it."""
        user_id = self.resolve_id(user)
        channel = self._dm_channels.get(user_id)
        if channel is None:
            raise DscError(f"No DM channel is cached for user {user_id}")

        await self._transport.request("DELETE", f"/channels/{channel.id}")
        self._dm_channels.pop(user_id, None)
        _logger.debug("Closed DM channel=%s for user=%s", channel.id, user_id)
        return channel
