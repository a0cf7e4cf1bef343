"""User record and the locally mirrored user entity.

A :class:`User` may be *partial* (only the id is known, e.g. from a
mention) or *full* (populated by a REST fetch or a gateway event). Each
incoming record is merged with :meth:`User._patch` under per-field rules:

* ``username``, ``discriminator``, ``avatar``: set when present (even to
  ``None``), otherwise kept.
* ``bot``, ``system``: set when present; once the user is no longer
  partial an absent key means ``False``. While partial they stay ``None``.
* ``banner``, ``accent_color``: only returned by a forced fetch. They start
  as :data:`NOT_FETCHED`, change only when present in a record and an
  explicit ``None`` is never reverted to :data:`NOT_FETCHED`.
* ``flags``: rebuilt from ``public_flags`` whenever present.
"""

from __future__ import annotations

import copy
import enum
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Literal, TypeVar

from pydantic import field_validator

from pydsc import snowflake
from pydsc.cdn import AssetUrlBuilder, CdnUrlBuilder
from pydsc.exceptions import DscError, DscInvalidDerivedInputError, DscMissingIdError
from pydsc.models._base import DscBaseModel, Snowflake
from pydsc.models.flags import UserFlags
from pydsc.models.messageable import Messageable

if TYPE_CHECKING:
    from pydsc.messaging import DirectMessenger
    from pydsc.models.channel import DMChannel
    from pydsc.store import UserStore


class Unfetched(enum.Enum):
    """Marker for a field that was never requested from the API."""

    NOT_FETCHED = "NOT_FETCHED"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FETCHED"


NOT_FETCHED = Unfetched.NOT_FETCHED

T = TypeVar("T")

Fetchable = T | None | Literal[Unfetched.NOT_FETCHED]
"""A value, ``None`` (known to be absent) or :data:`NOT_FETCHED`."""

_DEFAULT_CDN = CdnUrlBuilder()
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class UserPayload(DscBaseModel):
    """User object as sent by the REST API and gateway.

    Every field is optional so sparse gateway updates validate too; use
    :meth:`has` to tell an omitted key from an explicit ``null``.
    """

    id: Snowflake | None = None
    username: str | None = None
    discriminator: str | None = None
    avatar: str | None = None
    banner: str | None = None
    accent_color: int | None = None
    bot: bool = False
    system: bool = False
    public_flags: int | None = None

    @field_validator("discriminator", mode="before")
    @classmethod
    def _coerce_discriminator(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return f"{value:04d}"
        return value

    @field_validator("bot", "system", mode="before")
    @classmethod
    def _coerce_truthy(cls, value: Any) -> bool:
        return bool(value)


def to_user_payload(data: UserPayload | Mapping[str, Any]) -> UserPayload:
    if isinstance(data, UserPayload):
        return data
    if isinstance(data, Mapping):
        return UserPayload.model_validate(dict(data))
    raise TypeError(f"expected a user record mapping, got {type(data).__name__}")


class User(Messageable):
    """A user mirrored from the API.

    Collaborators are injected rather than reached through a global
    client: *cdn* builds image URLs, *timestamp_decoder* turns the id into
    epoch milliseconds, *store* serves fetches and DM channels and
    *messenger* delivers :meth:`send`. Only *cdn* and *timestamp_decoder*
    have defaults; the network-backed operations raise :class:`DscError`
    on an unbound user.
    """

    def __init__(
        self,
        data: UserPayload | Mapping[str, Any],
        *,
        cdn: AssetUrlBuilder | None = None,
        store: UserStore | None = None,
        messenger: DirectMessenger | None = None,
        timestamp_decoder: Callable[[str], int] = snowflake.timestamp_from,
    ) -> None:
        payload = to_user_payload(data)
        if not payload.id:
            raise DscMissingIdError("A user record must contain an 'id'")

        self._cdn = cdn if cdn is not None else _DEFAULT_CDN
        self._store = store
        self._messenger = messenger
        self._timestamp_decoder = timestamp_decoder

        self._id: str = payload.id
        self.username: str | None = None
        self.discriminator: str | None = None
        self.avatar: str | None = None
        self.bot: bool | None = None
        self.system: bool | None = None
        self.banner: Fetchable[str] = NOT_FETCHED
        self.accent_color: Fetchable[int] = NOT_FETCHED
        self.flags: UserFlags | None = None

        self._patch(payload)

    @property
    def id(self) -> str:
        return self._id

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def _patch(self, data: UserPayload | Mapping[str, Any]) -> None:
        """Merge a full or sparse record into this user in place."""
        payload = to_user_payload(data)

        if payload.has("username"):
            self.username = payload.username

        # Runs after username so a full record settles partiality first.
        if payload.has("bot"):
            self.bot = payload.bot
        elif not self.partial and not isinstance(self.bot, bool):
            self.bot = False

        if payload.has("discriminator"):
            self.discriminator = payload.discriminator

        if payload.has("avatar"):
            self.avatar = payload.avatar

        if payload.has("banner"):
            self.banner = payload.banner

        if payload.has("accent_color"):
            self.accent_color = payload.accent_color

        if payload.has("system"):
            self.system = payload.system
        elif not self.partial and not isinstance(self.system, bool):
            self.system = False

        if payload.has("public_flags"):
            self.flags = UserFlags(payload.public_flags) if payload.public_flags is not None else None

    def _clone(self) -> User:
        return copy.copy(self)

    def _update(self, data: UserPayload | Mapping[str, Any]) -> User:
        """Patch in place and return a clone of the state before the patch."""
        before = self._clone()
        self._patch(data)
        return before

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def partial(self) -> bool:
        """Whether only a stub of this user is known (no username yet)."""
        return not isinstance(self.username, str)

    @property
    def created_timestamp(self) -> int:
        """Creation time in epoch milliseconds, decoded from the id."""
        return self._timestamp_decoder(self.id)

    @property
    def created_at(self) -> datetime:
        return _EPOCH + timedelta(milliseconds=self.created_timestamp)

    def avatar_url(self, **options: Any) -> str | None:
        """URL of the custom avatar, or ``None`` when the user has none.

        *options* are image URL options (``extension``, ``size``,
        ``force_static``).
        """
        if not self.avatar:
            return None
        return self._cdn.avatar(self.id, self.avatar, options)

    @property
    def default_avatar_url(self) -> str:
        """URL of the default avatar picked by ``discriminator % 5``.

        Raises :class:`DscInvalidDerivedInputError` when the discriminator
        is missing or not a base-10 number.
        """
        return self._cdn.default_avatar(self._default_avatar_index())

    def _default_avatar_index(self) -> int:
        discriminator = self.discriminator
        if not isinstance(discriminator, str):
            raise DscInvalidDerivedInputError(
                f"User {self.id} has no discriminator to derive a default avatar from",
                field="discriminator",
                value=discriminator,
            )
        try:
            return int(discriminator, 10) % 5
        except ValueError as exc:
            raise DscInvalidDerivedInputError(
                f"User {self.id} has a non-numeric discriminator {discriminator!r}",
                field="discriminator",
                value=discriminator,
            ) from exc

    def display_avatar_url(self, **options: Any) -> str:
        """The custom avatar URL if there is one, else the default avatar URL."""
        url = self.avatar_url(**options)
        if url is not None:
            return url
        return self.default_avatar_url

    @property
    def hex_accent_color(self) -> Fetchable[str]:
        """Accent color as ``#rrggbb``; ``None``/:data:`NOT_FETCHED` pass through.

        Only the low 24 bits are used.
        """
        color = self.accent_color
        if not isinstance(color, int) or isinstance(color, bool):
            return color
        return f"#{color & 0xFFFFFF:06x}"

    def banner_url(self, **options: Any) -> Fetchable[str]:
        """URL of the banner; ``None``/:data:`NOT_FETCHED` pass through.

        The banner is only known after a forced :meth:`fetch`.
        """
        banner = self.banner
        if banner is None or banner is NOT_FETCHED:
            return banner
        return self._cdn.banner(self.id, banner, options)

    @property
    def tag(self) -> str | None:
        """``username#discriminator``, or ``None`` for a partial user.

        A full user without a discriminator is tagged by username alone.
        """
        if not isinstance(self.username, str):
            return None
        if self.discriminator is None:
            return self.username
        return f"{self.username}#{self.discriminator}"

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def equals(self, other: User | None) -> bool:
        """Compare every mirrored field with another user.

        Only id, username, discriminator, avatar, flags, banner and accent
        color take part. To check identity, compare ``a.id == b.id``.
        """
        if not isinstance(other, User):
            return False
        return (
            self.id == other.id
            and self.username == other.username
            and self.discriminator == other.discriminator
            and self.avatar == other.avatar
            and _bitfield(self.flags) == _bitfield(other.flags)
            and self.banner == other.banner
            and self.accent_color == other.accent_color
        )

    def equals_payload(self, data: UserPayload | Mapping[str, Any] | None) -> bool:
        """Compare with a raw API record without patching.

        Keys missing from the record cannot disprove equality and are
        skipped.
        """
        if data is None:
            return False
        payload = to_user_payload(data)
        if payload.id != self.id:
            return False
        checks = (
            ("username", self.username, payload.username),
            ("discriminator", self.discriminator, payload.discriminator),
            ("avatar", self.avatar, payload.avatar),
            ("public_flags", _bitfield(self.flags), payload.public_flags),
            ("banner", self.banner, payload.banner),
            ("accent_color", self.accent_color, payload.accent_color),
        )
        return all(ours == theirs for name, ours, theirs in checks if payload.has(name))

    # ------------------------------------------------------------------
    # Store delegation
    # ------------------------------------------------------------------

    def _require_store(self) -> UserStore:
        if self._store is None:
            raise DscError("User is not bound to a store")
        return self._store

    def _resolve_messenger(self) -> DirectMessenger:
        if self._messenger is None:
            raise DscError("User is not bound to a messenger")
        return self._messenger

    @property
    def dm_channel(self) -> DMChannel | None:
        """The cached DM channel with this user, if any."""
        return self._require_store().dm_channel(self.id)

    async def create_dm(self, force: bool = False) -> DMChannel:
        return await self._require_store().create_dm(self.id, force=force)

    async def delete_dm(self) -> DMChannel:
        return await self._require_store().delete_dm(self.id)

    async def fetch(self, force: bool = True) -> User:
        """Fetch this user; forced by default so banner and accent color load."""
        return await self._require_store().fetch(self.id, force=force)

    async def fetch_flags(self, force: bool = False) -> UserFlags | None:
        return await self._require_store().fetch_flags(self.id, force=force)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of stored and derived values, computed now.

        Fields never fetched are left out instead of being reported as
        ``None``.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "discriminator": self.discriminator,
            "avatar": self.avatar,
            "bot": self.bot,
            "system": self.system,
            "flags": _bitfield(self.flags),
        }
        if self.banner is not NOT_FETCHED:
            data["banner"] = self.banner
            data["banner_url"] = self.banner_url()
        if self.accent_color is not NOT_FETCHED:
            data["accent_color"] = self.accent_color
            data["hex_accent_color"] = self.hex_accent_color

        try:
            default_url: str | None = self.default_avatar_url
        except DscInvalidDerivedInputError:
            default_url = None
        avatar_url = self.avatar_url()

        data["created_timestamp"] = self.created_timestamp
        data["tag"] = self.tag
        data["default_avatar_url"] = default_url
        data["avatar_url"] = avatar_url
        data["display_avatar_url"] = avatar_url if avatar_url is not None else default_url
        return data

    def __str__(self) -> str:
        return f"<@{self.id}>"

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r}, partial={self.partial})"


def _bitfield(flags: UserFlags | None) -> int | None:
    return flags.bitfield if flags is not None else None
