"""Public user flags."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator


class UserFlag(enum.IntFlag):
    """Known public flag bits of a user account."""

    STAFF = 1 << 0
    PARTNER = 1 << 1
    HYPESQUAD = 1 << 2
    BUG_HUNTER_LEVEL_1 = 1 << 3
    MFA_SMS = 1 << 4
    PREMIUM_PROMO_DISMISSED = 1 << 5
    HYPESQUAD_ONLINE_HOUSE_1 = 1 << 6
    HYPESQUAD_ONLINE_HOUSE_2 = 1 << 7
    HYPESQUAD_ONLINE_HOUSE_3 = 1 << 8
    PREMIUM_EARLY_SUPPORTER = 1 << 9
    TEAM_PSEUDO_USER = 1 << 10
    HAS_UNREAD_URGENT_MESSAGES = 1 << 13
    BUG_HUNTER_LEVEL_2 = 1 << 14
    VERIFIED_BOT = 1 << 16
    VERIFIED_DEVELOPER = 1 << 17
    CERTIFIED_MODERATOR = 1 << 18
    BOT_HTTP_INTERACTIONS = 1 << 19
    SPAMMER = 1 << 20
    ACTIVE_DEVELOPER = 1 << 22
    QUARANTINED = 1 << 44
    COLLABORATOR = 1 << 50
    RESTRICTED_COLLABORATOR = 1 << 51


class UserFlags:
    """Immutable bit container over :class:`UserFlag`.

    Unknown bits are preserved in :attr:`bitfield` so equality checks
    against raw API integers stay exact even for flags this library does
    not name yet.
    """

    __slots__ = ("_bitfield",)

    def __init__(self, bits: int | UserFlag | Iterable[UserFlag] = 0) -> None:
        if isinstance(bits, bool):
            raise TypeError("flags must be an int, not bool")
        if isinstance(bits, int):
            value = int(bits)
        else:
            value = 0
            for flag in bits:
                value |= int(flag)
        if value < 0:
            raise ValueError(f"flags must be non-negative, got {value}")
        self._bitfield = value

    @property
    def bitfield(self) -> int:
        return self._bitfield

    def has(self, flag: UserFlag | int) -> bool:
        bit = int(flag)
        return self._bitfield & bit == bit

    def any(self, flag: UserFlag | int) -> bool:
        return bool(self._bitfield & int(flag))

    def to_list(self) -> list[UserFlag]:
        return [flag for flag in UserFlag if self.has(flag)]

    def serialize(self) -> dict[str, bool]:
        return {flag.name: self.has(flag) for flag in UserFlag if flag.name is not None}

    def __iter__(self) -> Iterator[UserFlag]:
        return iter(self.to_list())

    def __contains__(self, flag: object) -> bool:
        return isinstance(flag, int) and self.has(flag)

    def __int__(self) -> int:
        return self._bitfield

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UserFlags):
            return self._bitfield == other._bitfield
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._bitfield)

    def __repr__(self) -> str:
        names = "|".join(flag.name for flag in self.to_list() if flag.name) or "0"
        return f"UserFlags({names})"
