"""Change events produced when records are merged into the store."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from pydsc.models.user import User


class UserUpdate(BaseModel):
    """A merge that changed a cached user.

    ``before`` is ``None`` when the user was not cached yet. ``before`` is
    a detached clone; ``after`` is the live cached instance.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    before: Any = None
    after: Any
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_new(self) -> bool:
        return self.before is None

    def changed_fields(self) -> set[str]:
        """Names of mirrored fields whose value differs between the snapshots."""
        if self.before is None:
            return set()
        before: User = self.before
        after: User = self.after
        names = ("username", "discriminator", "avatar", "banner", "accent_color", "bot", "system")
        changed = {name for name in names if getattr(before, name) != getattr(after, name)}
        if before.flags != after.flags:
            changed.add("flags")
        return changed
