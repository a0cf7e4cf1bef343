"""Message models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pydsc.models._base import DscBaseModel, Snowflake


class MessageCreate(BaseModel):
    """Body of a create-message request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content: str | None = None
    tts: bool = False
    embeds: list[dict[str, Any]] | None = None
    allowed_mentions: dict[str, Any] | None = None
    nonce: str | int | None = None
    flags: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _require_body(self) -> MessageCreate:
        if not self.content and not self.embeds:
            raise ValueError("a message needs content or at least one embed")
        return self


class Message(DscBaseModel):
    """A message as returned by the API."""

    id: Snowflake
    channel_id: Snowflake
    content: str = ""
    timestamp: datetime | None = None
    author: dict[str, Any] | None = None
    """Raw author record; feed it to :meth:`pydsc.store.UserStore.add`."""
