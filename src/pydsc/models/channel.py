"""Direct-message channel model."""

from __future__ import annotations

from pydantic import Field

from pydsc.models._base import DscBaseModel, Snowflake
from pydsc.models.user import UserPayload

DM_CHANNEL_TYPE = 1


class DMChannel(DscBaseModel):
    """A one-to-one direct-message channel."""

    id: Snowflake
    type: int = DM_CHANNEL_TYPE
    last_message_id: Snowflake | None = None
    recipients: list[UserPayload] = Field(default_factory=list)

    @property
    def recipient_id(self) -> str | None:
        for recipient in self.recipients:
            if recipient.id:
                return recipient.id
        return None
