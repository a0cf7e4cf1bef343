"""Direct-message delivery.

Entities implement :class:`Messageable`; a :class:`DirectMessenger`
resolves the DM channel through the store and posts the message.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydsc._transport import Transport
from pydsc.models.message import Message, MessageCreate
from pydsc.models.messageable import Messageable, build_message

if TYPE_CHECKING:
    from pydsc.store import UserStore

__all__ = ["DirectMessenger", "Messageable", "build_message"]

_logger = logging.getLogger(__name__)


class DirectMessenger:
    """Deliver messages to users over their DM channel."""

    def __init__(self, store: UserStore, transport: Transport) -> None:
        self._store = store
        self._transport = transport

    async def send(self, user_id: str, payload: MessageCreate) -> Message:
        channel = await self._store.create_dm(user_id)
        endpoint = f"/channels/{channel.id}/messages"
        _logger.debug("Sending DM to user=%s channel=%s", user_id, channel.id)
        data = await self._transport.request(
            "POST",
            endpoint,
            json=payload.model_dump(exclude_none=True),
        )
        message = Message.model_validate(data)
        if message.author is not None:
            self._store.add(message.author)
        return message
