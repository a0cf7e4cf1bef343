"""The "can receive direct messages" capability."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pydsc.exceptions import DscError
from pydsc.models.message import Message, MessageCreate

if TYPE_CHECKING:
    from pydsc.messaging import DirectMessenger


def build_message(content: str | None = None, **fields: Any) -> MessageCreate:
    try:
        return MessageCreate(content=content, **fields)
    except ValidationError as exc:
        raise DscError(f"Invalid message: {exc}") from exc


class Messageable(abc.ABC):
    """Something that can receive messages through a DM channel.

    Implementers supply the id and the messenger that resolves the
    channel; :meth:`send` itself is shared.
    """

    @property
    @abc.abstractmethod
    def id(self) -> str: ...

    @abc.abstractmethod
    def _resolve_messenger(self) -> DirectMessenger: ...

    async def send(self, content: str | None = None, **fields: Any) -> Message:
        """Send a message to this target.

        Extra keyword arguments map to :class:`MessageCreate` fields
        (``embeds``, ``tts``, ``allowed_mentions``, ``nonce``, ``flags``).
        """
        payload = build_message(content, **fields)
        return await self._resolve_messenger().send(self.id, payload)
