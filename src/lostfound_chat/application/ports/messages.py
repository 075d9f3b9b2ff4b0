from __future__ import annotations

from typing import Protocol
from uuid import UUID

from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus


class MessageGateway(Protocol):
    """What chat sessions, pollers and the aggregator need from the message store."""

    async def send_message(self, dto: SendMessageDTO) -> UUID: ...

    async def get_messages(self, user_id: str, chat_with: str | None = None) -> list[Message]: ...

    async def mark_messages_as_read(self, user_id: str, chat_with: str) -> int: ...

    async def update_message_status(self, message_id: UUID, status: MessageStatus | str) -> Message: ...
