from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from lostfound_chat.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_for_user(self, user_id: str) -> list[Message]:
        """Every message the user sent or received, oldest first."""
        ...

    async def list_between(self, user_id: str, chat_with: str) -> list[Message]:
        """Both directions of a two-party thread, oldest first."""
        ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...

    async def update_status(self, message: Message) -> Message:
        """Persist status, read flag and transition timestamps of ``message``."""
        ...

    async def mark_read(self, sender_id: str, recipient_id: str, seen_at: datetime) -> int:
        """Flag unread messages from sender to recipient as seen. Returns rows updated."""
        ...
