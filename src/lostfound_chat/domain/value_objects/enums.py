from __future__ import annotations

from enum import StrEnum


class MessageStatus(StrEnum):
    SENT = "sent"
    DELIVERED = "delivered"
    SEEN = "seen"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = (MessageStatus.SENT, MessageStatus.DELIVERED, MessageStatus.SEEN)


class MessageType(StrEnum):
    """Chat messages belong to a thread; email messages come from the profile page contact form."""

    CHAT = "chat"
    EMAIL = "email"
