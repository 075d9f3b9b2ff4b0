from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from lostfound_chat.domain.value_objects.enums import MessageStatus, MessageType


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    sender_id: str
    sender_name: str
    sender_email: str
    recipient_id: str
    recipient_name: str
    recipient_email: str
    subject: str
    content: str
    timestamp: datetime
    read: bool = False
    status: MessageStatus = MessageStatus.SENT
    delivered_at: datetime | None = None
    seen_at: datetime | None = None
    message_type: MessageType = MessageType.CHAT

    def involves(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.recipient_id)

    def partner_of(self, user_id: str) -> str:
        """Id of the other party, as seen by ``user_id``."""
        return self.sender_id if self.recipient_id == user_id else self.recipient_id

    def advance_to(self, status: MessageStatus, now: datetime) -> Message:
        """Return a copy moved forward to ``status``.

        Requests that would move the status backwards (or keep it) leave the
        message unchanged.
        """
        if status.rank <= self.status.rank:
            return self
        if status == MessageStatus.SEEN:
            return replace(
                self,
                status=status,
                read=True,
                seen_at=now,
                delivered_at=self.delivered_at or now,
            )
        return replace(self, status=status, delivered_at=now)
