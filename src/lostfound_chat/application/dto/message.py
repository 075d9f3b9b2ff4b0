from __future__ import annotations

from dataclasses import dataclass

from lostfound_chat.domain.value_objects.enums import MessageType


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    sender_id: str
    sender_name: str
    sender_email: str
    recipient_id: str
    recipient_name: str
    recipient_email: str
    subject: str
    content: str
    message_type: MessageType = MessageType.CHAT
