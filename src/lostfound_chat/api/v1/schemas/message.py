from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from lostfound_chat.api.v1.schemas.common import CamelModel
from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.ports.clock import as_utc
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus, MessageType


class SendMessageRequest(CamelModel):
    sender_id: str
    sender_name: str = ""
    sender_email: str = ""
    recipient_id: str = ""
    recipient_name: str = ""
    recipient_email: str = ""
    subject: str = ""
    content: str = ""
    message_type: MessageType = MessageType.CHAT

    def to_dto(self) -> SendMessageDTO:
        return SendMessageDTO(**self.model_dump())


class MarkAsReadRequest(CamelModel):
    user_id: str
    chat_with: str


class UpdateStatusRequest(CamelModel):
    # Checked by the service so an unknown value maps to 400, not 422.
    status: str


class MessageResponse(CamelModel):
    id: UUID
    sender_id: str
    sender_name: str = ""
    sender_email: str = ""
    recipient_id: str
    recipient_name: str = ""
    recipient_email: str = ""
    subject: str = ""
    content: str
    timestamp: datetime
    read: bool = False
    status: MessageStatus = MessageStatus.SENT
    delivered_at: datetime | None = None
    seen_at: datetime | None = None
    message_type: MessageType = MessageType.CHAT

    @field_validator("timestamp", "delivered_at", "seen_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    def to_entity(self) -> Message:
        return Message(**dict(self))
