from __future__ import annotations

from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus, MessageType
from lostfound_chat.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender_id=model.sender_id,
        sender_name=model.sender_name,
        sender_email=model.sender_email,
        recipient_id=model.recipient_id,
        recipient_name=model.recipient_name,
        recipient_email=model.recipient_email,
        subject=model.subject,
        content=model.content,
        timestamp=model.timestamp,
        read=model.read,
        status=MessageStatus(model.status),
        delivered_at=model.delivered_at,
        seen_at=model.seen_at,
        message_type=MessageType(model.message_type),
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        sender_id=entity.sender_id,
        sender_name=entity.sender_name,
        sender_email=entity.sender_email,
        recipient_id=entity.recipient_id,
        recipient_name=entity.recipient_name,
        recipient_email=entity.recipient_email,
        subject=entity.subject,
        content=entity.content,
        timestamp=entity.timestamp,
        read=entity.read,
        status=entity.status.value,
        delivered_at=entity.delivered_at,
        seen_at=entity.seen_at,
        message_type=entity.message_type.value,
    )
