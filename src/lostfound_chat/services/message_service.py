from __future__ import annotations

import logging
import uuid

from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.exceptions import NotFoundError
from lostfound_chat.application.policies.validation import assert_sendable, parse_status
from lostfound_chat.application.ports.clock import Clock, SystemClock
from lostfound_chat.application.uow import UnitOfWork
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus

logger = logging.getLogger(__name__)

_default_clock = SystemClock()


async def send_message(
    dto: SendMessageDTO,
    uow: UnitOfWork,
    clock: Clock = _default_clock,
) -> Message:
    """Store a new message.

    The message is stored as ``delivered``, with ``delivered_at`` equal to its
    timestamp.
    """
    assert_sendable(dto)

    now = clock.now()
    msg = Message(
        id=uuid.uuid4(),
        sender_id=dto.sender_id,
        sender_name=dto.sender_name,
        sender_email=dto.sender_email,
        recipient_id=dto.recipient_id,
        recipient_name=dto.recipient_name,
        recipient_email=dto.recipient_email,
        subject=dto.subject,
        content=dto.content,
        message_type=dto.message_type,
        timestamp=now,
        read=False,
        status=MessageStatus.SENT,
    ).advance_to(MessageStatus.DELIVERED, now)

    msg = await uow.messages_w.create(msg)
    await uow.commit()
    logger.info("Message %s stored (%s -> %s)", msg.id, msg.sender_id, msg.recipient_id)
    return msg


async def list_messages(
    user_id: str,
    chat_with: str | None,
    uow: UnitOfWork,
) -> list[Message]:
    if chat_with:
        return await uow.messages.list_between(user_id, chat_with)
    return await uow.messages.list_for_user(user_id)


async def mark_messages_as_read(
    user_id: str,
    chat_with: str,
    uow: UnitOfWork,
    clock: Clock = _default_clock,
) -> int:
    count = await uow.messages_w.mark_read(chat_with, user_id, clock.now())
    if count:
        await uow.commit()
        logger.info("Marked %d messages from %s to %s as seen", count, chat_with, user_id)
    return count


async def update_message_status(
    message_id: uuid.UUID,
    status: MessageStatus | str,
    uow: UnitOfWork,
    clock: Clock = _default_clock,
) -> Message:
    new_status = parse_status(status)
    msg = await uow.messages.get_by_id(message_id)
    if msg is None:
        raise NotFoundError("Message not found")

    updated = msg.advance_to(new_status, clock.now())
    if updated is msg:
        logger.debug("Message %s already at %s, ignoring %s", msg.id, msg.status, new_status)
        return msg

    updated = await uow.messages_w.update_status(updated)
    await uow.commit()
    return updated
