from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus
from lostfound_chat.infrastructure.db.mappers import message as mapper
from lostfound_chat.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: UUID) -> Message | None:
        model = await self._session.get(MessageModel, message_id)
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: str) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(
                or_(
                    MessageModel.sender_id == user_id,
                    MessageModel.recipient_id == user_id,
                )
            )
            .order_by(MessageModel.timestamp.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_between(self, user_id: str, chat_with: str) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(
                or_(
                    and_(MessageModel.sender_id == user_id, MessageModel.recipient_id == chat_with),
                    and_(MessageModel.sender_id == chat_with, MessageModel.recipient_id == user_id),
                )
            )
            .order_by(MessageModel.timestamp.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update_status(self, message: Message) -> Message:
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == message.id)
            .values(
                status=message.status.value,
                read=message.read,
                delivered_at=message.delivered_at,
                seen_at=message.seen_at,
            )
            .returning(MessageModel)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    async def mark_read(self, sender_id: str, recipient_id: str, seen_at: datetime) -> int:
        stmt = (
            update(MessageModel)
            .where(
                MessageModel.sender_id == sender_id,
                MessageModel.recipient_id == recipient_id,
                MessageModel.read.is_(False),
            )
            .values(
                read=True,
                status=MessageStatus.SEEN.value,
                seen_at=seen_at,
                delivered_at=func.coalesce(MessageModel.delivered_at, seen_at),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0
