"""Seed development data: sample portal users and a short lost-and-found thread."""
from __future__ import annotations

import asyncio
import logging

from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.ports.clock import Clock, SystemClock
from lostfound_chat.application.uow import UnitOfWork
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.entities.user import UserProfile
from lostfound_chat.infrastructure.db.models.user import UserModel
from lostfound_chat.infrastructure.db.session import create_tables
from lostfound_chat.infrastructure.db.uow import SqlAlchemyUoW
from lostfound_chat.services import message_service

logger = logging.getLogger(__name__)

SAMPLE_USERS = (
    UserProfile(id="u-finder", name="Priya Patel", email="priya.patel@uni.example"),
    UserProfile(id="u-owner", name="Tom Wright", email="tom.wright@uni.example"),
)

SAMPLE_THREAD = (
    (0, "Hi! I think I found your laptop bag in the library, 2nd floor."),
    (1, "That's mine, thank you so much! Is there a name tag on it?"),
    (0, "Yes, T. Wright. I left it at the front desk."),
)


async def seed_messages(uow: UnitOfWork, clock: Clock | None = None) -> list[Message]:
    """Send ``SAMPLE_THREAD`` between the sample users through the message service."""
    sent: list[Message] = []
    for sender_index, content in SAMPLE_THREAD:
        sender = SAMPLE_USERS[sender_index]
        recipient = SAMPLE_USERS[1 - sender_index]
        dto = SendMessageDTO(
            sender_id=sender.id,
            sender_name=sender.name,
            sender_email=sender.email,
            recipient_id=recipient.id,
            recipient_name=recipient.name,
            recipient_email=recipient.email,
            subject=f"Chat with {recipient.name}",
            content=content,
        )
        sent.append(await message_service.send_message(dto, uow, clock or SystemClock()))
    return sent


async def seed() -> None:
    await create_tables()
    async with SqlAlchemyUoW() as uow:
        for user in SAMPLE_USERS:
            await uow.session.merge(UserModel(id=user.id, name=user.name, email=user.email, avatar=user.avatar))
        await uow.commit()

        sent = await seed_messages(uow)
        logger.info("Seeded %d users and %d messages", len(SAMPLE_USERS), len(sent))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
