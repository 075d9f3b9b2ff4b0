"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.exceptions import NotFoundError, TransientFetchError
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.entities.user import UserProfile
from lostfound_chat.domain.value_objects.enums import MessageStatus, MessageType
from lostfound_chat.services import message_service

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

ALICE = UserProfile(id="alice", name="Alice Smith", email="alice@uni.ac.uk", avatar="a.png")
BOB = UserProfile(id="bob", name="Bob Jones", email="bob@uni.ac.uk")
CAROL = UserProfile(id="carol", name="Carol King", email="carol@uni.ac.uk")


def make_message(
    *,
    sender: UserProfile = ALICE,
    recipient: UserProfile = BOB,
    content: str = "hello",
    at: datetime | int = T0,
    read: bool = False,
    status: MessageStatus = MessageStatus.DELIVERED,
    message_id: UUID | None = None,
    message_type: MessageType = MessageType.CHAT,
) -> Message:
    """``at`` may be a datetime or a number of minutes after T0."""
    ts = at if isinstance(at, datetime) else T0 + timedelta(minutes=at)
    return Message(
        id=message_id or uuid.uuid4(),
        sender_id=sender.id,
        sender_name=sender.name,
        sender_email=sender.email,
        recipient_id=recipient.id,
        recipient_name=recipient.name,
        recipient_email=recipient.email,
        subject=f"Chat with {recipient.name}",
        content=content,
        timestamp=ts,
        read=read,
        status=MessageStatus.SEEN if read else status,
        delivered_at=ts,
        seen_at=ts if read else None,
        message_type=message_type,
    )


def make_send_dto(
    *,
    sender: UserProfile = ALICE,
    recipient: UserProfile = BOB,
    content: str = "hello",
) -> SendMessageDTO:
    return SendMessageDTO(
        sender_id=sender.id,
        sender_name=sender.name,
        sender_email=sender.email,
        recipient_id=recipient.id,
        recipient_name=recipient.name,
        recipient_email=recipient.email,
        subject=f"Chat with {recipient.name}",
        content=content,
    )


@dataclass
class FakeClock:
    current: datetime = T0

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        for m in self._messages:
            if m.id == message_id:
                return m
        return None

    async def list_for_user(self, user_id: str) -> list[Message]:
        return sorted((m for m in self._messages if m.involves(user_id)), key=lambda m: m.timestamp)

    async def list_between(self, user_id: str, chat_with: str) -> list[Message]:
        pair = {user_id, chat_with}
        return sorted(
            (m for m in self._messages if {m.sender_id, m.recipient_id} == pair),
            key=lambda m: m.timestamp,
        )


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def create(self, message: Message) -> Message:
        self._reader._messages.append(message)
        return message

    async def update_status(self, message: Message) -> Message:
        for i, m in enumerate(self._reader._messages):
            if m.id == message.id:
                self._reader._messages[i] = message
                return message
        raise AssertionError("update of unknown message")

    async def mark_read(self, sender_id: str, recipient_id: str, seen_at: datetime) -> int:
        count = 0
        for i, m in enumerate(self._reader._messages):
            if m.sender_id == sender_id and m.recipient_id == recipient_id and not m.read:
                self._reader._messages[i] = replace(
                    m, read=True, status=MessageStatus.SEEN, seen_at=seen_at
                )
                count += 1
        return count


@dataclass
class FakeUserReader:
    _users: dict[str, UserProfile] = field(default_factory=dict)

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        return self._users.get(user_id)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    users: FakeUserReader = field(default_factory=FakeUserReader)
    _commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)

    @property
    def _committed(self) -> bool:
        return self._commits > 0

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._commits += 1

    async def rollback(self) -> None:
        pass


@dataclass
class InMemoryGateway:
    """MessageGateway backed by the store services and a FakeUoW.

    ``failures`` makes the next N fetches raise TransientFetchError.
    ``hold`` (when set) blocks fetches until the event is set; ``send_hold``
    and ``mark_hold`` do the same for sends and mark-as-read calls.
    """
    uow: FakeUoW = field(default_factory=FakeUoW)
    clock: FakeClock = field(default_factory=FakeClock)
    failures: int = 0
    send_failures: int = 0
    hold: asyncio.Event | None = None
    send_hold: asyncio.Event | None = None
    mark_hold: asyncio.Event | None = None
    fetches: int = 0
    mark_calls: list[tuple[str, str]] = field(default_factory=list)
    sent: list[SendMessageDTO] = field(default_factory=list)

    async def send_message(self, dto: SendMessageDTO) -> UUID:
        if self.send_hold is not None:
            await self.send_hold.wait()
        if self.send_failures:
            self.send_failures -= 1
            raise TransientFetchError("store unavailable")
        self.sent.append(dto)
        msg = await message_service.send_message(dto, self.uow, self.clock)
        return msg.id

    async def get_messages(self, user_id: str, chat_with: str | None = None) -> list[Message]:
        self.fetches += 1
        if self.hold is not None:
            await self.hold.wait()
        if self.failures:
            self.failures -= 1
            raise TransientFetchError("connection reset")
        return await message_service.list_messages(user_id, chat_with, self.uow)

    async def mark_messages_as_read(self, user_id: str, chat_with: str) -> int:
        self.mark_calls.append((user_id, chat_with))
        if self.mark_hold is not None:
            await self.mark_hold.wait()
        return await message_service.mark_messages_as_read(user_id, chat_with, self.uow, self.clock)

    async def update_message_status(self, message_id: UUID, status: MessageStatus | str) -> Message:
        return await message_service.update_message_status(message_id, status, self.uow, self.clock)

    def add(self, *messages: Message) -> None:
        self.uow.messages._messages.extend(messages)


@dataclass
class FakeUserDirectory:
    users: dict[str, UserProfile] = field(default_factory=dict)
    broken: set[str] = field(default_factory=set)
    delay: float = 0.0
    lookups: list[str] = field(default_factory=list)

    async def get_user(self, user_id: str) -> UserProfile:
        self.lookups.append(user_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if user_id in self.broken:
            raise TransientFetchError("user service down")
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@pytest.fixture
def gateway(clock: FakeClock) -> InMemoryGateway:
    return InMemoryGateway(clock=clock)


@pytest.fixture
def directory() -> FakeUserDirectory:
    return FakeUserDirectory(users={u.id: u for u in (ALICE, BOB, CAROL)})
