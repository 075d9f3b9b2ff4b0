"""HTTP clients against the real app over an in-process ASGI transport."""
from __future__ import annotations

import uuid
from dataclasses import replace

import httpx
import pytest
import pytest_asyncio

from lostfound_chat.api.deps import get_clock, get_uow
from lostfound_chat.app import create_app
from lostfound_chat.application.exceptions import (
    InvalidStatusError,
    NotFoundError,
    TransientFetchError,
    ValidationError,
)
from lostfound_chat.domain.value_objects.enums import MessageStatus, MessageType
from lostfound_chat.infrastructure.http.message_client import MessageClient
from lostfound_chat.infrastructure.http.user_client import UserClient
from lostfound_chat.request_id import correlation_id_ctx
from lostfound_chat.services import conversation_service
from tests.conftest import ALICE, BOB, CAROL, FakeClock, FakeUoW, make_message, make_send_dto

BASE_URL = "http://test/api"


@pytest.fixture
def store():
    app = create_app()
    uow = FakeUoW()
    uow.users._users.update({u.id: u for u in (ALICE, BOB)})
    clock = FakeClock()

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    app.dependency_overrides[get_clock] = lambda: clock
    return app, uow


@pytest_asyncio.fixture
async def messages(store):
    app, _ = store
    async with MessageClient(BASE_URL, transport=httpx.ASGITransport(app=app)) as client:
        yield client


@pytest_asyncio.fixture
async def users(store):
    app, _ = store
    async with UserClient(BASE_URL, transport=httpx.ASGITransport(app=app)) as client:
        yield client


@pytest.mark.asyncio
async def test_send_then_fetch_thread(messages):
    message_id = await messages.send_message(make_send_dto(content="Hello"))

    thread = await messages.get_messages(ALICE.id, BOB.id)

    assert [m.id for m in thread] == [message_id]
    assert thread[0].content == "Hello"
    assert thread[0].read is False
    assert thread[0].status == MessageStatus.DELIVERED
    assert thread[0].timestamp.tzinfo is not None


@pytest.mark.asyncio
async def test_mark_as_read_and_status_update(messages, store):
    _, uow = store
    inbound = make_message(sender=ALICE, recipient=BOB)
    uow.messages._messages.append(inbound)

    assert await messages.mark_messages_as_read(BOB.id, ALICE.id) == 1
    assert await messages.mark_messages_as_read(BOB.id, ALICE.id) == 0

    updated = await messages.update_message_status(inbound.id, "delivered")
    assert updated.status == MessageStatus.SEEN


@pytest.mark.asyncio
async def test_client_rejects_blank_content_without_calling_store(messages, store):
    _, uow = store

    with pytest.raises(ValidationError):
        await messages.send_message(make_send_dto(content="  "))

    assert uow.messages._messages == []


@pytest.mark.asyncio
async def test_client_rejects_unknown_status(messages):
    with pytest.raises(InvalidStatusError):
        await messages.update_message_status(uuid.uuid4(), "archived")


@pytest.mark.asyncio
async def test_store_404_maps_to_not_found(messages, users):
    with pytest.raises(NotFoundError):
        await messages.update_message_status(uuid.uuid4(), "seen")
    with pytest.raises(NotFoundError):
        await users.get_user("nobody")


@pytest.mark.asyncio
async def test_get_user(users):
    profile = await users.get_user(ALICE.id)
    assert profile == ALICE


@pytest.mark.asyncio
async def test_conversations_over_http(messages, users, store):
    _, uow = store
    uow.messages._messages.extend(
        [
            make_message(sender=ALICE, recipient=BOB, at=1),
            make_message(sender=CAROL, recipient=BOB, at=2),
        ]
    )

    convs = await conversation_service.load_conversations(BOB.id, messages, users)

    assert [c.partner_id for c in convs] == [CAROL.id, ALICE.id]
    assert convs[1].partner == ALICE
    assert convs[0].partner.name == CAROL.name


@pytest.mark.asyncio
async def test_network_failure_is_transient():
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with MessageClient(BASE_URL, transport=httpx.MockTransport(_refuse)) as client:
        with pytest.raises(TransientFetchError):
            await client.get_messages(ALICE.id)


@pytest.mark.asyncio
async def test_server_error_is_transient():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"detail": "boom"}))

    async with MessageClient(BASE_URL, transport=transport) as client:
        with pytest.raises(TransientFetchError):
            await client.get_messages(ALICE.id)


@pytest.mark.asyncio
async def test_request_id_header_sent():
    seen = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("X-Request-ID"))
        return httpx.Response(200, json=[])

    async with MessageClient(BASE_URL, transport=httpx.MockTransport(_handler)) as client:
        assert await client.get_messages(ALICE.id) == []

    assert seen and seen[0]


@pytest.mark.asyncio
async def test_email_message_type_survives_the_wire(messages):
    dto = replace(make_send_dto(content="Is this your scarf?"), message_type=MessageType.EMAIL)

    message_id = await messages.send_message(dto)
    (stored,) = await messages.get_messages(BOB.id, ALICE.id)

    assert stored.id == message_id
    assert stored.message_type == MessageType.EMAIL


@pytest.mark.asyncio
async def test_ambient_request_id_is_forwarded():
    seen = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("X-Request-ID"))
        return httpx.Response(200, json=[])

    token = correlation_id_ctx.set("tick-42")
    try:
        async with MessageClient(BASE_URL, transport=httpx.MockTransport(_handler)) as client:
            await client.get_messages(ALICE.id)
    finally:
        correlation_id_ctx.reset(token)

    assert seen == ["tick-42"]
