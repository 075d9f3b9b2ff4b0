from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query

from lostfound_chat.api.deps import ClockDep, UoWDep
from lostfound_chat.api.v1.schemas.common import CountResponse
from lostfound_chat.api.v1.schemas.message import (
    MarkAsReadRequest,
    MessageResponse,
    SendMessageRequest,
    UpdateStatusRequest,
)
from lostfound_chat.services import message_service

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    uow: UoWDep,
    clock: ClockDep,
) -> MessageResponse:
    msg = await message_service.send_message(body.to_dto(), uow, clock)
    return MessageResponse.model_validate(msg)


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    uow: UoWDep,
    user_id: str = Query(..., alias="userId", min_length=1),
    chat_with: str | None = Query(None, alias="chatWith"),
) -> list[MessageResponse]:
    messages = await message_service.list_messages(user_id, chat_with, uow)
    return [MessageResponse.model_validate(m) for m in messages]


@router.put("/mark-as-read", response_model=CountResponse)
async def mark_as_read(
    body: MarkAsReadRequest,
    uow: UoWDep,
    clock: ClockDep,
) -> CountResponse:
    count = await message_service.mark_messages_as_read(body.user_id, body.chat_with, uow, clock)
    return CountResponse(count=count)


@router.put("/{message_id}/status", response_model=MessageResponse)
async def update_status(
    message_id: UUID,
    body: UpdateStatusRequest,
    uow: UoWDep,
    clock: ClockDep,
) -> MessageResponse:
    msg = await message_service.update_message_status(message_id, body.status, uow, clock)
    return MessageResponse.model_validate(msg)
