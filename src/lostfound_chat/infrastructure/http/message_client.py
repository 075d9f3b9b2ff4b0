"""Async HTTP client for the message store."""
from __future__ import annotations

from dataclasses import asdict
from uuid import UUID

from lostfound_chat.api.v1.schemas.common import CountResponse
from lostfound_chat.api.v1.schemas.message import MessageResponse, SendMessageRequest
from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.policies.validation import assert_sendable, parse_status
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus
from lostfound_chat.infrastructure.http.base import StoreHttpClient


class MessageClient(StoreHttpClient):
    """Implements application.ports.messages.MessageGateway."""

    async def send_message(self, dto: SendMessageDTO) -> UUID:
        assert_sendable(dto)
        body = SendMessageRequest(**asdict(dto))
        data = await self._request("POST", "/messages", json=body.model_dump(mode="json", by_alias=True))
        return MessageResponse.model_validate(data).id

    async def get_messages(self, user_id: str, chat_with: str | None = None) -> list[Message]:
        params = {"userId": user_id}
        if chat_with:
            params["chatWith"] = chat_with
        data = await self._request("GET", "/messages", params=params)
        return [MessageResponse.model_validate(item).to_entity() for item in data]

    async def mark_messages_as_read(self, user_id: str, chat_with: str) -> int:
        data = await self._request(
            "PUT",
            "/messages/mark-as-read",
            json={"userId": user_id, "chatWith": chat_with},
        )
        return CountResponse.model_validate(data).count

    async def update_message_status(self, message_id: UUID, status: MessageStatus | str) -> Message:
        status = parse_status(status)
        data = await self._request(
            "PUT",
            f"/messages/{message_id}/status",
            json={"status": status.value},
        )
        return MessageResponse.model_validate(data).to_entity()
