from __future__ import annotations

from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.exceptions import InvalidStatusError, ValidationError
from lostfound_chat.domain.value_objects.enums import MessageStatus


def assert_sendable(dto: SendMessageDTO) -> None:
    """Raise before anything reaches the store."""
    if not dto.recipient_id or not dto.recipient_id.strip():
        raise ValidationError("Recipient is required")
    if not dto.content or not dto.content.strip():
        raise ValidationError("Message content must not be empty")


def parse_status(value: MessageStatus | str) -> MessageStatus:
    try:
        return MessageStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in MessageStatus)
        raise InvalidStatusError(f"Invalid status {value!r}; expected one of: {allowed}") from None
