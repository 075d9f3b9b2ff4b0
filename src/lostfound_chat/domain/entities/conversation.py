from __future__ import annotations

from dataclasses import dataclass

from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.entities.user import UserProfile


@dataclass(frozen=True, slots=True)
class Conversation:
    """Per-partner thread summary, derived from the message list. Never stored."""

    viewer_id: str
    partner: UserProfile
    last_message: Message
    unread_count: int

    @property
    def partner_id(self) -> str:
        return self.partner.id
