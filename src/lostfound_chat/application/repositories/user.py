from __future__ import annotations

from typing import Protocol

from lostfound_chat.domain.entities.user import UserProfile


class UserReader(Protocol):
    async def get_by_id(self, user_id: str) -> UserProfile | None: ...
