from __future__ import annotations

from typing import Protocol

from lostfound_chat.domain.entities.user import UserProfile


class UserDirectory(Protocol):
    async def get_user(self, user_id: str) -> UserProfile:
        """Raise NotFoundError for unknown ids."""
        ...
