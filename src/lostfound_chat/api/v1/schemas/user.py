from __future__ import annotations

from lostfound_chat.api.v1.schemas.common import CamelModel
from lostfound_chat.domain.entities.user import UserProfile


class UserResponse(CamelModel):
    id: str
    name: str = ""
    email: str = ""
    avatar: str | None = None

    def to_entity(self) -> UserProfile:
        return UserProfile(**dict(self))
