from __future__ import annotations

from lostfound_chat.api.v1.schemas.user import UserResponse
from lostfound_chat.domain.entities.user import UserProfile
from lostfound_chat.infrastructure.http.base import StoreHttpClient


class UserClient(StoreHttpClient):
    """Implements application.ports.users.UserDirectory."""

    async def get_user(self, user_id: str) -> UserProfile:
        data = await self._request("GET", f"/users/{user_id}")
        return UserResponse.model_validate(data).to_entity()
