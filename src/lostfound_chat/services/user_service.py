from __future__ import annotations

from lostfound_chat.application.exceptions import NotFoundError
from lostfound_chat.application.uow import UnitOfWork
from lostfound_chat.domain.entities.user import UserProfile


async def get_user(user_id: str, uow: UnitOfWork) -> UserProfile:
    user = await uow.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
