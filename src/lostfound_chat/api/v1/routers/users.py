from __future__ import annotations

from fastapi import APIRouter

from lostfound_chat.api.deps import UoWDep
from lostfound_chat.api.v1.schemas.user import UserResponse
from lostfound_chat.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, uow: UoWDep) -> UserResponse:
    user = await user_service.get_user(user_id, uow)
    return UserResponse.model_validate(user)
