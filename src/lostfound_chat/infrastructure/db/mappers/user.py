from __future__ import annotations

from lostfound_chat.domain.entities.user import UserProfile
from lostfound_chat.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> UserProfile:
    return UserProfile(
        id=model.id,
        name=model.name,
        email=model.email,
        avatar=model.avatar,
    )
