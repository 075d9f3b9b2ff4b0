from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: str
    name: str
    email: str
    avatar: str | None = None
