from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from lostfound_chat.infrastructure.db.base import Base


class UserModel(Base):
    """Read-only view of the portal's user table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
