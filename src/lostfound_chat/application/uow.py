from __future__ import annotations

from typing import Protocol

from lostfound_chat.application.repositories.message import MessageReader, MessageWriter
from lostfound_chat.application.repositories.user import UserReader


class UnitOfWork(Protocol):
    messages: MessageReader
    messages_w: MessageWriter
    users: UserReader

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
