from __future__ import annotations

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lostfound_chat.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from lostfound_chat.infrastructure.db.repositories.user import UserReaderRepo
from lostfound_chat.infrastructure.db.session import AsyncSessionLocal


class SqlAlchemyUoW:
    """Unit-of-Work that owns one AsyncSession for its lifetime.

    Used as ``async with SqlAlchemyUoW() as uow``: uncommitted work is rolled
    back when the block raises, and the session is always closed on exit.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal) -> None:
        self._session = session_factory()
        self.messages = MessageReaderRepo(self._session)
        self.messages_w = MessageWriterRepo(self._session)
        self.users = UserReaderRepo(self._session)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            await self._session.close()
