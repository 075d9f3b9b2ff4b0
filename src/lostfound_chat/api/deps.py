"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends

from lostfound_chat.application.ports.clock import Clock, SystemClock
from lostfound_chat.infrastructure.db.uow import SqlAlchemyUoW


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with SqlAlchemyUoW() as uow:
        yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


_clock = SystemClock()


def get_clock() -> Clock:
    return _clock


ClockDep = Annotated[Clock, Depends(get_clock)]
