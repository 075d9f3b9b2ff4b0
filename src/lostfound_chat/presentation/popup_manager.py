"""Transient popups for incoming-message notifications."""
from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable
from uuid import UUID

from lostfound_chat.application.ports.clock import Clock, SystemClock
from lostfound_chat.application.ports.users import UserDirectory
from lostfound_chat.config import settings
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.presentation.formatting import preview, relative_time
from lostfound_chat.presentation.notification_center import NotificationCenter

logger = logging.getLogger(__name__)

UNKNOWN_SENDER = "Unknown User"

OnViewMessage = Callable[[Message], Awaitable[None] | None]


@dataclass(slots=True)
class Popup:
    message: Message
    preview: str
    sender_name: str | None = None
    sender_avatar: str | None = None
    offset: int = 0

    @property
    def title(self) -> str:
        return self.sender_name or UNKNOWN_SENDER

    def time_label(self, now: datetime) -> str:
        return relative_time(self.message.timestamp, now)


class PopupManager:
    """Shows one popup per notification and takes it down again.

    At most ``max_visible`` popups are on screen; later ones wait in arrival
    order and appear as slots free up. Each visible popup dismisses itself
    after ``timeout`` seconds. Dismissing (or viewing) a popup also removes
    its notification from the center, and a notification removed from the
    center (including by ``reset()`` on logout) takes its popup with it.
    """

    def __init__(
        self,
        center: NotificationCenter,
        users: UserDirectory,
        *,
        on_view_message: OnViewMessage | None = None,
        clock: Clock | None = None,
        timeout: float = settings.POPUP_TIMEOUT,
        max_visible: int = settings.MAX_VISIBLE_POPUPS,
        stack_offset: int = settings.POPUP_STACK_OFFSET,
        preview_length: int = settings.POPUP_PREVIEW_LENGTH,
    ) -> None:
        self._center = center
        self._users = users
        self._on_view_message = on_view_message
        self._clock = clock or SystemClock()
        self._timeout = timeout
        self._max_visible = max(1, max_visible)
        self._stack_offset = stack_offset
        self._preview_length = preview_length

        self._visible: dict[UUID, Popup] = {}
        self._queue: deque[UUID] = deque()
        self._timers: dict[UUID, asyncio.Task[None]] = {}
        self._lookups: set[asyncio.Task[None]] = set()
        self._unsubscribe = center.subscribe(self.show, self._forget)

    @property
    def visible_ids(self) -> set[UUID]:
        return set(self._visible)

    @property
    def queued_ids(self) -> list[UUID]:
        return list(self._queue)

    @property
    def popups(self) -> list[Popup]:
        return list(self._visible.values())

    def time_labels(self) -> dict[UUID, str]:
        now = self._clock.now()
        return {pid: popup.time_label(now) for pid, popup in self._visible.items()}

    def sync(self) -> None:
        """Pick up notifications that arrived before this manager subscribed."""
        for message in self._center.notifications:
            self.show(message)

    def show(self, message: Message) -> bool:
        """Display ``message`` unless already tracked. Returns True if it went on screen."""
        if message.id in self._visible or message.id in self._queue:
            return False
        if len(self._visible) >= self._max_visible:
            self._queue.append(message.id)
            logger.debug("Popup for %s queued (%d waiting)", message.id, len(self._queue))
            return False
        self._display(message)
        return True

    def dismiss(self, message_id: UUID) -> bool:
        tracked = message_id in self._visible or message_id in self._queue
        self._center.remove(message_id)
        self._forget(message_id)
        return tracked

    async def view(self, message_id: UUID) -> Message | None:
        """Click-through: hand the message to the host so it opens the chat, then dismiss."""
        popup = self._visible.get(message_id)
        message = popup.message if popup is not None else self._center.get(message_id)
        if message is None:
            return None
        self.dismiss(message_id)
        if self._on_view_message is not None:
            result: Any = self._on_view_message(message)
            if inspect.isawaitable(result):
                await result
        return message

    async def close(self) -> None:
        self._unsubscribe()
        tasks = [*self._timers.values(), *self._lookups]
        self._timers.clear()
        self._lookups.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _display(self, message: Message) -> None:
        loop = asyncio.get_running_loop()
        popup = Popup(
            message=message,
            preview=preview(message.content, self._preview_length),
            offset=len(self._visible) * self._stack_offset,
        )
        timer = loop.create_task(self._auto_dismiss(message.id), name=f"popup-timeout-{message.id}")
        lookup = loop.create_task(self._resolve_sender(popup))
        self._visible[message.id] = popup
        self._timers[message.id] = timer
        self._lookups.add(lookup)
        lookup.add_done_callback(self._lookups.discard)

    def _forget(self, message_id: UUID) -> None:
        popup = self._visible.pop(message_id, None)
        if message_id in self._queue:
            self._queue.remove(message_id)
        timer = self._timers.pop(message_id, None)
        if timer is not None and timer is not asyncio.current_task():
            timer.cancel()
        if popup is not None:
            self._restack()
            self._promote()

    def _restack(self) -> None:
        for index, popup in enumerate(self._visible.values()):
            popup.offset = index * self._stack_offset

    def _promote(self) -> None:
        while self._queue and len(self._visible) < self._max_visible:
            message = self._center.get(self._queue.popleft())
            if message is not None:
                self._display(message)

    async def _auto_dismiss(self, message_id: UUID) -> None:
        await asyncio.sleep(self._timeout)
        self._timers.pop(message_id, None)
        self.dismiss(message_id)

    async def _resolve_sender(self, popup: Popup) -> None:
        try:
            sender = await self._users.get_user(popup.message.sender_id)
        except Exception:
            logger.info("Sender lookup failed for %s", popup.message.sender_id, exc_info=True)
            return
        popup.sender_name = sender.name or None
        popup.sender_avatar = sender.avatar
