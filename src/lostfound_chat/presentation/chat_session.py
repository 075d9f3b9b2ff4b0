"""Live two-party thread kept fresh by polling while open."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable
from uuid import UUID

from lostfound_chat.application.dto.message import SendMessageDTO
from lostfound_chat.application.exceptions import TransientFetchError
from lostfound_chat.application.ports.messages import MessageGateway
from lostfound_chat.config import settings
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.entities.user import UserProfile
from lostfound_chat.domain.value_objects.enums import MessageType
from lostfound_chat.presentation.grouping import MessageView, group_messages

logger = logging.getLogger(__name__)

OnMessagesRead = Callable[[], Awaitable[None] | None]


class ChatSession:
    """Thread between ``current_user`` and ``recipient``.

    ``open()`` fetches the thread at once and then every ``poll_interval``
    seconds until ``close()``. Each fetch replaces ``messages`` with the
    store's chat messages between the two users; email messages sent from
    the profile page are left out. A response that resolves after close is
    dropped.
    """

    def __init__(
        self,
        current_user: UserProfile,
        recipient: UserProfile,
        gateway: MessageGateway,
        *,
        poll_interval: float = settings.CHAT_POLL_INTERVAL,
        refresh_delay: float = settings.CHAT_SEND_REFRESH_DELAY,
        on_messages_read: OnMessagesRead | None = None,
    ) -> None:
        self.current_user = current_user
        self.recipient = recipient
        self._gateway = gateway
        self._poll_interval = poll_interval
        self._refresh_delay = refresh_delay
        self._on_messages_read = on_messages_read

        self.messages: list[Message] = []
        self.sending = False
        self.send_error: str | None = None

        self._open = False
        self._generation = 0
        self._poll_task: asyncio.Task[None] | None = None
        self._refresh_tasks: set[asyncio.Task[None]] = set()

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def views(self) -> list[MessageView]:
        return group_messages(self.messages, self.current_user.id)

    async def open(self) -> None:
        if self._open:
            return
        self._open = True
        self._generation += 1
        logger.debug("Chat %s <-> %s opened", self.current_user.id, self.recipient.id)

        await self.refresh()
        # close() may have run while the first fetch was in flight
        if self._open:
            self._poll_task = asyncio.create_task(
                self._poll_loop(),
                name=f"chat-poll-{self.current_user.id}-{self.recipient.id}",
            )

    async def close(self) -> None:
        if not self._open:
            return
        self._open = False
        self._generation += 1

        tasks = [t for t in (self._poll_task, *self._refresh_tasks) if t is not None]
        self._poll_task = None
        self._refresh_tasks.clear()
        current = asyncio.current_task()
        pending = [t for t in tasks if t is not current]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.debug("Chat %s <-> %s closed", self.current_user.id, self.recipient.id)

    async def refresh(self) -> bool:
        """Fetch the thread and apply it. Returns False if nothing was applied."""
        generation = self._generation
        try:
            thread = await self._gateway.get_messages(self.current_user.id, self.recipient.id)
        except TransientFetchError as exc:
            logger.warning("Chat fetch failed, retrying next tick: %s", exc.detail)
            return False
        except Exception:
            logger.exception("Chat fetch failed, retrying next tick")
            return False

        if not self._is_current(generation):
            logger.debug("Discarding chat snapshot that arrived after close")
            return False

        self.messages = [m for m in thread if m.message_type != MessageType.EMAIL]
        await self._mark_inbound_read(self.messages, generation)
        return True

    async def send(self, text: str) -> UUID | None:
        """Send ``text`` to the recipient.

        Blank text, or a call while another send is in flight, is ignored and
        returns None. Failures set ``send_error`` and propagate.
        """
        content = text.strip()
        if not content or self.sending:
            return None

        self.sending = True
        self.send_error = None
        dto = SendMessageDTO(
            sender_id=self.current_user.id,
            sender_name=self.current_user.name,
            sender_email=self.current_user.email,
            recipient_id=self.recipient.id,
            recipient_name=self.recipient.name,
            recipient_email=self.recipient.email,
            subject=f"Chat with {self.recipient.name}",
            content=content,
            message_type=MessageType.CHAT,
        )
        try:
            message_id = await self._gateway.send_message(dto)
        except Exception as exc:
            self.send_error = getattr(exc, "detail", "") or str(exc) or type(exc).__name__
            logger.warning("Send to %s failed: %s", self.recipient.id, self.send_error)
            raise
        finally:
            self.sending = False

        self._schedule_refresh()
        return message_id

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self._poll_interval)
            await self.refresh()

    def _schedule_refresh(self) -> None:
        if not self._open:
            return
        task = asyncio.create_task(self._delayed_refresh())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    async def _delayed_refresh(self) -> None:
        await asyncio.sleep(self._refresh_delay)
        await self.refresh()

    def _is_current(self, generation: int) -> bool:
        return self._open and generation == self._generation

    async def _mark_inbound_read(self, thread: list[Message], generation: int) -> None:
        me = self.current_user.id
        if not any(m.recipient_id == me and not m.read for m in thread):
            return
        try:
            count = await self._gateway.mark_messages_as_read(me, self.recipient.id)
        except Exception:
            logger.warning("Could not mark chat with %s as read", self.recipient.id, exc_info=True)
            return
        if not self._is_current(generation):
            return
        if count and self._on_messages_read is not None:
            result: Any = self._on_messages_read()
            if inspect.isawaitable(result):
                await result
