from __future__ import annotations

import logging
from typing import Callable
from uuid import UUID

from lostfound_chat.domain.entities.message import Message

logger = logging.getLogger(__name__)

Listener = Callable[[Message], None]
RemovalListener = Callable[[UUID], None]


class NotificationCenter:
    """In-memory notification set for one login session, keyed by message id.

    The poller adds, the popup manager removes. An id is accepted at most once
    per session: removing a notification does not make its id eligible again.
    Subscribers hear about every addition and, optionally, every removal,
    including the ones done by ``clear()`` and ``reset()``.
    """

    def __init__(self) -> None:
        self._active: dict[UUID, Message] = {}
        self._emitted: set[UUID] = set()
        self._listeners: list[Listener] = []
        self._removal_listeners: list[RemovalListener] = []

    @property
    def notifications(self) -> list[Message]:
        return list(self._active.values())

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    def get(self, message_id: UUID) -> Message | None:
        return self._active.get(message_id)

    def subscribe(
        self,
        listener: Listener,
        on_removed: RemovalListener | None = None,
    ) -> Callable[[], None]:
        """Register ``listener`` for new notifications and ``on_removed`` for removals.

        Returns an unsubscribe callable.
        """
        self._listeners.append(listener)
        if on_removed is not None:
            self._removal_listeners.append(on_removed)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
            if on_removed is not None and on_removed in self._removal_listeners:
                self._removal_listeners.remove(on_removed)

        return _unsubscribe

    def add(self, message: Message) -> bool:
        if message.id in self._emitted:
            return False
        self._emitted.add(message.id)
        self._active[message.id] = message
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception:
                logger.exception("Notification listener failed for message %s", message.id)
        return True

    def remove(self, message_id: UUID) -> Message | None:
        message = self._active.pop(message_id, None)
        if message is not None:
            self._notify_removed([message_id])
        return message

    def clear(self) -> None:
        removed = list(self._active)
        self._active.clear()
        self._notify_removed(removed)

    def reset(self) -> None:
        """Forget everything, including emitted ids. Used on logout."""
        self._emitted.clear()
        self.clear()

    def _notify_removed(self, message_ids: list[UUID]) -> None:
        for message_id in message_ids:
            for listener in list(self._removal_listeners):
                try:
                    listener(message_id)
                except Exception:
                    logger.exception("Removal listener failed for message %s", message_id)
