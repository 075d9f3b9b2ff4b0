"""Notification poller: watches the store for new inbound messages of one user."""
from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime

from lostfound_chat.application.exceptions import TransientFetchError
from lostfound_chat.application.ports.clock import Clock, SystemClock
from lostfound_chat.application.ports.messages import MessageGateway
from lostfound_chat.config import settings
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.infrastructure.http.message_client import MessageClient
from lostfound_chat.presentation.notification_center import NotificationCenter

logger = logging.getLogger(__name__)


class NotificationPoller:
    """Session-scoped background task feeding a NotificationCenter.

    ``start()`` on login, ``stop()`` on logout. Every tick fetches the user's
    messages and adds the unread inbound ones newer than ``last_checked_at``.
    A failed tick leaves ``last_checked_at`` alone, so the same window is
    retried next time.
    """

    def __init__(
        self,
        user_id: str,
        gateway: MessageGateway,
        center: NotificationCenter,
        *,
        clock: Clock | None = None,
        interval: float = settings.NOTIFICATION_POLL_INTERVAL,
    ) -> None:
        self.user_id = user_id
        self._gateway = gateway
        self._center = center
        self._clock = clock or SystemClock()
        self._interval = interval
        self.last_checked_at: datetime | None = None
        self._running = False
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._generation += 1
        self.last_checked_at = self._clock.now()
        self._task = asyncio.create_task(self._run(), name=f"notification-poller-{self.user_id}")
        logger.info(
            "Notification poller started for user=%s (interval=%.1fs)",
            self.user_id,
            self._interval,
        )

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Notification poller stopped for user=%s", self.user_id)

    async def poll_once(self) -> list[Message]:
        """Run one tick. Returns the messages that became notifications."""
        if self.last_checked_at is None:
            self.last_checked_at = self._clock.now()
        generation = self._generation
        tick_started = self._clock.now()
        since = self.last_checked_at

        try:
            inbox = await self._gateway.get_messages(self.user_id)
        except TransientFetchError as exc:
            logger.warning("Notification poll failed for user=%s: %s", self.user_id, exc.detail)
            return []
        except Exception:
            logger.exception("Notification poll failed for user=%s", self.user_id)
            return []

        if generation != self._generation:
            logger.debug("Discarding poll result for user=%s that arrived after stop", self.user_id)
            return []

        fresh = [
            m
            for m in inbox
            if m.recipient_id == self.user_id and not m.read and m.timestamp > since
        ]
        emitted = [m for m in fresh if self._center.add(m)]
        self.last_checked_at = tick_started

        if emitted:
            logger.info("User %s has %d new message(s)", self.user_id, len(emitted))
        return emitted

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.poll_once()


async def run_notification_poller(user_id: str) -> None:
    """Log every notification for ``user_id`` until interrupted."""
    center = NotificationCenter()
    center.subscribe(
        lambda m: logger.info("New message from %s <%s>: %s", m.sender_name, m.sender_email, m.content)
    )
    async with MessageClient(settings.STORE_BASE_URL, timeout=settings.STORE_REQUEST_TIMEOUT) as client:
        poller = NotificationPoller(user_id, client, center)
        await poller.start()
        try:
            await asyncio.Event().wait()
        finally:
            await poller.stop()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Watch the message store for a user's new messages.")
    parser.add_argument("user_id")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(run_notification_poller(args.user_id))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
