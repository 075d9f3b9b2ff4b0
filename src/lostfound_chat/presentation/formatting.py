"""Display strings for chat threads and notification popups."""
from __future__ import annotations

from datetime import datetime

from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.value_objects.enums import MessageStatus


def relative_time(ts: datetime, now: datetime) -> str:
    minutes = int((now - ts).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 24 * 60:
        return f"{minutes // 60}h ago"
    return ts.date().isoformat()


def clock_time(ts: datetime) -> str:
    return ts.strftime("%H:%M")


def status_label(message: Message) -> str:
    if message.status == MessageStatus.SEEN:
        return f"Seen at {clock_time(message.seen_at)}" if message.seen_at else "Seen"
    if message.status == MessageStatus.DELIVERED:
        return f"Delivered at {clock_time(message.delivered_at)}" if message.delivered_at else "Delivered"
    return "Sent"


def preview(text: str, limit: int) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)].rstrip() + "…"
