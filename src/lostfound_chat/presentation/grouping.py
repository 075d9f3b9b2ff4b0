from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

from lostfound_chat.domain.entities.message import Message
from lostfound_chat.presentation.formatting import status_label

RUN_GAP = timedelta(minutes=5)


@dataclass(frozen=True, slots=True)
class MessageView:
    message: Message
    is_own: bool
    show_avatar: bool
    show_timestamp: bool
    status: str | None = None


def group_messages(messages: Sequence[Message], viewer_id: str) -> list[MessageView]:
    """Mark run boundaries in a chronological thread.

    The avatar goes on the first message of a same-sender run. A timestamp goes
    under the last message of a run, and under any message followed by one
    from the same sender more than ``RUN_GAP`` later. The viewer's own messages
    carry their delivery status ("Delivered at 14:02", "Seen at 14:05").
    """
    views: list[MessageView] = []
    for i, msg in enumerate(messages):
        prev = messages[i - 1] if i > 0 else None
        nxt = messages[i + 1] if i + 1 < len(messages) else None
        show_timestamp = (
            nxt is None
            or nxt.sender_id != msg.sender_id
            or nxt.timestamp - msg.timestamp > RUN_GAP
        )
        is_own = msg.sender_id == viewer_id
        views.append(
            MessageView(
                message=msg,
                is_own=is_own,
                show_avatar=prev is None or prev.sender_id != msg.sender_id,
                show_timestamp=show_timestamp,
                status=status_label(msg) if is_own else None,
            )
        )
    return views
