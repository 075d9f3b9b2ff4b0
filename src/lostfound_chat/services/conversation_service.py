from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping

from lostfound_chat.application.ports.messages import MessageGateway
from lostfound_chat.application.ports.users import UserDirectory
from lostfound_chat.domain.entities.conversation import Conversation
from lostfound_chat.domain.entities.message import Message
from lostfound_chat.domain.entities.user import UserProfile

logger = logging.getLogger(__name__)


def partition_by_partner(viewer_id: str, messages: Iterable[Message]) -> dict[str, list[Message]]:
    """Group messages involving the viewer by the other party's id."""
    partitions: dict[str, list[Message]] = {}
    for msg in messages:
        if not msg.involves(viewer_id):
            continue
        partitions.setdefault(msg.partner_of(viewer_id), []).append(msg)
    return partitions


def _fallback_profile(viewer_id: str, partner_id: str, latest: Message) -> UserProfile:
    if latest.sender_id == viewer_id:
        return UserProfile(id=partner_id, name=latest.recipient_name, email=latest.recipient_email)
    return UserProfile(id=partner_id, name=latest.sender_name, email=latest.sender_email)


def build_conversations(
    viewer_id: str,
    messages: Iterable[Message],
    profiles: Mapping[str, UserProfile | None] | None = None,
) -> list[Conversation]:
    """Summarize a flat message list into conversations, most recent first.

    ``profiles`` maps partner id to the looked-up profile. Missing or ``None``
    entries fall back to the names captured on the partner's latest message.
    """
    profiles = profiles or {}
    conversations: list[Conversation] = []
    for partner_id, thread in partition_by_partner(viewer_id, messages).items():
        latest = max(thread, key=lambda m: m.timestamp)
        unread = sum(1 for m in thread if m.recipient_id == viewer_id and not m.read)
        partner = profiles.get(partner_id) or _fallback_profile(viewer_id, partner_id, latest)
        conversations.append(
            Conversation(
                viewer_id=viewer_id,
                partner=partner,
                last_message=latest,
                unread_count=unread,
            )
        )
    conversations.sort(key=lambda c: c.last_message.timestamp, reverse=True)
    return conversations


async def _lookup(users: UserDirectory, user_id: str) -> UserProfile | None:
    try:
        return await users.get_user(user_id)
    except Exception:
        logger.warning("Profile lookup failed for %s, using message snapshot", user_id, exc_info=True)
        return None


async def load_conversations(
    viewer_id: str,
    messages: MessageGateway,
    users: UserDirectory,
) -> list[Conversation]:
    """Fetch the viewer's messages and aggregate them with fresh partner profiles."""
    inbox = await messages.get_messages(viewer_id)
    partner_ids = list(partition_by_partner(viewer_id, inbox))
    found = await asyncio.gather(*(_lookup(users, pid) for pid in partner_ids))
    return build_conversations(viewer_id, inbox, dict(zip(partner_ids, found)))


def filter_conversations(conversations: list[Conversation], query: str) -> list[Conversation]:
    needle = query.strip().lower()
    if not needle:
        return conversations
    return [
        c
        for c in conversations
        if needle in c.partner.name.lower()
        or needle in c.partner.email.lower()
        or needle in c.last_message.content.lower()
    ]


def total_unread(conversations: Iterable[Conversation]) -> int:
    return sum(c.unread_count for c in conversations)
