from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from lostfound_chat.application.ports.clock import as_utc
from lostfound_chat.domain.value_objects.enums import MessageStatus
from lostfound_chat.presentation.formatting import preview, relative_time, status_label
from lostfound_chat.presentation.grouping import group_messages
from tests.conftest import ALICE, BOB, T0, make_message


def test_timestamp_under_first_of_two_messages_six_minutes_apart():
    thread = [
        make_message(sender=ALICE, recipient=BOB, at=0),
        make_message(sender=ALICE, recipient=BOB, at=6),
    ]

    first, second = group_messages(thread, BOB.id)

    assert first.show_timestamp is True
    assert second.show_timestamp is True
    assert first.show_avatar is True
    assert second.show_avatar is False


def test_close_messages_from_same_sender_share_one_timestamp():
    thread = [
        make_message(sender=ALICE, recipient=BOB, at=0),
        make_message(sender=ALICE, recipient=BOB, at=1),
        make_message(sender=ALICE, recipient=BOB, at=2),
    ]

    views = group_messages(thread, BOB.id)

    assert [v.show_timestamp for v in views] == [False, False, True]
    assert [v.show_avatar for v in views] == [True, False, False]


def test_sender_change_ends_a_run():
    thread = [
        make_message(sender=ALICE, recipient=BOB, at=0),
        make_message(sender=BOB, recipient=ALICE, at=1),
        make_message(sender=BOB, recipient=ALICE, at=2),
    ]

    views = group_messages(thread, BOB.id)

    assert [v.show_avatar for v in views] == [True, True, False]
    assert [v.show_timestamp for v in views] == [True, False, True]
    assert [v.is_own for v in views] == [False, True, True]


def test_group_messages_empty_thread():
    assert group_messages([], ALICE.id) == []


def test_relative_time_buckets():
    assert relative_time(T0, T0 + timedelta(seconds=30)) == "Just now"
    assert relative_time(T0, T0 + timedelta(minutes=7)) == "7m ago"
    assert relative_time(T0, T0 + timedelta(hours=3, minutes=5)) == "3h ago"
    assert relative_time(T0, T0 + timedelta(days=2)) == "2024-03-01"


def test_preview_truncates_and_collapses_whitespace():
    assert preview("short\n note", 20) == "short note"
    assert preview("x" * 30, 10) == "x" * 9 + "…"


def test_status_label():
    delivered = make_message(status=MessageStatus.DELIVERED)
    seen = make_message(read=True)
    sent = replace(make_message(status=MessageStatus.SENT), delivered_at=None)

    assert status_label(delivered) == "Delivered at 12:00"
    assert status_label(seen) == "Seen at 12:00"
    assert status_label(sent) == "Sent"


def test_as_utc_normalizes_naive_and_offset_datetimes():
    naive = datetime(2024, 3, 1, 12, 0)
    plus_two = datetime(2024, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    assert as_utc(naive) == T0
    assert as_utc(plus_two) == T0
    assert as_utc(plus_two).utcoffset() == timedelta(0)


def test_own_messages_carry_delivery_status():
    thread = [
        make_message(sender=ALICE, recipient=BOB, at=0),
        make_message(sender=BOB, recipient=ALICE, at=1, read=True),
    ]

    theirs, mine = group_messages(thread, BOB.id)

    assert theirs.status is None
    assert mine.status == "Seen at 12:01"
