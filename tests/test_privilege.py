from __future__ import annotations

import asyncio

from core.models import GroupMetadata, Participant
from core.privilege import resolve_admin_status


class FakeMessenger:
    def __init__(self, participants=(), bot_id: str = "999", fail: bool = False) -> None:
        self._participants = tuple(participants)
        self._bot_id = bot_id
        self._fail = fail
        self.metadata_calls: list[str] = []

    async def fetch_group_metadata(self, chat_id: str) -> GroupMetadata:
        self.metadata_calls.append(chat_id)
        if self._fail:
            raise ConnectionError("offline")
        return GroupMetadata(chat_id=chat_id, participants=self._participants)

    async def self_id(self) -> str:
        return self._bot_id


def test_admin_and_superadmin_are_privileged() -> None:
    messenger = FakeMessenger(
        [Participant("1", "admin"), Participant("2", "superadmin"), Participant("999", "admin")]
    )

    first = asyncio.run(resolve_admin_status(messenger, "-100", "1"))
    second = asyncio.run(resolve_admin_status(messenger, "-100", "user_id:2"))

    assert first.is_sender_admin and first.is_bot_admin
    assert second.is_sender_admin


def test_missing_sender_is_not_admin() -> None:
    messenger = FakeMessenger([Participant("1", "admin")])

    status = asyncio.run(resolve_admin_status(messenger, "-100", "7"))

    assert not status.is_sender_admin
    assert not status.is_bot_admin


def test_plain_member_is_not_admin() -> None:
    messenger = FakeMessenger([Participant("7", None)])

    status = asyncio.run(resolve_admin_status(messenger, "-100", "7"))

    assert not status.is_sender_admin


def test_private_chat_skips_metadata_fetch() -> None:
    messenger = FakeMessenger([Participant("7", "admin")])

    status = asyncio.run(resolve_admin_status(messenger, "7", "7"))

    assert not status.is_sender_admin
    assert messenger.metadata_calls == []


def test_fetch_failure_fails_closed() -> None:
    messenger = FakeMessenger(fail=True)

    status = asyncio.run(resolve_admin_status(messenger, "-100", "7"))

    assert not status.is_sender_admin
    assert not status.is_bot_admin
    assert messenger.metadata_calls == ["-100"]
