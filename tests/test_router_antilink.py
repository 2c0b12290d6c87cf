from __future__ import annotations

import asyncio

from core.config import QrAssetConfig
from core.models import GroupMetadata, InboundMessage, Participant
from core.policy import InMemoryPolicyStore
from core.replies import build_catalog
from core.router import MessageRouter

GROUP = "-100555"
BOT_ID = "999"


class FakeMessenger:
    def __init__(self, admins=(BOT_ID,), fail_delete: bool = False) -> None:
        self.admins = set(admins)
        self.fail_delete = fail_delete
        self.texts: list[tuple[str, object]] = []
        self.deleted: list[tuple[str, int]] = []
        self.metadata_calls = 0

    async def send_text(self, chat_id: str, message) -> None:
        self.texts.append((chat_id, message))

    async def send_image(self, chat_id: str, image) -> None:
        raise AssertionError("no images expected")

    async def delete_message(self, chat_id: str, message_id: int) -> None:
        if self.fail_delete:
            raise PermissionError("not allowed")
        self.deleted.append((chat_id, message_id))

    async def fetch_group_metadata(self, chat_id: str) -> GroupMetadata:
        self.metadata_calls += 1
        return GroupMetadata(
            chat_id=chat_id,
            participants=tuple(Participant(user_id, "admin") for user_id in self.admins),
        )

    async def self_id(self) -> str:
        return BOT_ID


def _router(messenger: FakeMessenger, enabled: bool = True) -> MessageRouter:
    store = InMemoryPolicyStore({GROUP: {"enabled": enabled}})
    return MessageRouter(
        messenger=messenger,
        policy_store=store,
        replies=build_catalog(None),
        qr_asset=QrAssetConfig(path="missing.jpg"),
    )


def _message(text: str, sender_id: str = "42", chat_id: str = GROUP, name: str = "bob") -> InboundMessage:
    return InboundMessage(
        chat_id=chat_id,
        sender_id=sender_id,
        sender_name=name,
        message_id=7,
        is_group=chat_id.startswith("-"),
        text=text,
    )


def test_link_from_member_is_deleted_and_warned() -> None:
    messenger = FakeMessenger()
    handled = asyncio.run(_router(messenger).handle(_message("see example.com")))

    assert handled is True
    assert messenger.deleted == [(GROUP, 7)]
    assert len(messenger.texts) == 1
    _, warning = messenger.texts[0]
    assert warning.text == "@bob, links are not allowed here!"
    assert warning.mentions[0].user_id == "42"


def test_link_from_admin_is_left_alone() -> None:
    messenger = FakeMessenger(admins=(BOT_ID, "42"))
    handled = asyncio.run(_router(messenger).handle(_message("see example.com")))

    assert handled is True
    assert messenger.deleted == []
    assert messenger.texts == []


def test_disabled_group_does_not_moderate() -> None:
    messenger = FakeMessenger()
    handled = asyncio.run(_router(messenger, enabled=False).handle(_message("see example.com")))

    assert handled is False
    assert messenger.deleted == []
    assert messenger.metadata_calls == 0


def test_text_without_link_skips_admin_lookup() -> None:
    messenger = FakeMessenger()
    asyncio.run(_router(messenger).handle(_message("hello everyone")))

    assert messenger.metadata_calls == 0


def test_delete_failure_still_warns() -> None:
    messenger = FakeMessenger(fail_delete=True)
    asyncio.run(_router(messenger).handle(_message("https://spam.example")))

    assert messenger.deleted == []
    assert [message.text for _, message in messenger.texts] == ["@bob, links are not allowed here!"]


def test_link_command_is_moderated_before_dispatch() -> None:
    messenger = FakeMessenger()
    asyncio.run(_router(messenger).handle(_message("/menu example.com")))

    assert messenger.deleted == [(GROUP, 7)]
    assert len(messenger.texts) == 1


def test_warning_falls_back_to_sender_id() -> None:
    messenger = FakeMessenger()
    asyncio.run(_router(messenger).handle(_message("example.com", name="")))

    assert messenger.texts[0][1].text == "@42, links are not allowed here!"
