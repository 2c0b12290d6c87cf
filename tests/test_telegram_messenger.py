from __future__ import annotations

import asyncio

import pytest
from telethon.tl.types import (
    ChannelParticipant,
    ChannelParticipantAdmin,
    ChannelParticipantCreator,
    ChatParticipantAdmin,
)

from adapters.telegram_messenger import TelegramMessenger, participant_role
from core.models import Mention, OutgoingImage, OutgoingText


def _blank(cls):
    return cls.__new__(cls)


class DummyUser:
    def __init__(self, user_id: int, participant) -> None:
        self.id = user_id
        self.participant = participant


class DummyMe:
    def __init__(self, user_id: int) -> None:
        self.user_id = user_id


class FakeClient:
    def __init__(self, users=()) -> None:
        self.users = list(users)
        self.sent: list[tuple] = []
        self.files: list[tuple] = []
        self.deleted: list[tuple] = []
        self.get_me_calls = 0

    async def send_message(self, entity, message, **kwargs) -> None:
        self.sent.append((entity, message, kwargs))

    async def send_file(self, entity, file, **kwargs) -> None:
        self.files.append((entity, file.name, file.read(), kwargs))

    async def delete_messages(self, entity, message_ids) -> None:
        self.deleted.append((entity, message_ids))

    async def iter_participants(self, entity, filter=None):
        for user in self.users:
            yield user

    async def get_me(self, input_peer: bool = False):
        self.get_me_calls += 1
        return DummyMe(999)


def test_participant_roles() -> None:
    assert participant_role(_blank(ChannelParticipantCreator)) == "superadmin"
    assert participant_role(_blank(ChannelParticipantAdmin)) == "admin"
    assert participant_role(_blank(ChatParticipantAdmin)) == "admin"
    assert participant_role(_blank(ChannelParticipant)) is None
    assert participant_role(None) is None


def test_send_text_renders_mentions() -> None:
    client = FakeClient()
    messenger = TelegramMessenger(client)
    message = OutgoingText("@bob hi", (Mention("42", "bob"),))

    asyncio.run(messenger.send_text("-100", message))

    entity, body, kwargs = client.sent[0]
    assert entity == -100
    assert body == "[@bob](tg://user?id=42) hi"
    assert kwargs["parse_mode"] == "md"
    assert kwargs["link_preview"] is False


def test_send_image_names_the_upload() -> None:
    client = FakeClient()
    messenger = TelegramMessenger(client, parse_mode="html")

    asyncio.run(messenger.send_image("-100", OutgoingImage(b"png", "Scan", "qr.png")))

    assert client.files == [(-100, "qr.png", b"png", {"caption": "Scan"})]


def test_delete_message() -> None:
    client = FakeClient()
    asyncio.run(TelegramMessenger(client).delete_message("-100", 7))

    assert client.deleted == [(-100, [7])]


def test_fetch_group_metadata_maps_roles() -> None:
    client = FakeClient(
        [DummyUser(1, _blank(ChannelParticipantCreator)), DummyUser(2, _blank(ChannelParticipantAdmin))]
    )

    metadata = asyncio.run(TelegramMessenger(client).fetch_group_metadata("-100"))

    assert metadata.chat_id == "-100"
    assert metadata.find("1").role == "superadmin"
    assert metadata.find("2").is_admin
    assert metadata.find("3") is None


def test_self_id_is_cached() -> None:
    client = FakeClient()
    messenger = TelegramMessenger(client)

    async def scenario() -> tuple[str, str]:
        return await messenger.self_id(), await messenger.self_id()

    assert asyncio.run(scenario()) == ("999", "999")
    assert client.get_me_calls == 1


def test_unknown_parse_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        TelegramMessenger(FakeClient(), parse_mode="rst")
