from __future__ import annotations

import asyncio

from adapters.telegram_mapper import build_batch, build_inbound


class DummySender:
    def __init__(self, username=None, first_name=None, title=None) -> None:
        self.username = username
        self.first_name = first_name
        self.title = title


class DummyMessage:
    def __init__(
        self,
        *,
        chat_id: int,
        message_id,
        text: str,
        sender_id: "int | None" = None,
        is_group: bool = False,
        out: bool = False,
        sender: "DummySender | None" = None,
        fetched_sender: "DummySender | None" = None,
    ) -> None:
        self.chat_id = chat_id
        self.id = message_id
        self.raw_text = text
        self.sender_id = sender_id
        self.is_group = is_group
        self.out = out
        self.sender = sender
        self._fetched_sender = fetched_sender
        self.get_sender_calls = 0

    async def get_sender(self):
        self.get_sender_calls += 1
        return self._fetched_sender


def test_group_message_uses_sender_id() -> None:
    message = DummyMessage(
        chat_id=-100123,
        message_id=10,
        text="hello",
        sender_id=42,
        is_group=True,
        sender=DummySender(username="alice"),
    )

    inbound = asyncio.run(build_inbound(message))

    assert inbound is not None
    assert inbound.chat_id == "-100123"
    assert inbound.sender_id == "42"
    assert inbound.sender_name == "alice"
    assert inbound.message_id == 10
    assert inbound.is_group is True
    assert inbound.from_self is False


def test_private_message_uses_chat_id_as_sender() -> None:
    message = DummyMessage(
        chat_id=42,
        message_id=3,
        text="/menu",
        sender_id=42,
        fetched_sender=DummySender(first_name="Al"),
    )

    inbound = asyncio.run(build_inbound(message))

    assert inbound.sender_id == "42"
    assert inbound.sender_name == "Al"
    assert inbound.is_group is False
    assert message.get_sender_calls == 1


def test_outgoing_messages_are_flagged() -> None:
    message = DummyMessage(chat_id=-5, message_id=1, text="x", is_group=True, out=True, sender=DummySender())

    inbound = asyncio.run(build_inbound(message))

    assert inbound.from_self is True
    assert inbound.sender_name == ""


def test_missing_message_id_is_dropped() -> None:
    assert asyncio.run(build_inbound(None)) is None
    assert asyncio.run(build_inbound(DummyMessage(chat_id=1, message_id=None, text="x"))) is None


def test_batch_keeps_order_and_drops_empty_events() -> None:
    first = DummyMessage(chat_id=-1, message_id=1, text="a", sender_id=5, is_group=True, sender=DummySender())
    second = DummyMessage(chat_id=-1, message_id=2, text="b", sender_id=6, is_group=True, sender=DummySender())

    batch = asyncio.run(build_batch([first, None, second]))

    assert [item.message_id for item in batch] == [1, 2]
