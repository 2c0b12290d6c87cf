"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the router.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from core.models import InboundMessage


def _display_name(sender: Any) -> str:
    username = getattr(sender, "username", None)
    if isinstance(username, str) and username:
        return username
    first = getattr(sender, "first_name", None)
    if isinstance(first, str) and first:
        return first
    title = getattr(sender, "title", None)
    if isinstance(title, str) and title:
        return title
    return ""


def _extract_text(message: Any) -> str:
    # raw_text covers both plain messages and media captions.
    for candidate in (getattr(message, "raw_text", None), getattr(message, "message", None)):
        if isinstance(candidate, str) and candidate:
            return candidate
    return ""


async def build_inbound(message: Any) -> Optional[InboundMessage]:
    """Build a core InboundMessage from a Telethon Message.

    Returns None for events without a message or message id.
    """

    if message is None or not getattr(message, "id", None):
        return None

    chat_id = str(message.chat_id)
    is_group = bool(getattr(message, "is_group", False))
    raw_sender_id = getattr(message, "sender_id", None)
    # Private chats address the sender by the chat itself.
    sender_id = str(raw_sender_id) if is_group and raw_sender_id is not None else chat_id

    sender = getattr(message, "sender", None)
    if sender is None and hasattr(message, "get_sender"):
        sender = await message.get_sender()

    return InboundMessage(
        chat_id=chat_id,
        sender_id=sender_id,
        sender_name=_display_name(sender),
        message_id=int(message.id),
        is_group=is_group,
        text=_extract_text(message),
        from_self=bool(getattr(message, "out", False)),
    )


async def build_batch(messages: Iterable[Any]) -> list[InboundMessage]:
    """Map a delivered batch (for example an album), dropping empty events."""

    inbound: list[InboundMessage] = []
    for message in messages:
        context = await build_inbound(message)
        if context is not None:
            inbound.append(context)
    return inbound
