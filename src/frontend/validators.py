"""Validation helpers for config editing."""

from __future__ import annotations

from dataclasses import dataclass

from core.identities import is_group_chat_id


@dataclass
class ChatIdInfo:
    normalized: str | None
    kind: str
    error: str | None = None


def parse_chat_id(raw_value: str) -> ChatIdInfo:
    """Validate a chat id typed into the Groups tab.

    Accepts ``-100123`` or ``chat_id:-100123``; only group ids (negative)
    can carry an antilink policy.
    """

    value = raw_value.strip()
    if value.startswith("chat_id:"):
        value = value[len("chat_id:") :].strip()
    if not value:
        return ChatIdInfo(None, "invalid", "chat id is required")

    try:
        normalized = str(int(value))
    except ValueError:
        return ChatIdInfo(None, "invalid", "chat id must be numeric")

    if not is_group_chat_id(normalized):
        return ChatIdInfo(None, "private", "antilink only applies to group chats (negative ids)")
    kind = "supergroup" if normalized.startswith("-100") else "group"
    return ChatIdInfo(normalized, kind)


def parse_port(raw_value: str) -> int | None:
    """Return a TCP port or None when the value is not a valid port."""

    value = raw_value.strip()
    if not value.isdigit():
        return None
    port = int(value)
    if not 0 < port < 65536:
        return None
    return port
