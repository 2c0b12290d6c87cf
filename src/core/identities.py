"""Helpers for working with chat and participant identifiers."""

from __future__ import annotations

USER_PREFIX = "user_id:"


def is_group_chat_id(chat_id: str) -> bool:
    """Return True for marked ids of groups, supergroups, and channels.

    Telegram marks private chats with positive ids and every multi-user chat
    with a negative one (``-<chat>`` or ``-100<channel>``).
    """

    value = str(chat_id).strip()
    if not value.startswith("-"):
        return False
    return value[1:].isdigit()


def normalize_user_id(raw_id: object) -> str:
    """Return the canonical participant id for comparisons.

    Accepts bare ids, ``user_id:<id>`` keys, and ids carrying a
    ``:<session>`` suffix.
    """

    value = str(raw_id).strip()
    if value.startswith(USER_PREFIX):
        value = value[len(USER_PREFIX) :]
    base, _, _ = value.partition(":")
    return base.strip()


def mention_label(sender_id: str, sender_name: str = "") -> str:
    """Return the handle used after ``@`` when tagging a sender."""

    label = sender_name.strip().lstrip("@")
    return label or normalize_user_id(sender_id)
