"""Group privilege resolution (core domain)."""

from __future__ import annotations

import logging

from core.identities import is_group_chat_id, normalize_user_id
from core.models import NOT_PRIVILEGED, AdminStatus
from core.ports import MessengerPort

LOGGER = logging.getLogger(__name__)


async def resolve_admin_status(messenger: MessengerPort, chat_id: str, sender_id: str) -> AdminStatus:
    """Report whether the sender and the bot hold admin rights in a group.

    Metadata is fetched live on every call. Any failure is logged and
    reported as "not privileged" so moderation never crashes the router.
    """

    if not is_group_chat_id(chat_id):
        return NOT_PRIVILEGED

    try:
        metadata = await messenger.fetch_group_metadata(chat_id)
        bot_id = normalize_user_id(await messenger.self_id())
        sender = metadata.find(normalize_user_id(sender_id))
        bot = metadata.find(bot_id)
    except Exception:
        LOGGER.exception("Failed to resolve admin status in %s for %s", chat_id, sender_id)
        return NOT_PRIVILEGED

    return AdminStatus(
        is_sender_admin=bool(sender and sender.is_admin),
        is_bot_admin=bool(bot and bot.is_admin),
    )
