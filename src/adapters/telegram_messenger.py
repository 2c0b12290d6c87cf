"""Telegram messenger adapter.

Implements the core MessengerPort with Telethon so the router never sees
Telethon types.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Optional

from telethon.tl.types import (
    ChannelParticipantAdmin,
    ChannelParticipantCreator,
    ChannelParticipantsAdmins,
    ChatParticipantAdmin,
    ChatParticipantCreator,
)

from adapters.mention_formatting import TELETHON_PARSE_MODES, render_text
from core.models import GroupMetadata, OutgoingImage, OutgoingText, Participant

LOGGER = logging.getLogger(__name__)


def participant_role(participant: Any) -> Optional[str]:
    """Map Telegram participant types onto "superadmin"/"admin"/None."""

    if isinstance(participant, (ChannelParticipantCreator, ChatParticipantCreator)):
        return "superadmin"
    if isinstance(participant, (ChannelParticipantAdmin, ChatParticipantAdmin)):
        return "admin"
    return None


class TelegramMessenger:
    """Messenger adapter that talks to Telegram through a Telethon client."""

    def __init__(self, client, parse_mode: str = "markdown") -> None:
        if parse_mode not in TELETHON_PARSE_MODES:
            raise ValueError(f"Unsupported parse mode: {parse_mode}")
        self._client = client
        self._parse_mode = parse_mode
        self._self_id: Optional[str] = None

    async def send_text(self, chat_id: str, message: OutgoingText) -> None:
        body = render_text(message, self._parse_mode)
        await self._client.send_message(
            int(chat_id),
            body,
            parse_mode=TELETHON_PARSE_MODES[self._parse_mode],
            link_preview=False,
        )

    async def send_image(self, chat_id: str, image: OutgoingImage) -> None:
        # Telethon infers the upload type from the file name.
        buffer = io.BytesIO(image.data)
        buffer.name = image.filename
        await self._client.send_file(int(chat_id), buffer, caption=image.caption)

    async def delete_message(self, chat_id: str, message_id: int) -> None:
        await self._client.delete_messages(int(chat_id), [message_id])

    async def fetch_group_metadata(self, chat_id: str) -> GroupMetadata:
        """Return the group's admins with their roles.

        Members missing from the roster are treated as regular participants,
        so only the admin list is fetched.
        """

        participants: list[Participant] = []
        async for user in self._client.iter_participants(int(chat_id), filter=ChannelParticipantsAdmins):
            role = participant_role(getattr(user, "participant", None))
            participants.append(Participant(user_id=str(user.id), role=role))
        LOGGER.debug("Fetched %s admins for %s", len(participants), chat_id)
        return GroupMetadata(chat_id=str(chat_id), participants=tuple(participants))

    async def self_id(self) -> str:
        # The logged-in identity does not change for the lifetime of a client.
        if self._self_id is None:
            me = await self._client.get_me(input_peer=True)
            self._self_id = str(me.user_id)
        return self._self_id
