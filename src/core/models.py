"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

ADMIN_ROLES = frozenset({"admin", "superadmin"})


@dataclass(frozen=True)
class InboundMessage:
    """Minimal message context used by the router."""

    chat_id: str
    sender_id: str
    sender_name: str
    message_id: int
    is_group: bool
    text: str
    from_self: bool = False


@dataclass(frozen=True)
class AdminStatus:
    """Privilege of the sender and of the bot within one group."""

    is_sender_admin: bool
    is_bot_admin: bool


NOT_PRIVILEGED = AdminStatus(is_sender_admin=False, is_bot_admin=False)


@dataclass(frozen=True)
class Participant:
    """A group member and its role ("admin", "superadmin" or None)."""

    user_id: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


@dataclass(frozen=True)
class GroupMetadata:
    """Live roster of a group as reported by the messaging client."""

    chat_id: str
    participants: Tuple[Participant, ...] = ()

    def find(self, user_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None


@dataclass(frozen=True)
class Mention:
    """A user tagged in an outgoing text as ``@label``."""

    user_id: str
    label: str


@dataclass(frozen=True)
class OutgoingText:
    text: str
    mentions: Tuple[Mention, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OutgoingImage:
    data: bytes
    caption: str = ""
    filename: str = "image.jpg"
