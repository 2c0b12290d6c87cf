"""Ports (interfaces) used by the router.

Ports define the minimal contracts for messaging and policy storage adapters
so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import GroupMetadata, OutgoingImage, OutgoingText


class MessengerPort(Protocol):
    """Messaging-client operations required by the router."""

    async def send_text(self, chat_id: str, message: OutgoingText) -> None:
        ...

    async def send_image(self, chat_id: str, image: OutgoingImage) -> None:
        ...

    async def delete_message(self, chat_id: str, message_id: int) -> None:
        ...

    async def fetch_group_metadata(self, chat_id: str) -> GroupMetadata:
        ...

    async def self_id(self) -> str:
        ...


class PolicyStorePort(Protocol):
    """Per-group antilink flags with an explicit persist step."""

    def load(self) -> dict[str, dict[str, bool]]:
        ...

    def get(self, chat_id: str) -> bool:
        ...

    def set(self, chat_id: str, enabled: bool) -> None:
        ...

    def snapshot(self) -> dict[str, dict[str, bool]]:
        ...

    async def persist(self) -> bool:
        ...
