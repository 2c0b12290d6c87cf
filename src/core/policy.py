"""In-memory antilink policy state (core domain)."""

from __future__ import annotations

import logging
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)


def normalize_policies(raw: Any) -> dict[str, dict[str, bool]]:
    """Coerce a decoded settings document into ``{chat_id: {"enabled": bool}}``.

    Entries that are not objects are dropped; a non-object root yields an
    empty mapping.
    """

    if not isinstance(raw, Mapping):
        if raw is not None:
            LOGGER.error("Antilink settings root must be an object, got %s", type(raw).__name__)
        return {}

    policies: dict[str, dict[str, bool]] = {}
    for chat_id, entry in raw.items():
        if not isinstance(entry, Mapping):
            LOGGER.warning("Dropping malformed antilink entry for %s", chat_id)
            continue
        policies[str(chat_id)] = {"enabled": bool(entry.get("enabled", False))}
    return policies


class InMemoryPolicyStore:
    """Policy store without a backing file; satisfies PolicyStorePort."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._policies = normalize_policies(initial or {})

    def load(self) -> dict[str, dict[str, bool]]:
        return self.snapshot()

    def get(self, chat_id: str) -> bool:
        entry = self._policies.get(str(chat_id))
        return bool(entry and entry.get("enabled", False))

    def set(self, chat_id: str, enabled: bool) -> None:
        self._policies[str(chat_id)] = {"enabled": bool(enabled)}

    def snapshot(self) -> dict[str, dict[str, bool]]:
        return {chat_id: dict(entry) for chat_id, entry in self._policies.items()}

    async def persist(self) -> bool:
        return True
