"""JSON file policy store adapter.

Implements the core PolicyStorePort on top of a flat JSON object mapping
chat ids to ``{"enabled": bool}``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from core.policy import InMemoryPolicyStore, normalize_policies

LOGGER = logging.getLogger(__name__)


class JsonPolicyStore(InMemoryPolicyStore):
    """Thin JSON-file wrapper that satisfies the PolicyStorePort contract."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self._path = Path(path)
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, dict[str, bool]]:
        """Read the settings file once; never fails startup.

        A missing file starts with empty settings. Unreadable or malformed
        files are logged and also yield empty settings.
        """

        if not self._path.exists():
            LOGGER.info("%s not found, starting with empty settings.", self._path.name)
            self._policies = {}
            return self.snapshot()

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            LOGGER.exception("Failed to load antilink settings from %s", self._path)
            self._policies = {}
            return self.snapshot()

        self._policies = normalize_policies(raw)
        LOGGER.info("Antilink settings loaded for %s chats.", len(self._policies))
        return self.snapshot()

    async def persist(self) -> bool:
        """Overwrite the file with the full mapping; log and return False on error."""

        payload = json.dumps(self.snapshot(), indent=2)
        async with self._write_lock:
            try:
                await asyncio.to_thread(self._write, payload)
            except OSError:
                LOGGER.exception("Failed to save antilink settings to %s", self._path)
                return False
        return True

    def _write(self, payload: str) -> None:
        directory = self._path.parent
        if str(directory):
            directory.mkdir(parents=True, exist_ok=True)
        self._path.write_text(payload + "\n", encoding="utf-8")
