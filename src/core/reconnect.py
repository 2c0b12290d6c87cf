"""Reconnect policy for the client supervisor (core domain)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReconnectPolicy:
    """Exponential backoff with an optional restart cap.

    ``max_restarts == 0`` means the supervisor never gives up.
    """

    max_restarts: int = 0
    base_delay: float = 1.0
    max_delay: float = 60.0

    def allows(self, attempt: int) -> bool:
        if self.max_restarts <= 0:
            return True
        return attempt < self.max_restarts

    def delay_for(self, attempt: int) -> float:
        if attempt < 0:
            raise ValueError("attempt must be non-negative")
        return min(self.base_delay * (2 ** attempt), self.max_delay)
