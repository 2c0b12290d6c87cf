"""State container for config loading and dirty tracking."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from core.policy import normalize_policies


@dataclass
class ConfigState:
    data: dict[str, Any] | None = None
    policies: dict[str, dict[str, bool]] = field(default_factory=dict)
    dirty: bool = False
    error: str | None = None


def read_policy_file(path: Path) -> tuple[dict[str, dict[str, bool]], str | None]:
    """Return the normalized policies and an error message for the header.

    A missing file is an empty mapping without an error.
    """

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}, None
    except (OSError, ValueError) as exc:
        return {}, f"{path.name} error: {exc}"
    return normalize_policies(raw), None
