"""Shared constants for the Textual UI."""

from __future__ import annotations

from pathlib import Path

ACCENT_GREEN = "#25D366"
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_PATH = PROJECT_ROOT / "config.json"
DEFAULT_POLICY_PATH = "antilink_config.json"
