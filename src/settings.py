"""Static configuration for groupwarden.

All user-editable settings (policy file, assets, connection, logging, reply
texts) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def resolve_path(path: str) -> str:
    """Resolve relative paths against the project root."""

    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Antilink settings file; rewritten in full on every /antilink on|off.
_policy = _CONFIG.get("policy", {})
POLICY_PATH = resolve_path(_policy.get("path", "antilink_config.json"))
# When true, confirmations wait until the settings file is written.
CONFIRM_AFTER_PERSIST = bool(_policy.get("confirm_after_persist", False))

# Image sent by /qr; a missing file only produces an apology reply.
_assets = _CONFIG.get("assets", {})
QR_IMAGE_PATH = resolve_path(_assets.get("qr_image", "paytmqr.jpg"))
QR_CAPTION = _assets.get("qr_caption", "Paytm QR Code")

# Telethon retries a dropped connection on its own; the supervisor in app.py
# restarts the connection once those retries are exhausted.
_connection = _CONFIG.get("connection", {})
CONNECTION_RETRIES = int(_connection.get("retries", 5))
CONNECTION_RETRY_DELAY = int(_connection.get("retry_delay", 1))
AUTO_RECONNECT = bool(_connection.get("auto_reconnect", True))
MAX_RESTARTS = int(_connection.get("max_restarts", 0))
RESTART_BASE_DELAY = float(_connection.get("restart_base_delay", 1.0))
RESTART_MAX_DELAY = float(_connection.get("restart_max_delay", 60.0))

# Liveness endpoint for uptime checks. PORT in the environment wins.
_http = _CONFIG.get("http", {})
HTTP_ENABLED = bool(_http.get("enabled", True))
HTTP_HOST = _http.get("host", "0.0.0.0")
HTTP_PORT = int(_http.get("port", 3000))

# "markdown" or "html"; decides how mentions are rendered.
PARSE_MODE = _CONFIG.get("messages", {}).get("parse_mode", "markdown")

# Optional overrides for the static command texts, keyed by command name.
REPLIES = _CONFIG.get("replies", {})

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
