"""Telegram client factory for groupwarden.

We explicitly manage the client's lifecycle (connect/authorize/run) so it is
obvious when the session is created and when it ends. This avoids implicit
context-manager behavior for a long-running bot.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from telethon import TelegramClient
from telethon.sessions import StringSession

import settings


def build_client() -> TelegramClient:
    """Create a Telethon client from environment variables.

    We read API_ID/API_HASH via python-dotenv to keep secrets out of the repo.
    SESSION_STRING, when set, replaces the local .session file so the bot can
    be deployed without copying session files around. Otherwise the session
    name defaults to "groupwarden".
    """

    load_dotenv()

    api_id = os.getenv("API_ID")
    api_hash = os.getenv("API_HASH")
    session_name = os.getenv("SESSION_NAME", "groupwarden")
    session_string = os.getenv("SESSION_STRING")

    # Fail fast on missing credentials to avoid an ambiguous login prompt.
    if not api_id or not api_hash:
        raise RuntimeError("Missing API_ID or API_HASH in environment")

    session = StringSession(session_string) if session_string else session_name
    logging.getLogger(__name__).info(
        "Initializing Telegram client (%s session)",
        "string" if session_string else "file",
    )

    # sequential_updates keeps one inbound event in flight at a time.
    return TelegramClient(
        session,
        int(api_id),
        api_hash,
        connection_retries=settings.CONNECTION_RETRIES,
        retry_delay=settings.CONNECTION_RETRY_DELAY,
        auto_reconnect=settings.AUTO_RECONNECT,
        sequential_updates=True,
    )
