"""Application entry point for the groupwarden bot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from art import tprint
from dotenv import load_dotenv
from telethon import errors, events

import settings
from adapters.json_policy_store import JsonPolicyStore
from adapters.liveness import create_app, serve
from adapters.telegram_mapper import build_inbound
from adapters.telegram_messenger import TelegramMessenger
from client import build_client
from core.config import QrAssetConfig
from core.reconnect import ReconnectPolicy
from core.replies import build_catalog
from core.router import MessageRouter
from get_session import authorize, login

NAME = "GROUPWARDEN"
FONT = "tarty-1"
DISPLAY_NAME = "Group Warden bot"

# Raised by Telethon once the session can no longer be used.
LOGGED_OUT_ERRORS = (
    errors.AuthKeyUnregisteredError,
    errors.SessionRevokedError,
    errors.SessionExpiredError,
    errors.UserDeactivatedError,
)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = settings.resolve_path(file_cfg.get("path", "logs/groupwarden.log"))
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    # Telethon is chatty at INFO; keep its connection noise out of our logs.
    logging.getLogger("telethon").setLevel(max(level, logging.WARNING))


def _log_unhandled(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Last-resort handler: log stray task errors without stopping the bot."""

    logging.getLogger(__name__).error(
        "Unhandled asyncio error: %s",
        context.get("message", "unknown"),
        exc_info=context.get("exception"),
    )


async def _reconnect(client, policy: ReconnectPolicy) -> bool:
    """Reconnect with backoff; return False when the supervisor should stop."""

    logger = logging.getLogger(__name__)
    attempt = 0
    while policy.allows(attempt):
        delay = policy.delay_for(attempt)
        attempt += 1
        logger.warning("Reconnecting in %.1fs (attempt %s)...", delay, attempt)
        await asyncio.sleep(delay)
        try:
            await client.connect()
        except OSError:
            logger.exception("Reconnect attempt %s failed", attempt)
            continue
        if not await client.is_user_authorized():
            logger.error("Session is no longer authorized; run `groupwarden login` again")
            return False
        logger.info("✅ Reconnected successfully!")
        return True

    logger.error("Giving up after %s reconnect attempts", attempt)
    return False


async def _supervise(client, policy: ReconnectPolicy) -> None:
    """Keep the client running until it is logged out or retries run out."""

    logger = logging.getLogger(__name__)
    while True:
        try:
            await client.run_until_disconnected()
        except LOGGED_OUT_ERRORS:
            logger.error("Logged out by Telegram; not reconnecting")
            return
        except OSError:
            logger.exception("Connection lost")
        if not await _reconnect(client, policy):
            return


async def _serve_bot(client, router: MessageRouter) -> None:
    logger = logging.getLogger(__name__)
    asyncio.get_running_loop().set_exception_handler(_log_unhandled)

    health_task: Optional[asyncio.Task] = None
    if settings.HTTP_ENABLED:
        port = int(os.getenv("PORT") or settings.HTTP_PORT)
        health_task = asyncio.create_task(serve(create_app(DISPLAY_NAME), settings.HTTP_HOST, port))

    # All filtering happens in the router.
    @client.on(events.NewMessage(incoming=True))
    async def handler(event) -> None:
        try:
            inbound = await build_inbound(event.message)
            if inbound is None:
                return
            await router.handle_batch([inbound])
        except Exception:
            logger.exception("Error while processing message")

    policy = ReconnectPolicy(
        max_restarts=settings.MAX_RESTARTS,
        base_delay=settings.RESTART_BASE_DELAY,
        max_delay=settings.RESTART_MAX_DELAY,
    )
    logger.info("✅ Connected successfully! Listening for incoming messages...")
    try:
        await _supervise(client, policy)
    finally:
        await router.wait_for_persistence()
        if health_task is not None:
            health_task.cancel()
            await asyncio.gather(health_task, return_exceptions=True)
        if client.is_connected():
            await client.disconnect()


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("🔒 Starting bot...")

    # Load antilink settings once; a bad file never blocks startup.
    policy_store = JsonPolicyStore(settings.POLICY_PATH)
    policy_store.load()
    replies = build_catalog(settings.REPLIES)

    try:
        client = build_client()
        client.loop.run_until_complete(client.connect())
        client.loop.run_until_complete(authorize(client))
    except Exception:
        logger.critical("Failed to initialize bot", exc_info=True)
        raise SystemExit(1)

    if os.getenv("APP_ENV") == "production" and not os.getenv("SESSION_STRING"):
        logger.info("Run `groupwarden login` and save the output as SESSION_STRING for deployments.")

    messenger = TelegramMessenger(client, parse_mode=settings.PARSE_MODE)
    router = MessageRouter(
        messenger=messenger,
        policy_store=policy_store,
        replies=replies,
        qr_asset=QrAssetConfig(path=settings.QR_IMAGE_PATH, caption=settings.QR_CAPTION),
        confirm_after_persist=settings.CONFIRM_AFTER_PERSIST,
    )
    logger.info("%s commands are registered", len(router.commands))

    try:
        client.loop.run_until_complete(_serve_bot(client, router))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


def _setup() -> None:
    _print_banner()
    from frontend.app import ConfigPanelApp

    ConfigPanelApp().run()


async def _login_session() -> str:
    # The client is built inside the loop that will drive it.
    return await login(build_client())


def _login() -> None:
    _print_banner()
    _configure_logging()
    try:
        session_string = asyncio.run(_login_session())
    except RuntimeError as exc:
        logging.getLogger(__name__).critical("Login failed: %s", exc)
        raise SystemExit(1)
    print("")
    print("Save this as the SESSION_STRING environment variable:")
    print(session_string)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="groupwarden")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("config", help="Launch the config TUI")
    subparsers.add_parser("login", help="Authorize and print a session string for deployments")

    args = parser.parse_args(argv)
    if args.command == "config":
        _setup()
        return
    if args.command == "login":
        _login()
        return
    _run()


if __name__ == "__main__":
    main()
