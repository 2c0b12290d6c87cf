"""Core message router.

The router enforces a strict order for each inbound message:
1) Drop bot-authored echoes and messages without text
2) Apply the per-group antilink policy (delete + warn non-admins)
3) Dispatch the leading command token to its reply action

Each step is a guard returning HANDLED or CONTINUE, so the first guard that
handles a message ends its processing. This module is integration-agnostic;
it only relies on the messenger and policy store ports.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Optional

from core.config import QrAssetConfig
from core.identities import mention_label
from core.models import InboundMessage, Mention, OutgoingImage, OutgoingText
from core.ports import MessengerPort, PolicyStorePort
from core.privilege import resolve_admin_status
from core.replies import STATIC_COMMANDS, ReplyCatalog
from core.url_detector import contains_url

LOGGER = logging.getLogger(__name__)

GROUP_ONLY_NOTICE = "This command can only be used in group chats."
QR_FAILURE_NOTICE = "Sorry, couldn't send the QR code image."
CHECK_FAILURE_NOTICE = "Sorry, couldn't check admin status due to an error."
ANTILINK_FAILURE_NOTICE = "Sorry, an error occurred while processing the antilink command."
ANTILINK_ENABLED_NOTICE = "✅ Antilink has been enabled. Links from non-admins will be deleted."
ANTILINK_DISABLED_NOTICE = "❎ Antilink has been disabled. Everyone can send links."
ANTILINK_USAGE = "Usage: `/antilink on` or `/antilink off`"
PERSIST_FAILURE_NOTICE = "Settings changed, but saving them to disk failed."


class Outcome(Enum):
    HANDLED = "handled"
    CONTINUE = "continue"


Guard = Callable[[InboundMessage], Awaitable[Outcome]]
CommandAction = Callable[[InboundMessage, Optional[str]], Awaitable[None]]


def parse_command(text: str) -> tuple[str, Optional[str]]:
    """Return the lower-cased command token and its first argument."""

    tokens = text.lower().split()
    if not tokens:
        return "", None
    argument = tokens[1] if len(tokens) > 1 else None
    return tokens[0], argument


class MessageRouter:
    """Moderates links and answers the fixed command vocabulary."""

    def __init__(
        self,
        messenger: MessengerPort,
        policy_store: PolicyStorePort,
        replies: ReplyCatalog,
        qr_asset: QrAssetConfig,
        confirm_after_persist: bool = False,
    ) -> None:
        self._messenger = messenger
        self._policy_store = policy_store
        self._replies = replies
        self._qr_asset = qr_asset
        self._confirm_after_persist = confirm_after_persist
        self._pending_writes: set[asyncio.Task] = set()

        self._guards: tuple[Guard, ...] = (
            self._ignore_unusable,
            self._enforce_link_policy,
            self._dispatch_command,
        )
        self._commands: dict[str, CommandAction] = {
            f"/{name}": self._send_static for name in STATIC_COMMANDS
        }
        self._commands.update(
            {
                "/qr": self._send_qr,
                "/check": self._check_admin,
                "/antilink": self._toggle_antilink,
            }
        )

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(self._commands)

    async def handle_batch(self, messages: Iterable[InboundMessage]) -> None:
        """Handle messages one after another in delivery order."""

        for message in messages:
            try:
                await self.handle(message)
            except Exception:
                LOGGER.exception("Error while handling message %s in %s", message.message_id, message.chat_id)

    async def handle(self, message: InboundMessage) -> bool:
        """Run the guards in order; return True when one handled the message."""

        for guard in self._guards:
            if await guard(message) is Outcome.HANDLED:
                return True
        return False

    async def wait_for_persistence(self) -> None:
        """Wait for background policy writes started by /antilink."""

        if not self._pending_writes:
            return
        await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def _ignore_unusable(self, message: InboundMessage) -> Outcome:
        if message.from_self or not message.text:
            return Outcome.HANDLED
        return Outcome.CONTINUE

    async def _enforce_link_policy(self, message: InboundMessage) -> Outcome:
        if not message.is_group:
            return Outcome.CONTINUE
        if not self._policy_store.get(message.chat_id):
            return Outcome.CONTINUE
        if not contains_url(message.text):
            return Outcome.CONTINUE

        status = await resolve_admin_status(self._messenger, message.chat_id, message.sender_id)
        if status.is_sender_admin:
            LOGGER.debug("Link from admin %s in %s allowed", message.sender_id, message.chat_id)
            return Outcome.HANDLED

        LOGGER.info("Antilink triggered in %s by %s. Deleting message.", message.chat_id, message.sender_id)
        if not status.is_bot_admin:
            LOGGER.warning("Bot is not an admin in %s; deletion will likely fail", message.chat_id)
        try:
            await self._messenger.delete_message(message.chat_id, message.message_id)
        except Exception:
            LOGGER.exception("Failed to delete message %s in %s", message.message_id, message.chat_id)

        label = mention_label(message.sender_id, message.sender_name)
        await self._messenger.send_text(
            message.chat_id,
            OutgoingText(
                text=f"@{label}, links are not allowed here!",
                mentions=(Mention(message.sender_id, label),),
            ),
        )
        return Outcome.HANDLED

    async def _dispatch_command(self, message: InboundMessage) -> Outcome:
        command, argument = parse_command(message.text)
        action = self._commands.get(command)
        if action is None:
            return Outcome.CONTINUE
        LOGGER.info("Command %s from %s in %s", command, message.sender_id, message.chat_id)
        await action(message, argument)
        return Outcome.HANDLED

    async def _reply(self, message: InboundMessage, text: str) -> None:
        await self._messenger.send_text(message.chat_id, OutgoingText(text=text))

    async def _reply_mentioning_sender(self, message: InboundMessage, template: str) -> None:
        label = mention_label(message.sender_id, message.sender_name)
        await self._messenger.send_text(
            message.chat_id,
            OutgoingText(
                text=template.format(mention=f"@{label}"),
                mentions=(Mention(message.sender_id, label),),
            ),
        )

    async def _send_static(self, message: InboundMessage, argument: Optional[str]) -> None:
        command, _ = parse_command(message.text)
        await self._reply(message, self._replies.text_for(command))

    async def _send_qr(self, message: InboundMessage, argument: Optional[str]) -> None:
        path = Path(self._qr_asset.path)
        try:
            data = await asyncio.to_thread(path.read_bytes)
            await self._messenger.send_image(
                message.chat_id,
                OutgoingImage(data=data, caption=self._qr_asset.caption, filename=path.name),
            )
        except Exception:
            LOGGER.exception("Error sending QR code from %s", path)
            await self._reply(message, QR_FAILURE_NOTICE)

    async def _check_admin(self, message: InboundMessage, argument: Optional[str]) -> None:
        if not message.is_group:
            await self._reply(message, GROUP_ONLY_NOTICE)
            return
        try:
            status = await resolve_admin_status(self._messenger, message.chat_id, message.sender_id)
            if status.is_sender_admin:
                template = "✅ Yes, {mention} is an admin in this group."
            else:
                template = "❌ No, {mention} is not an admin in this group."
            await self._reply_mentioning_sender(message, template)
        except Exception:
            LOGGER.exception("Error during /check in %s", message.chat_id)
            await self._reply(message, CHECK_FAILURE_NOTICE)

    async def _toggle_antilink(self, message: InboundMessage, argument: Optional[str]) -> None:
        if not message.is_group:
            await self._reply(message, GROUP_ONLY_NOTICE)
            return
        try:
            status = await resolve_admin_status(self._messenger, message.chat_id, message.sender_id)
            if not status.is_sender_admin:
                await self._reply_mentioning_sender(
                    message, "❌ Sorry {mention}, only group admins can use this command."
                )
                return

            if argument == "on":
                enabled, notice = True, ANTILINK_ENABLED_NOTICE
            elif argument == "off":
                enabled, notice = False, ANTILINK_DISABLED_NOTICE
            else:
                await self._reply(message, ANTILINK_USAGE)
                return

            self._policy_store.set(message.chat_id, enabled)
            LOGGER.info("Antilink %s for %s by %s", argument, message.chat_id, message.sender_id)
            if not await self._persist_policy():
                notice = PERSIST_FAILURE_NOTICE
            await self._reply(message, notice)
        except Exception:
            LOGGER.exception("Error processing /antilink in %s", message.chat_id)
            await self._reply(message, ANTILINK_FAILURE_NOTICE)

    async def _persist_policy(self) -> bool:
        """Write the policy file; only awaited when confirmations wait on disk."""

        if self._confirm_after_persist:
            return await self._policy_store.persist()

        task = asyncio.create_task(self._policy_store.persist())
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)
        return True
