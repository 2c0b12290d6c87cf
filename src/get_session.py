"""Interactive authorization for the bot account.

Supports QR pairing (rendered in the terminal) and phone-code login with an
optional 2FA password. ``login`` returns a session string so deployments can
run from ``SESSION_STRING`` instead of a session file.
"""

import asyncio
import logging
import os
from getpass import getpass

import qrcode
from dotenv import load_dotenv
from telethon import TelegramClient, errors
from telethon.sessions import StringSession

load_dotenv()

LOGGER = logging.getLogger(__name__)

LOGIN_METHODS = {"1": "qr", "2": "phone"}
QR_ATTEMPTS = 3
QR_TIMEOUT_SECONDS = 120
CODE_ATTEMPTS = 3


def _print_qr(url: str) -> None:
    qr = qrcode.QRCode(border=1)
    qr.add_data(url)
    qr.make(fit=True)
    qr.print_ascii(invert=True)


def _resolve_2fa_password() -> str:
    return os.getenv("2FA") or getpass("2FA password: ")


async def _authorize_with_qr(client: TelegramClient) -> None:
    qr = await client.qr_login()
    for attempt in range(1, QR_ATTEMPTS + 1):
        print("")
        print("Scan with Telegram > Settings > Devices > Link Desktop Device")
        _print_qr(qr.url)
        try:
            await qr.wait(timeout=QR_TIMEOUT_SECONDS)
            return
        except asyncio.TimeoutError:
            LOGGER.warning("QR code expired (attempt %s of %s)", attempt, QR_ATTEMPTS)
            await qr.recreate()
    raise RuntimeError("QR login timed out")


async def _authorize_with_phone(client: TelegramClient) -> None:
    phone = os.getenv("PHONE") or input("Phone number (international format): ").strip()
    await client.send_code_request(phone)
    for _ in range(CODE_ATTEMPTS):
        code = input("Login code: ").strip()
        try:
            await client.sign_in(phone=phone, code=code)
            return
        except errors.PhoneCodeInvalidError:
            print("That code is not valid, try again.")
    raise RuntimeError("Too many invalid login codes")


def _pick_login_method() -> str:
    method = (os.getenv("LOGIN_METHOD") or "").strip().lower()
    if method in LOGIN_METHODS.values():
        return method
    while True:
        print("")
        print("Login methods:")
        print("[1] QR code")
        print("[2] Phone code")
        print("[3] Exit")
        choice = input("groupwarden > ").strip()
        if choice == "3":
            raise SystemExit(0)
        if choice in LOGIN_METHODS:
            return LOGIN_METHODS[choice]
        print("Invalid option. Please choose 1, 2, or 3.")


async def authorize(client: TelegramClient) -> None:
    """Sign the client in unless its session is already authorized."""

    if await client.is_user_authorized():
        return

    method = _pick_login_method()
    LOGGER.info("Authorizing with %s login", method)
    try:
        if method == "phone":
            await _authorize_with_phone(client)
        else:
            await _authorize_with_qr(client)
    except errors.SessionPasswordNeededError:
        await client.sign_in(password=_resolve_2fa_password())


def export_session_string(client: TelegramClient) -> str:
    return StringSession.save(client.session)


async def login(client: TelegramClient) -> str:
    """Authorize and return the session string to store for deployment."""

    await client.connect()
    try:
        await authorize(client)
        me = await client.get_me()
        LOGGER.info("Logged in as: %s", getattr(me, "first_name", None) or me.id)
        return export_session_string(client)
    finally:
        await client.disconnect()


if __name__ == "__main__":
    from client import build_client

    async def _main() -> str:
        return await login(build_client())

    print(asyncio.run(_main()))
