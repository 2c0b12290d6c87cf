"""Static reply texts for the command vocabulary.

Defaults carry the store catalog; config.json may override any text by
command name without touching Python.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Mapping

LOGGER = logging.getLogger(__name__)

_ORDER_LINK = "https://wa.me/+919175339978?text=Hi,+WALL-E+I+need+MLBB+Recharge%0AID%3D%0AServer%3D"

MENU_TEXT = (
    "Welcome to Franco Store! ❤\n\n"
    "Here are our available commands:\n\n"
    "*Commands:*\n"
    "💠 /menu - View all commands\n"
    "💠 /packs - View all diamond packs and prices\n"
    "💠 /eventp - View diamond packs for event tasks\n"
    "💠 /dd - View double diamond packs\n"
    "💠 /rb - MLBB Rank Boosting Service\n"
    "💠 /qr - Get Paytm QR code\n\n"
    "*Group Admin Commands:*\n"
    "💠 /check - Check if you are an admin (Group only)\n"
    "💠 /antilink on - Disable links for non-admins\n"
    "💠 /antilink off - Allow links for everyone\n\n"
    "Need help?\n"
    "Just send any of these commands to get started!"
)

PACKS_TEXT = (
    "❤FRANCO STORE❤\n\n"
    "   via id server recharge\n\n"
    "20% off on bulk for regular customer💠\n\n"
    "SMALL PACKS 🥹🤧\n\n"
    "5💎= 15₹(Recharge any amount task)\n"
    "11💎= 20₹\n"
    "14💎= 30₹\n"
    "22💎= 40₹\n"
    "28💎= 55₹\n"
    "42💎= 70₹\n"
    "56💎= 85₹ (50💎 task)\n"
    "86💎= 105₹(50💎 task)\n"
    "112💎= 155₹(100💎 task)\n"
    "172💎= 210₹(100💎 task)\n"
    "257💎= 315₹\n"
    "279💎= 360₹(250💎 task)\n"
    "344💎= 420₹(250💎 task)\n"
    "429💎= 525₹\n"
    "514💎= 630₹\n"
    "619💎= 735₹(500💎 task)\n"
    "706💎= 840₹\n"
    "1050💎= 1300₹\n"
    "1412💎= 1650₹\n"
    "1926💎= 2280₹\n"
    "2195💎= 2500₹\n"
    "3688💎= 4100₹\n"
    "5532💎= 6100₹\n"
    "6042💎= 7400₹\n"
    "9288💎= 10000₹\n"
    "20074💎= 25000₹\n\n"
    "TWILIGHT PASS 700₹💠❤\n"
    "WEEKLY PASS 130₹💠❤\n\n"
    "DM TO ORDER SMALL❤:\n"
    "Tap here to order👇🏻\n"
    f"{_ORDER_LINK}\n\n"
    "Gpay,Paytm,Binance: 7507579178\n\n"
    "Group 1\n"
    "https://chat.whatsapp.com/E1dG0eBGwRZDUA3crNmi4P"
)

DOUBLE_DIAMOND_TEXT = (
    "*Franco Store*💠❤\n\n"
    "*Double Diamond packs*💠💎\n"
    "*5 min process*\n"
    "*All packs can be bought for one time only*\n\n"
    "• 50+50 💎 = ₹100\n"
    "• 150+150 💎 = ₹240\n"
    "• 250+250 💎 = ₹350\n"
    "• 500+500 💎 = ₹660\n\n"
    "*How to Order:*\n"
    "Tap here to order 👇🏻\n"
    f"{_ORDER_LINK}"
)

EVENT_PACKS_TEXT = (
    "FRANCO STORE💠❤\n"
    "Alpha phase 2 Pre-Order💠❤\n\n"
    "Recommend Packs💠💎\n\n"
    "( Recharge any amount task)🧧\n"
    "5💎= 12₹\n\n"
    "(To Complete 50💎 task)🧧\n"
    "56💎= 85₹\n"
    "86💎= 110₹\n\n"
    "(To Complete 100💎 task)🧧\n"
    "112💎= 150₹\n"
    "172💎= 215₹\n"
    "Weekly Pass💎= 130₹\n\n"
    "(To Complete 250💎 task)🧧\n"
    "279💎= 350₹\n"
    "343💎= 455₹\n"
    "3 Weekly Pass💎= 385₹\n\n"
    "(To Complete 500💎 task)🧧\n"
    "600💎= 710₹\n\n"
    "(To Complete 1000💎 task)🧧\n"
    "1135💎= 1300₹\n\n"
    "Tap here to order👇🏻\n"
    "https://wa.me/+919175339978?text=Hi,+WALL-E+I+need+MLBB+Pre-Order+Recharge%0AID%3D%0AServer%3D"
)

RANK_BOOST_TEXT = (
    "FRANCO STORE💠❤\n\n"
    "MLBB RANK BOOSTING SERVICE💠\n\n"
    "EPIC TO LEGEND Rs 350|| 4 USDT 1 Day\n\n"
    "LEGEND  TO MYTHIC Rs 450 || 6 USDT 1 Day\n\n"
    "MYTHIC PLACEMENT  TO MYTHIC  HONOR Rs 750 || 9 USDT 2 Days\n\n"
    "MYTHIC HONOR  ABOVE Rs 35 || 0.50 USDT (Per star)\n\n"
    "MYTHIC GLORY ABOVE Rs 40 || 0.60 USDT (Per Star)\n\n"
    "IMMORTAL ABOVE Rs 50 || 0.80 USDT  (Per Star)\n\n"
    "NOTE: Account  will be boosted by Global Squads.\n\n"
    "Rules for boosting\n"
    "1) Only Facebook and Montoon login is accepted for mlbb boosting.\n\n"
    "2) Customer shouldn't login his/her account until boosting is done.\n\n"
    "3) incase if customer login n disturbs the booster for continuously boosting "
    "will be cancelled n there is no refund in this case.\n\n"
    "4) accounts Will be boosted by professionals with 80+ Winrates \n\n"
    "To place order dm \n"
    "https://Wa.me/+919175339978"
)


@dataclass(frozen=True)
class ReplyCatalog:
    """Texts sent verbatim by the static commands."""

    menu: str = MENU_TEXT
    packs: str = PACKS_TEXT
    dd: str = DOUBLE_DIAMOND_TEXT
    eventp: str = EVENT_PACKS_TEXT
    rb: str = RANK_BOOST_TEXT

    def text_for(self, command: str) -> str:
        """Return the text for "/menu", "/packs", ... or raise KeyError."""

        name = command.lstrip("/")
        if name not in STATIC_COMMANDS:
            raise KeyError(command)
        return getattr(self, name)


STATIC_COMMANDS = ("menu", "packs", "dd", "eventp", "rb")


def build_catalog(overrides: Mapping[str, str] | None) -> ReplyCatalog:
    """Apply config overrides on top of the default catalog."""

    catalog = ReplyCatalog()
    if not overrides:
        return catalog

    changes: dict[str, str] = {}
    for name, text in overrides.items():
        key = str(name).lstrip("/").lower()
        if key not in STATIC_COMMANDS:
            LOGGER.warning("Ignoring reply override for unknown command %r", name)
            continue
        if not isinstance(text, str) or not text:
            LOGGER.warning("Ignoring empty reply override for %r", name)
            continue
        changes[key] = text
    return replace(catalog, **changes)
