from __future__ import annotations

import pytest

from core.replies import MENU_TEXT, STATIC_COMMANDS, build_catalog


def test_default_catalog_covers_every_static_command() -> None:
    catalog = build_catalog(None)

    for name in STATIC_COMMANDS:
        assert catalog.text_for(f"/{name}")
    assert catalog.text_for("/menu") == MENU_TEXT


def test_overrides_apply_by_command_name() -> None:
    catalog = build_catalog({"/packs": "Packs soon", "rb": "Boost soon", "unknown": "x", "dd": ""})

    assert catalog.text_for("/packs") == "Packs soon"
    assert catalog.text_for("/rb") == "Boost soon"
    assert catalog.text_for("/dd") == build_catalog({}).text_for("/dd")


def test_unknown_command_raises() -> None:
    with pytest.raises(KeyError):
        build_catalog({}).text_for("/qr")
