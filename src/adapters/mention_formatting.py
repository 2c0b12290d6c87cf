"""Shared outgoing-text formatting helpers.

Keeping formatting here prevents drift between adapters and keeps mentions
consistent regardless of the configured parse mode.
"""

from __future__ import annotations

import html
from typing import Callable

from core.models import OutgoingText

# Telethon's parser names for each supported mode.
TELETHON_PARSE_MODES = {"markdown": "md", "html": "html"}


def _user_link(user_id: str) -> str:
    return f"tg://user?id={user_id}"


def _render(
    message: OutgoingText,
    escape: Callable[[str], str],
    link: Callable[[str, str], str],
) -> str:
    """Escape plain segments and replace each ``@label`` with a user link."""

    text = message.text
    pieces: list[str] = []
    cursor = 0
    for mention in message.mentions:
        token = f"@{mention.label}"
        index = text.find(token, cursor)
        if index < 0:
            continue
        pieces.append(escape(text[cursor:index]))
        pieces.append(link(token, mention.user_id))
        cursor = index + len(token)
    pieces.append(escape(text[cursor:]))
    return "".join(pieces)


# Telethon markdown has no escape character; delimiters in names are reduced
# to single characters the parser ignores.
_MARKDOWN_LABEL_REPLACEMENTS = (
    ("**", "*"),
    ("__", "_"),
    ("~~", "~"),
    ("||", "|"),
    ("`", "'"),
    ("[", "("),
    ("]", ")"),
)


def _markdown_label(label: str) -> str:
    for token, replacement in _MARKDOWN_LABEL_REPLACEMENTS:
        while token in label:
            label = label.replace(token, replacement)
    return label


def _markdown_link(label: str, user_id: str) -> str:
    safe_label = _markdown_label(label)
    return f"[{safe_label}]({_user_link(user_id)})"


def _html_link(label: str, user_id: str) -> str:
    return f'<a href="{html.escape(_user_link(user_id))}">{html.escape(label)}</a>'


def render_text(message: OutgoingText, mode: str) -> str:
    """Return the message body formatted for the requested parse mode."""

    if mode == "markdown":
        return _render(message, lambda value: value, _markdown_link)
    if mode == "html":
        return _render(message, html.escape, _html_link)
    raise ValueError(f"Unsupported parse mode: {mode}")
