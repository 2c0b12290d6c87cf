from __future__ import annotations

import pytest

from adapters.mention_formatting import render_text
from core.models import Mention, OutgoingText


def test_markdown_mentions_become_user_links() -> None:
    message = OutgoingText("@bob, links are not allowed here!", (Mention("42", "bob"),))

    assert render_text(message, "markdown") == "[@bob](tg://user?id=42), links are not allowed here!"


def test_markdown_brackets_in_label_are_replaced() -> None:
    message = OutgoingText("hi @[x]", (Mention("1", "[x]"),))

    assert render_text(message, "markdown") == "hi [@(x)](tg://user?id=1)"


def test_html_escapes_text_and_links_mentions() -> None:
    message = OutgoingText("<b> @bob & co", (Mention("42", "bob"),))

    assert render_text(message, "html") == '&lt;b&gt; <a href="tg://user?id=42">@bob</a> &amp; co'


def test_missing_mention_token_leaves_text_unchanged() -> None:
    message = OutgoingText("no tag here", (Mention("42", "bob"),))

    assert render_text(message, "markdown") == "no tag here"


def test_unknown_mode_raises() -> None:
    with pytest.raises(ValueError):
        render_text(OutgoingText("x"), "rst")


def test_markdown_delimiters_in_label_are_neutralized() -> None:
    message = OutgoingText("@**bold__`x`~~||, hi", (Mention("7", "**bold__`x`~~||"),))

    assert render_text(message, "markdown") == "[@*bold_'x'~|](tg://user?id=7), hi"
