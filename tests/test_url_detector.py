from __future__ import annotations

from core.url_detector import contains_url


def test_detects_scheme_and_bare_domains() -> None:
    assert contains_url("check https://example.com/path?q=1")
    assert contains_url("join chat.whatsapp.com/abc now")
    assert contains_url("FTP://files.example.org")
    assert contains_url("visit google.com")


def test_rejects_short_or_dotless_text() -> None:
    assert not contains_url("a.b")
    assert not contains_url("")
    assert not contains_url("hello world, no links here")


def test_trailing_period_is_not_a_link() -> None:
    assert not contains_url("The end.")


def test_filenames_count_as_links() -> None:
    assert contains_url("send me file.tar.gz")


def test_non_ascii_words_are_not_domains() -> None:
    assert not contains_url("привет.мир")
    assert contains_url("привет example.com")
