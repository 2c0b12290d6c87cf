"""Link detection used by the antilink policy (core domain)."""

from __future__ import annotations

import re

# Optional scheme, a domain-like token with at least one embedded dot, then
# any path, query, or fragment characters. Word characters are ASCII only.
URL_PATTERN = re.compile(
    r"((?:https?|ftp)://)?"
    r"([\w.-]+(?:\.[\w.-]+)+)"
    r"([\w\-._~:/?#\[\]@!$&'()*+,;=.]+)?",
    re.IGNORECASE | re.ASCII,
)

MIN_URL_LENGTH = 5


def contains_url(text: str) -> bool:
    """Return True when the text looks like it carries a URL.

    Short strings and strings without a dot are rejected before the regex
    runs. Names like "file.tar.gz" still match; no network check is made.
    """

    if len(text) < MIN_URL_LENGTH or "." not in text:
        return False
    return URL_PATTERN.search(text) is not None
