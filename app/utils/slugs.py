from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def derive_slug(title: str) -> str:
    """
    URL-safe slug from a title. Idempotent: derive_slug(derive_slug(x)) == derive_slug(x).

    >>> derive_slug("Hello, World!")
    'hello-world'
    """
    s = (title or "").lower()
    s = _DISALLOWED.sub("", s)
    s = _WHITESPACE.sub("-", s.strip())
    s = _HYPHENS.sub("-", s)
    return s.strip("-")
