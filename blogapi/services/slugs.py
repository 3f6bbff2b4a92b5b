"""Slug generation for blog posts.

Examples:
    >>> slugify("Hello World")
    'hello-world'
    >>> slugify("The Art of Clean Code!")
    'the-art-of-clean-code'
    >>> slugify("Hello - World")
    'hello---world'
"""

from __future__ import annotations

import re
import time

FALLBACK_SLUG = "post"
MAX_BASE_LENGTH = 200

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Turn a title into a URL-safe slug.

    Rules:
        - Lowercase
        - Drop everything except a-z, 0-9, whitespace and hyphens
        - Collapse each whitespace run into one hyphen; hyphens typed in
          the title are kept as they are
        - Whitespace at either end is dropped rather than turned into a hyphen
        - Cut to 200 characters so the timestamp suffix still fits the column
        - Fallback to 'post' if nothing survives
    """
    slug = _INVALID_CHARS.sub("", title.lower()).strip()
    if len(slug) > MAX_BASE_LENGTH:
        slug = slug[:MAX_BASE_LENGTH].rstrip()
    slug = _WHITESPACE.sub("-", slug)
    return slug or FALLBACK_SLUG


def current_millis() -> int:
    return time.time_ns() // 1_000_000


def with_timestamp_suffix(slug: str, millis: int | None = None) -> str:
    """Append ``-<epoch millis>`` to break a collision."""
    if millis is None:
        millis = current_millis()
    return f"{slug}-{millis}"
