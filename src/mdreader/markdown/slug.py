"""Heading slugs for section identifiers."""

import re
from typing import Any, Optional

NON_SLUG_CHARS = re.compile(r"[^0-9A-Za-z_\s-]")
WHITESPACE_RUN = re.compile(r"\s+")
HYPHEN_RUN = re.compile(r"-{2,}")

FALLBACK_SLUG = "section"


def slugify(text: Any) -> str:
    """Convert heading text into a URL-safe identifier.

    The result only contains lowercase ASCII letters, digits, underscores
    and single hyphens, so applying slugify twice gives the same value.

    Example:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("  --Spaced   out--  ")
        'spaced-out'
    """
    if not isinstance(text, str):
        return ""

    slug = NON_SLUG_CHARS.sub("", text.lower())
    slug = WHITESPACE_RUN.sub("-", slug)
    slug = HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


class SlugRegistry:
    """Hands out unique slugs within a single document.

    The first claim of a slug returns it unchanged, later claims get a
    numeric suffix: ``setup``, ``setup-1``, ``setup-2``.
    """

    def __init__(self, taken: Optional[set[str]] = None):
        self._taken: set[str] = set(taken or ())
        self._counters: dict[str, int] = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._taken

    def claim(self, base: str) -> str:
        """Reserve and return a unique slug derived from ``base``."""
        base = base or FALLBACK_SLUG
        if base not in self._taken:
            self._taken.add(base)
            return base

        counter = self._counters.get(base, 0)
        while True:
            counter += 1
            candidate = f"{base}-{counter}"
            if candidate not in self._taken:
                break

        self._counters[base] = counter
        self._taken.add(candidate)
        return candidate
