"""Caller-owned cache of parsed sections.

Avoids re-parsing documents whose content has not changed. Entries are
keyed by document and validated against a hash of the Markdown source;
a mismatch replaces the entry. The cache holds at most ``max_entries``
documents and evicts the least recently used one when full.
"""

import hashlib
from collections import OrderedDict
from typing import Callable, Optional

from .sections import Section, parse_markdown_into_sections

DEFAULT_MAX_ENTRIES = 128


def content_hash(markdown: str) -> str:
    """SHA-256 hex digest of the document text."""
    return hashlib.sha256(markdown.encode("utf-8")).hexdigest()


class SectionCache:
    """Maps document keys to ``(content hash, sections)`` pairs."""

    def __init__(
        self,
        parser: Optional[Callable[[str], list[Section]]] = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        """Initialize the cache.

        Args:
            parser: Function used on a cache miss
                    (default: parse_markdown_into_sections)
            max_entries: Number of documents kept before eviction

        Raises:
            ValueError: If max_entries is not positive
        """
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        self._parser = parser or parse_markdown_into_sections
        self.max_entries = max_entries
        self._entries: OrderedDict[str, tuple[str, list[Section]]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get_sections(self, key: str, markdown: str) -> list[Section]:
        """Return sections for a document, parsing only when it changed.

        Args:
            key: Document identity (usually its path)
            markdown: Current document text

        Returns:
            A fresh list of the parsed sections
        """
        markdown = markdown if isinstance(markdown, str) else ""
        digest = content_hash(markdown)

        entry = self._entries.get(key)
        if entry is not None and entry[0] == digest:
            self.hits += 1
            self._entries.move_to_end(key)
            return list(entry[1])

        self.misses += 1
        sections = self._parser(markdown)
        self._entries[key] = (digest, sections)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return list(sections)

    def invalidate(self, key: str) -> bool:
        """Drop one document. Returns True if it was cached."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every cached document."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0
