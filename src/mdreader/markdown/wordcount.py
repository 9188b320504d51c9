"""Word counting for Markdown text.

Markdown syntax is stripped before counting so that formatting markers,
link targets and code never inflate the totals.
"""

import re
from typing import Any

FENCED_CODE_PATTERN = re.compile(r"```.*?```", re.DOTALL)
INLINE_CODE_PATTERN = re.compile(r"`[^`]*`")
HEADING_MARKER_PATTERN = re.compile(r"^#{1,6}\s+", re.MULTILINE)
IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\([^)]+\)")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]+\)")
STRONG_PATTERN = re.compile(r"(\*\*|__)(.*?)\1")
EMPHASIS_PATTERN = re.compile(r"(\*|_)(.*?)\1")
HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


def remove_markdown_formatting(text: str) -> str:
    """Strip Markdown syntax, keeping only readable text.

    Removes fenced code blocks, inline code, heading markers, images,
    link syntax (the label is kept), bold/italic markers (the text is
    kept) and raw HTML tags.

    Args:
        text: Markdown source

    Returns:
        Plain text suitable for word counting
    """
    clean = FENCED_CODE_PATTERN.sub("", text)
    clean = INLINE_CODE_PATTERN.sub("", clean)
    clean = HEADING_MARKER_PATTERN.sub("", clean)
    # Images go before links, otherwise "![alt](src)" leaves "!alt" behind
    clean = IMAGE_PATTERN.sub("", clean)
    clean = LINK_PATTERN.sub(r"\1", clean)
    clean = STRONG_PATTERN.sub(r"\2", clean)
    clean = EMPHASIS_PATTERN.sub(r"\2", clean)
    clean = HTML_TAG_PATTERN.sub("", clean)
    return clean


def count_words(text: Any) -> int:
    """Count the words in a Markdown string.

    Args:
        text: Markdown source. Anything that is not a non-empty string
              counts as zero words.

    Returns:
        Number of whitespace-separated tokens after formatting removal

    Example:
        >>> count_words("# Title\\n\\nSome **bold** text")
        4
        >>> count_words(None)
        0
    """
    if not text or not isinstance(text, str):
        return 0

    return len(remove_markdown_formatting(text).split())
