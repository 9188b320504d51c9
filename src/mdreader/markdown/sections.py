"""Markdown segmentation into heading-bounded sections.

Documents are split on level-1 (``#``) and level-2 (``##``) headings.
Deeper headings stay inside their parent section, and nothing inside a
fenced code block is ever treated as a heading.

The parser is a small state machine: ``step`` moves a ``ParseState``
forward by one line and ``finish`` flushes whatever is still open, so
``parse_markdown_into_sections`` is just a ``reduce`` over the lines.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import reduce
from typing import Any, Optional

from .slug import SlugRegistry, slugify
from .wordcount import count_words

INTRODUCTION_ID = "introduction"
INTRODUCTION_TITLE = "Introduction"
CODE_FENCE = "```"

# Checked in order, level 1 first
HEADING_PATTERNS = (
    (1, re.compile(r"^#\s+(.+)$")),
    (2, re.compile(r"^##\s+(.+)$")),
)


@dataclass
class Section:
    """A heading-bounded reading unit."""

    id: str
    title: str
    content: str
    level: int  # 0 = introduction, 1 = "#", 2 = "##"
    word_count: int = 0

    @property
    def is_introduction(self) -> bool:
        """Check if this is the pseudo-section before the first heading."""
        return self.level == 0

    def to_metadata(self) -> dict:
        """Lightweight representation without the content."""
        return {
            "id": self.id,
            "title": self.title,
            "level": self.level,
            "wordCount": self.word_count,
        }


class Mode(str, Enum):
    """Where the parser is in the document."""

    INTRO = "intro"
    IN_SECTION = "in_section"


@dataclass
class ParseState:
    """Parser state threaded through the lines of a document.

    ``buffer`` holds the lines of the open section (or of the intro text
    while no heading has been seen). It belongs to the state and is
    extended in place until the next heading replaces the state.
    """

    mode: Mode = Mode.INTRO
    buffer: list[str] = field(default_factory=list)
    in_code_block: bool = False
    section_id: str = INTRODUCTION_ID
    title: str = INTRODUCTION_TITLE
    level: int = 0
    sections: list[Section] = field(default_factory=list)
    slugs: SlugRegistry = field(default_factory=SlugRegistry)


def match_heading(line: str) -> Optional[tuple[int, str]]:
    """Return ``(level, title)`` if the line is a section heading."""
    for level, pattern in HEADING_PATTERNS:
        match = pattern.match(line)
        if match:
            return level, match.group(1).strip()
    return None


def split_lines(markdown: str) -> list[str]:
    """Split a document into lines, ignoring the final newline."""
    lines = markdown.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _buffer_content(buffer: list[str]) -> str:
    return "".join(f"{line}\n" for line in buffer)


def _flush(state: ParseState) -> list[Section]:
    """Close the open section or intro text and return all sections."""
    content = _buffer_content(state.buffer)

    if state.mode is Mode.IN_SECTION:
        state.sections.append(
            Section(
                id=state.section_id,
                title=state.title,
                content=content,
                level=state.level,
                word_count=count_words(content),
            )
        )
    elif content.strip():
        state.sections.append(
            Section(
                id=state.slugs.claim(INTRODUCTION_ID),
                title=INTRODUCTION_TITLE,
                content=content,
                level=0,
                word_count=count_words(content),
            )
        )

    return state.sections


def step(state: ParseState, raw_line: str) -> ParseState:
    """Advance the parser by one line.

    Code fences are checked before headings, so heading-like lines
    inside a fenced block never open a new section.
    """
    line = raw_line.rstrip()

    if line.strip().startswith(CODE_FENCE):
        state.buffer.append(line)
        return replace(state, in_code_block=not state.in_code_block)

    if state.in_code_block:
        state.buffer.append(line)
        return state

    heading = match_heading(line)
    if heading is None:
        state.buffer.append(line)
        return state

    level, title = heading
    sections = _flush(state)
    return ParseState(
        mode=Mode.IN_SECTION,
        buffer=["#" * level + " " + title],
        section_id=state.slugs.claim(slugify(title)),
        title=title,
        level=level,
        sections=sections,
        slugs=state.slugs,
    )


def finish(state: ParseState) -> list[Section]:
    """Flush the final state and return the completed section list."""
    return _flush(state)


def parse_markdown_into_sections(markdown: Any) -> list[Section]:
    """Split a Markdown document into navigable sections.

    Args:
        markdown: Raw Markdown text

    Returns:
        Sections in document order. Empty or non-string input gives an
        empty list; text without headings gives a single introduction.

    Example:
        >>> [s.id for s in parse_markdown_into_sections("# A\\nbody\\n## B\\nmore\\n")]
        ['a', 'b']
    """
    if not markdown or not isinstance(markdown, str):
        return []

    return finish(reduce(step, split_lines(markdown), ParseState()))


def total_word_count(sections: list[Section]) -> int:
    """Sum the word counts of a section list."""
    return sum(section.word_count for section in sections)
