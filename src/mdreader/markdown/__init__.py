"""Markdown segmentation, slugs and word counting."""

from .cache import SectionCache, content_hash
from .sections import (
    INTRODUCTION_ID,
    INTRODUCTION_TITLE,
    Mode,
    ParseState,
    Section,
    finish,
    match_heading,
    parse_markdown_into_sections,
    step,
    total_word_count,
)
from .slug import SlugRegistry, slugify
from .wordcount import count_words, remove_markdown_formatting

__all__ = [
    "SectionCache",
    "content_hash",
    "INTRODUCTION_ID",
    "INTRODUCTION_TITLE",
    "Mode",
    "ParseState",
    "Section",
    "finish",
    "match_heading",
    "parse_markdown_into_sections",
    "step",
    "total_word_count",
    "SlugRegistry",
    "slugify",
    "count_words",
    "remove_markdown_formatting",
]
