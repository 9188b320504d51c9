"""Markdown section reader with reading history and reading-list tracking."""

__version__ = "0.1.0"
