"""Section metadata generation for a content directory.

Produces ``section-metadata.json``: for every Markdown file under the
content root, its front matter, its sections (without content) and its
word count and reading time totals, keyed by path relative to the root.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import frontmatter

from ..markdown import parse_markdown_into_sections
from ..reading.estimate import AVERAGE_READING_SPEED_WPM, estimate_document_reading_time

logger = logging.getLogger(__name__)

SECTION_METADATA_FILE = "section-metadata.json"

PathLike = Union[str, Path]


def build_section_metadata(
    file_path: PathLike,
    content_root: PathLike,
    reading_speed: int = AVERAGE_READING_SPEED_WPM,
) -> Optional[dict[str, Any]]:
    """Build the metadata entry for a single Markdown file.

    Args:
        file_path: Markdown file to process
        content_root: Directory that entry paths are made relative to
        reading_speed: Words per minute for the reading time estimate

    Returns:
        Metadata dictionary, or None if the file could not be processed
    """
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            post = frontmatter.load(f)

        sections = parse_markdown_into_sections(post.content)
        total_word_count = sum(section.word_count for section in sections)

        return {
            "path": file_path.relative_to(content_root).as_posix(),
            "sections": [section.to_metadata() for section in sections],
            "totalWordCount": total_word_count,
            "estimatedReadingTime": estimate_document_reading_time(
                total_word_count, reading_speed
            ),
            "title": post.metadata.get("title") or file_path.stem,
            "frontmatter": post.metadata,
        }
    except Exception:
        logger.exception("Error processing %s", file_path)
        return None


def generate_section_metadata(
    content_root: PathLike,
    output: Optional[PathLike] = None,
    reading_speed: int = AVERAGE_READING_SPEED_WPM,
) -> dict[str, dict[str, Any]]:
    """Build metadata for every Markdown file and write it as JSON.

    Hidden files and directories are skipped. Files that fail to process
    are logged and left out.

    Args:
        content_root: Directory scanned recursively for ``*.md`` files
        output: Destination file, defaults to ``section-metadata.json``
            inside the content root
        reading_speed: Words per minute for the reading time estimates

    Returns:
        Metadata keyed by relative path
    """
    content_root = Path(content_root)
    output = Path(output) if output else content_root / SECTION_METADATA_FILE

    files = sorted(
        path
        for path in content_root.rglob("*.md")
        if not any(part.startswith(".") for part in path.relative_to(content_root).parts)
    )
    logger.info("Found %d markdown files to process", len(files))

    metadata = {}
    for file_path in files:
        entry = build_section_metadata(file_path, content_root, reading_speed)
        if entry:
            metadata[entry["path"]] = entry

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(metadata, indent=2, default=str), encoding="utf-8")
    logger.info("Generated section metadata for %d files", len(metadata))
    return metadata
