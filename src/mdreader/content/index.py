"""Content index generation.

Walks a content directory and records its category tree (one category per
sub-directory) and the Markdown files in it. Writes ``index.json`` with the
full tree and ``directory-structure.json`` with categories only.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from ..utils import snake_to_title
from .metadata import SECTION_METADATA_FILE

logger = logging.getLogger(__name__)

INDEX_FILE = "index.json"
DIRECTORY_STRUCTURE_FILE = "directory-structure.json"

IGNORED_FILES = frozenset({SECTION_METADATA_FILE, INDEX_FILE, DIRECTORY_STRUCTURE_FILE})


@dataclass
class ContentFile:
    """Markdown file in the index."""

    path: str  # relative to the content root, forward slashes

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path}


@dataclass
class ContentCategory:
    """Directory in the index."""

    id: str
    name: str
    categories: list["ContentCategory"] = field(default_factory=list)
    files: list[ContentFile] = field(default_factory=list)
    total_file_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "categories": [category.to_dict() for category in self.categories],
            "files": [f.to_dict() for f in self.files],
        }


@dataclass
class ContentScan:
    """Result of scanning a content directory."""

    categories: list[ContentCategory] = field(default_factory=list)
    files: list[ContentFile] = field(default_factory=list)
    total_file_size: int = 0  # bytes

    @property
    def file_count(self) -> int:
        """Markdown files at every depth."""

        def _count(categories: list[ContentCategory]) -> int:
            return sum(len(c.files) + _count(c.categories) for c in categories)

        return len(self.files) + _count(self.categories)

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": [category.to_dict() for category in self.categories],
            "files": [f.to_dict() for f in self.files],
        }


def _is_ignored(entry: Path) -> bool:
    return entry.name.startswith(".") or entry.name in IGNORED_FILES


def scan_content_directory(root: Union[str, Path], base_path: str = "") -> ContentScan:
    """Recursively scan a directory into categories and files.

    Hidden entries, generated JSON files and ``index.md`` are skipped.
    A missing directory yields an empty scan.

    Args:
        root: Directory to scan
        base_path: Relative path of ``root`` within the content root

    Returns:
        The scanned tree
    """
    root = Path(root)
    result = ContentScan()
    if not root.is_dir():
        return result

    for entry in sorted(root.iterdir()):
        if _is_ignored(entry):
            continue

        relative = f"{base_path}/{entry.name}" if base_path else entry.name

        if entry.is_dir():
            sub = scan_content_directory(entry, relative)
            result.categories.append(
                ContentCategory(
                    id=entry.name,
                    name=snake_to_title(entry.name, keep_acronyms=False),
                    categories=sub.categories,
                    files=sub.files,
                    total_file_size=sub.total_file_size,
                )
            )
            result.total_file_size += sub.total_file_size
        elif entry.is_file() and entry.suffix == ".md":
            if entry.stem == "index":
                continue
            result.files.append(ContentFile(path=relative))
            result.total_file_size += entry.stat().st_size

    return result


def extract_directory_structure(categories: list[ContentCategory]) -> list[dict[str, Any]]:
    """Category tree without files."""
    return [
        {
            "id": category.id,
            "name": category.name,
            "categories": extract_directory_structure(category.categories),
        }
        for category in categories
    ]


def generate_content_index(content_root: Union[str, Path]) -> ContentScan:
    """Scan a content directory and write its index files.

    The content directory is created if it does not exist.

    Returns:
        The scanned tree
    """
    content_root = Path(content_root)
    if not content_root.exists():
        logger.info("Content directory not found, creating %s", content_root)
        content_root.mkdir(parents=True, exist_ok=True)

    result = scan_content_directory(content_root)

    (content_root / INDEX_FILE).write_text(
        json.dumps(result.to_dict(), indent=2), encoding="utf-8"
    )
    (content_root / DIRECTORY_STRUCTURE_FILE).write_text(
        json.dumps(extract_directory_structure(result.categories), indent=2), encoding="utf-8"
    )
    logger.info(
        "Indexed %d files in %d categories", result.file_count, len(result.categories)
    )
    return result
