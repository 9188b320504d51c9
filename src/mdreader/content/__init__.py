"""Build-time generators for the content directory."""

from .index import (
    ContentCategory,
    ContentFile,
    ContentScan,
    extract_directory_structure,
    generate_content_index,
    scan_content_directory,
)
from .metadata import build_section_metadata, generate_section_metadata

__all__ = [
    "ContentCategory",
    "ContentFile",
    "ContentScan",
    "build_section_metadata",
    "extract_directory_structure",
    "generate_content_index",
    "generate_section_metadata",
    "scan_content_directory",
]
